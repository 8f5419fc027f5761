"""Dominance-based rough set approach and VC-DomLEM rule induction.

Limitations / Assumptions
=====

- decisions are compared by the preference of their attributes only, there is
  no separate ordering of decision classes
- rules are induced for unions with a single limiting decision each
- no approximate rules, only certain and possible ones
- dominance relations are kept as dense `n_objects x n_objects` matrices
- no weighting
- classification only, no regression
"""

__all__ = ['abstract', 'approximations', 'common', 'concrete', 'data',
           'dominance', 'extra', 'measures', 'predefined', 'tests', 'types',
           'util']
