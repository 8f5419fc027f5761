"""
Implementation of VC-DomLEM rule induction: Abstract sequential covering
algorithm over the unions of decision classes.
"""

import logging
from typing import Iterable, List

import numpy as np

from rulelearn.approximations import Union, UnionType
from rulelearn.common import \
    AllowedNegativeObjectsType, ComputableRuleCharacteristics, \
    ElementaryConditionNotFoundError, Rule, RuleConditions, \
    RuleCoverageInformation, RuleInducerComponents, RuleSemantics, \
    RuleSetWithCharacteristics, RuleType, make_condition

logger = logging.getLogger(__name__)


def rule_semantics_of(union: Union) -> RuleSemantics:
    return (RuleSemantics.AT_LEAST if union.union_type is UnionType.AT_LEAST
            else RuleSemantics.AT_MOST)


class VCDomLEM:
    """Sequential covering rule induction, deferring to `components` for the
    exchangeable steps.

    For each union, rule conditions are grown greedily from the empty
    conjunction until the stopping condition holds, pruned, checked for
    minimality and accepted. Objects of the approximation covered by a rule
    need not be covered again. Finally, redundant rule conditions of the
    union are pruned as a set.

    Parameters
    -----
    components : RuleInducerComponents
        Defines the induction variant, see
        `concrete.CertainRuleInducerComponents` and
        `concrete.PossibleRuleInducerComponents`.
    """

    def __init__(self, components: RuleInducerComponents):
        if components.rule_type not in (RuleType.CERTAIN, RuleType.POSSIBLE):
            raise ValueError("Cannot induce rules of type {}."
                             .format(components.rule_type))
        self.components = components

    def approximation_of(self, union: Union) -> np.ndarray:
        """:return: The lower approximation of `union` for certain rules, the
            upper one for possible rules.
        """
        if self.components.rule_type is RuleType.CERTAIN:
            return union.lower_approximation
        return union.upper_approximation

    def objects_that_can_be_covered(self, union: Union,
                                    approximation: np.ndarray) -> np.ndarray:
        """:return: Objects that rules for `union` are allowed to cover."""
        allowed = self.components.allowed_negative_objects_type
        if allowed is AllowedNegativeObjectsType.POSITIVE_REGION:
            return union.positive_region
        if allowed is AllowedNegativeObjectsType.POSITIVE_AND_BOUNDARY_REGIONS:
            return np.union1d(
                np.union1d(union.positive_region, union.boundary),
                union.complementary_union.boundary)
        if allowed is AllowedNegativeObjectsType.ANY_REGION:
            return np.arange(union.information_table.n_objects)
        return approximation

    def make_rule_conditions(self, union: Union, approximation: np.ndarray,
                             objects_that_can_be_covered: np.ndarray
                             ) -> RuleConditions:
        """:return: Empty rule conditions for a rule of `union`."""
        return RuleConditions(
            union.information_table,
            positive_objects=union.objects,
            approximation_objects=approximation,
            elementary_conditions_base_objects=approximation,
            objects_that_can_be_covered=objects_that_can_be_covered,
            neutral_objects=union.neutral_objects,
            rule_type=self.components.rule_type,
            rule_semantics=rule_semantics_of(union))

    def find_rule_conditions(self, rule_conditions: RuleConditions,
                             to_cover: np.ndarray, seed: int = None
                             ) -> RuleConditions:
        """Inner loop: grow `rule_conditions` by the best condition until the
        stopping condition is satisfied.

        :param to_cover: Boolean mask of objects not yet covered by an
            accepted rule.
        :param seed: If given, only the evaluations of this object limit the
            conditions, so the rule always covers it.
        :raise ElementaryConditionNotFoundError: If all attributes are used
            and the stopping condition is still not satisfied.
        """

        # resolve methods once for performance
        get_best_condition = \
            self.components.condition_generator.get_best_condition
        is_stopping_condition_satisfied = \
            self.components.stopping_condition_checker \
            .is_stopping_condition_satisfied
        add_condition = rule_conditions.add_condition

        # algorithm
        if seed is None:
            considered = rule_conditions.covered_objects
            considered = considered[to_cover[considered]]
        else:
            considered = np.array([seed], dtype=int)
        while not is_stopping_condition_satisfied(rule_conditions):
            condition = get_best_condition(considered, rule_conditions)
            add_condition(condition)
            considered = considered[
                rule_conditions.condition_mask(condition)[considered]]
            if not len(considered):
                raise ElementaryConditionNotFoundError(
                    "Condition {} covers no object left to cover."
                    .format(condition))
        return rule_conditions

    def find_seeded_rule_conditions(self, union: Union,
                                    approximation: np.ndarray,
                                    can_be_covered: np.ndarray,
                                    to_cover: np.ndarray) -> RuleConditions:
        """Grow rule conditions from the first object left to cover, after
        growing from all of them failed.

        Without missing evaluations, the conditions of an object of a lower
        approximation on all attributes describe its dominance cone, which
        satisfies the stopping condition. Objects that cannot be covered
        this way, e.g. due to missing evaluations, are no longer to be
        covered.

        :return: The grown rule conditions, or None if the seed was given up.
        """
        seed = int(np.flatnonzero(to_cover)[0])
        rule_conditions = self.make_rule_conditions(union, approximation,
                                                    can_be_covered)
        try:
            return self.find_rule_conditions(rule_conditions, to_cover,
                                             seed=seed)
        except ElementaryConditionNotFoundError as error:
            logger.debug("object %d of %s cannot be covered: %s", seed,
                         union, error)
            to_cover[seed] = False
            return None

    def is_minimal(self, rule_conditions: RuleConditions,
                   accepted: List[RuleConditions]) -> bool:
        """:return: Whether to accept the pruned `rule_conditions`, see
            `RuleMinimalityChecker`.
        """
        return self.components.rule_minimality_checker.is_minimal(
            rule_conditions, accepted)

    def induce_rule_conditions(self, union: Union) -> List[RuleConditions]:
        """Main loop: cover the approximation of `union` by rule conditions.
        """
        approximation = self.approximation_of(union)
        can_be_covered = self.objects_that_can_be_covered(union,
                                                          approximation)

        # resolve methods once for performance
        make_rule_conditions = self.make_rule_conditions
        find_rule_conditions = self.find_rule_conditions
        prune_conditions = self.components.rule_conditions_pruner.prune
        is_minimal = self.is_minimal
        prune_set = self.components.rule_conditions_set_pruner.prune

        # main loop
        to_cover = np.zeros(union.information_table.n_objects, dtype=bool)
        to_cover[approximation] = True
        accepted: List[RuleConditions] = []
        while to_cover.any():
            rule_conditions = make_rule_conditions(union, approximation,
                                                   can_be_covered)
            try:
                rule_conditions = find_rule_conditions(rule_conditions,
                                                       to_cover)
            except ElementaryConditionNotFoundError:
                rule_conditions = self.find_seeded_rule_conditions(
                    union, approximation, can_be_covered, to_cover)
                if rule_conditions is None:
                    continue
            rule_conditions = prune_conditions(rule_conditions)
            if is_minimal(rule_conditions, accepted):
                accepted.append(rule_conditions)
                logger.debug("rule conditions for %s: %s", union,
                             rule_conditions)
            else:
                logger.debug("non-minimal rule conditions for %s dropped: %s",
                             union, rule_conditions)
            to_cover[rule_conditions.covered_objects] = False
        pruned = prune_set(accepted, approximation)
        logger.debug("%d of %d rule conditions for %s left after pruning",
                     len(pruned), len(accepted), union)
        return pruned

    def make_decisions(self, union: Union) -> list:
        """:return: Decision conditions of the rules of `union`, one per
            attribute of its limiting decision.
        """
        semantics = rule_semantics_of(union)
        attributes = union.information_table.attributes
        return [make_condition(semantics, attribute_index,
                               attributes[attribute_index], evaluation)
                for attribute_index, evaluation
                in sorted(union.limiting_decision.evaluations.items())]

    def generate_rules(self, unions: Iterable[Union]
                       ) -> RuleSetWithCharacteristics:
        """Induce rules for all `unions`, in order.

        :return: The rules with characteristics computed on the table of
            their union.
        """
        rule_type = self.components.rule_type
        rules, characteristics = [], []
        for union in unions:
            decisions = self.make_decisions(union)
            semantics = rule_semantics_of(union)
            for rule_conditions in self.induce_rule_conditions(union):
                rule = Rule(rule_type, rule_conditions.conditions, decisions,
                            semantics)
                rules.append(rule)
                characteristics.append(ComputableRuleCharacteristics(
                    RuleCoverageInformation(rule, union.information_table)))
            logger.debug("induced rules for %s", union)
        logger.info("induced %d %s rules", len(rules), rule_type.value)
        return RuleSetWithCharacteristics(rules, characteristics)
