"""
Dominance relation between objects, dominance cones, and the decision
distributions inside these cones.
"""

from typing import List

import numpy as np

from rulelearn.data import DecisionDistribution, InformationTable
from rulelearn.types import TRUE


def dominates(x: int, y: int, table: InformationTable) -> bool:
    """:return: Whether object `x` dominates object `y`, i.e. is at least as
        good on every active condition attribute.
    """
    fields = table.fields
    return all(fields[x, a].is_at_least_as_good_as(fields[y, a]) is TRUE
               for a in table.active_condition_attributes)


def is_dominated_by(x: int, y: int, table: InformationTable) -> bool:
    """:return: Whether object `x` is at most as good as object `y` on every
        active condition attribute.

    Without missing values this equals `dominates(y, x, table)`.
    """
    fields = table.fields
    return all(fields[x, a].is_at_most_as_good_as(fields[y, a]) is TRUE
               for a in table.active_condition_attributes)


def dominance_relation(table: InformationTable) -> np.ndarray:
    """:return: Boolean matrix `M` with `M[x, y] == dominates(x, y, table)`.
    """
    n = table.n_objects
    relation = np.ones((n, n), dtype=bool)
    for a in table.active_condition_attributes:
        column = table.fields[:, a]
        for x in range(n):
            field = column[x]
            relation[x] &= [field.is_at_least_as_good_as(other) is TRUE
                            for other in column]
    return relation


def inverted_dominance_relation(table: InformationTable) -> np.ndarray:
    """:return: Boolean matrix `N` with
        `N[x, y] == is_dominated_by(x, y, table)`.
    """
    n = table.n_objects
    relation = np.ones((n, n), dtype=bool)
    for a in table.active_condition_attributes:
        column = table.fields[:, a]
        for x in range(n):
            field = column[x]
            relation[x] &= [field.is_at_most_as_good_as(other) is TRUE
                            for other in column]
    return relation


def positive_dominance_cone(x: int, table: InformationTable) -> np.ndarray:
    """:return: Sorted indices of all objects `y` dominating `x`."""
    return np.array([y for y in range(table.n_objects)
                     if dominates(y, x, table)], dtype=int)


def negative_dominance_cone(x: int, table: InformationTable) -> np.ndarray:
    """:return: Sorted indices of all objects `y` dominated by `x`."""
    return np.array([y for y in range(table.n_objects)
                     if dominates(x, y, table)], dtype=int)


def positive_inverted_dominance_cone(x: int, table: InformationTable
                                     ) -> np.ndarray:
    """:return: Sorted indices of all objects `y` with
        `is_dominated_by(x, y)`.
    """
    return np.array([y for y in range(table.n_objects)
                     if is_dominated_by(x, y, table)], dtype=int)


def negative_inverted_dominance_cone(x: int, table: InformationTable
                                     ) -> np.ndarray:
    """:return: Sorted indices of all objects `y` with
        `is_dominated_by(y, x)`.
    """
    return np.array([y for y in range(table.n_objects)
                     if is_dominated_by(y, x, table)], dtype=int)


def _cone_distributions(decisions, membership: np.ndarray
                        ) -> List[DecisionDistribution]:
    """One distribution per row of the boolean `membership` matrix."""
    return [DecisionDistribution(decisions[y] for y in np.flatnonzero(row))
            for row in membership]


class DominanceConesDecisionDistributions:
    """Decision distributions in the four dominance cones of every object.

    With `only_necessary`, only the cones used by approximations and
    consistency measures are computed: the positive inverted cones (for
    upward unions) and the negative dominance cones (for downward unions).
    The other two lists are None then.

    Attributes
    -----
    positive_d_cone_distributions : list of DecisionDistribution or None
        Indexed by object, distribution in its positive dominance cone.

    negative_d_cone_distributions : list of DecisionDistribution

    positive_inv_d_cone_distributions : list of DecisionDistribution

    negative_inv_d_cone_distributions : list of DecisionDistribution or None
    """

    def __init__(self, table: InformationTable, only_necessary: bool = False,
                 dominance: np.ndarray = None,
                 inverted_dominance: np.ndarray = None):
        decisions = table.get_decisions()
        if decisions is None:
            raise ValueError("Cannot compute cone decision distributions of "
                             "a table without active decision attribute.")
        if dominance is None:
            dominance = dominance_relation(table)
        if inverted_dominance is None:
            inverted_dominance = inverted_dominance_relation(table)

        # negative D cone of x: row x of M; positive D cone: column x of M
        self.negative_d_cone_distributions = _cone_distributions(
            decisions, dominance)
        self.positive_inv_d_cone_distributions = _cone_distributions(
            decisions, inverted_dominance)
        if only_necessary:
            self.positive_d_cone_distributions = None
            self.negative_inv_d_cone_distributions = None
        else:
            self.positive_d_cone_distributions = _cone_distributions(
                decisions, dominance.T)
            self.negative_inv_d_cone_distributions = _cone_distributions(
                decisions, inverted_dominance.T)


class InformationTableWithDecisionDistributions(InformationTable):
    """Information table that additionally knows the overall decision
    distribution and, computed on first use, the dominance relations and
    the decision distributions in dominance cones.

    :raise ValueError: If the table has no active decision attribute.
    """

    def __init__(self, attributes, fields):
        super().__init__(attributes, fields)
        if self.get_decisions() is None:
            raise ValueError("Information table must have an active decision "
                             "attribute.")
        self.decision_distribution = DecisionDistribution(self.get_decisions())
        self._dominance = None
        self._inverted_dominance = None
        self._cones = None

    @classmethod
    def from_table(cls, table: InformationTable
                   ) -> 'InformationTableWithDecisionDistributions':
        """:return: A snapshot of `table` with decision distributions."""
        return cls(table.attributes, table.fields.copy())

    @property
    def dominance(self) -> np.ndarray:
        """See `dominance_relation`."""
        if self._dominance is None:
            self._dominance = dominance_relation(self)
        return self._dominance

    @property
    def inverted_dominance(self) -> np.ndarray:
        """See `inverted_dominance_relation`."""
        if self._inverted_dominance is None:
            self._inverted_dominance = inverted_dominance_relation(self)
        return self._inverted_dominance

    @property
    def dominance_cones_decision_distributions(
            self) -> DominanceConesDecisionDistributions:
        if self._cones is None:
            self._cones = DominanceConesDecisionDistributions(
                self, dominance=self.dominance,
                inverted_dominance=self.inverted_dominance)
        return self._cones

    def positive_dominance_cone(self, x: int) -> np.ndarray:
        return np.flatnonzero(self.dominance[:, x])

    def negative_dominance_cone(self, x: int) -> np.ndarray:
        return np.flatnonzero(self.dominance[x, :])

    def positive_inverted_dominance_cone(self, x: int) -> np.ndarray:
        return np.flatnonzero(self.inverted_dominance[x, :])

    def negative_inverted_dominance_cone(self, x: int) -> np.ndarray:
        return np.flatnonzero(self.inverted_dominance[:, x])
