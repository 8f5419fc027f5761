"""
Upward and downward unions of ordered decision classes and their (variable
consistency) rough approximations.
"""

import logging
import numbers
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, List

import numpy as np

from rulelearn.data import Decision, DecisionDistribution
from rulelearn.dominance import InformationTableWithDecisionDistributions
from rulelearn.measures import ConsistencyMeasure
from rulelearn.types import PreferenceType, TernaryLogicValue, \
    TRUE, FALSE, UNCOMPARABLE

logger = logging.getLogger(__name__)


class UnionType(Enum):
    AT_LEAST = 'at least'
    AT_MOST = 'at most'

    def opposite(self) -> 'UnionType':
        return (UnionType.AT_MOST if self is UnionType.AT_LEAST
                else UnionType.AT_LEAST)


class DominanceBasedRoughSetCalculator(ABC):
    """Strategy computing the approximations of a `Union`."""

    @abstractmethod
    def calculate_lower_approximation(self, union: 'Union') -> np.ndarray:
        """:return: Sorted indices of the objects in the lower approximation.
        """
        raise NotImplementedError

    def calculate_upper_approximation(self, union: 'Union') -> np.ndarray:
        """:return: All objects not in the lower approximation of the
            complementary union.
        """
        complement_lower = union.complementary_union.lower_approximation
        return np.setdiff1d(np.arange(union.information_table.n_objects),
                            complement_lower)


class ClassicalDominanceBasedRoughSetCalculator(
        DominanceBasedRoughSetCalculator):
    """Classical DRSA: an object of the union is in its lower approximation
    iff its relevant dominance cone holds no object with a negative decision.
    """

    def calculate_lower_approximation(self, union):
        return np.array(
            [x for x in union.objects
             if not union.count_negative(union.cone_decision_distribution(x))],
            dtype=int)


class VCDominanceBasedRoughSetCalculator(DominanceBasedRoughSetCalculator):
    """Variable consistency DRSA: an object of the union is in its lower
    approximation iff `consistency_measure` reaches `consistency_threshold`
    for it.

    :param consistency_measure: A `ConsistencyMeasure`.
    :param consistency_threshold: Threshold the measure must reach.
    :raise TypeError: If `consistency_measure` is no `ConsistencyMeasure`
        or `consistency_threshold` is no number.
    """

    def __init__(self, consistency_measure: ConsistencyMeasure,
                 consistency_threshold: float):
        if not isinstance(consistency_measure, ConsistencyMeasure):
            raise TypeError("Expected a ConsistencyMeasure, got {!r}."
                            .format(consistency_measure))
        if isinstance(consistency_threshold, bool) \
                or not isinstance(consistency_threshold, numbers.Real):
            raise TypeError("Consistency threshold must be a number, got "
                            "{!r}.".format(consistency_threshold))
        self.consistency_measure = consistency_measure
        self.consistency_threshold = consistency_threshold

    def calculate_lower_approximation(self, union):
        is_reached = self.consistency_measure.is_consistency_threshold_reached
        threshold = self.consistency_threshold
        return np.array([x for x in union.objects
                         if is_reached(x, union, threshold)], dtype=int)


class Union:
    """Upward (`AT_LEAST`) or downward (`AT_MOST`) union of decision classes,
    limited by a decision.

    An object is positive for the union if its decision is concordant with
    the union, negative if discordant, and neutral if uncomparable.
    Approximations are computed on first use by `calculator`.

    :param include_limiting_decision: If False, the union is strict, i.e.
        holds objects strictly better (worse) than the limiting decision.
        Complementary unions are strict.
    :raise ValueError: If the limiting decision does not refer to the active
        decision attributes of `table`, or none of them is ordinal.

    Attributes
    -----
    objects : np.ndarray
        Sorted indices of the positive objects.

    neutral_objects : np.ndarray
        Sorted indices of the neutral objects.
    """

    def __init__(self,
                 union_type: UnionType,
                 limiting_decision: Decision,
                 table: InformationTableWithDecisionDistributions,
                 calculator: DominanceBasedRoughSetCalculator,
                 include_limiting_decision: bool = True):
        if not isinstance(union_type, UnionType):
            raise TypeError("Invalid union type {!r}.".format(union_type))
        if not isinstance(table, InformationTableWithDecisionDistributions):
            raise TypeError("Unions need an information table with decision "
                            "distributions, got {!r}.".format(table))
        decision_attributes = set(int(a) for a
                                  in table.active_decision_attributes)
        if not limiting_decision.attribute_indices <= decision_attributes:
            raise ValueError("Limiting decision {} refers to attributes {} "
                             "which are not all active decision attributes "
                             "{}.".format(limiting_decision,
                                          sorted(limiting_decision
                                                 .attribute_indices),
                                          sorted(decision_attributes)))
        if all(table.attributes[a].preference_type is PreferenceType.NONE
               for a in limiting_decision.attribute_indices):
            raise ValueError("Limiting decision {} has no ordinal attribute."
                             .format(limiting_decision))

        self.union_type = union_type
        self.limiting_decision = limiting_decision
        self.information_table = table
        self.calculator = calculator
        self.include_limiting_decision = include_limiting_decision

        positive, neutral = [], []
        for object_index, decision in enumerate(table.get_decisions()):
            concordance = self.is_concordant_with_decision(decision)
            if concordance is TRUE:
                positive.append(object_index)
            elif concordance is UNCOMPARABLE:
                neutral.append(object_index)
        self.objects = np.array(positive, dtype=int)
        self.neutral_objects = np.array(neutral, dtype=int)

        self._complementary_union = None
        self._lower_approximation = None
        self._upper_approximation = None
        self._positive_region = None

    def is_concordant_with_decision(self, decision: Decision
                                    ) -> TernaryLogicValue:
        """:return: TRUE if `decision` belongs to this union, FALSE if it
            belongs to the complementary union, UNCOMPARABLE otherwise.
        """
        limit = self.limiting_decision
        if self.union_type is UnionType.AT_LEAST:
            inside = limit.is_at_most_as_good_as(decision)
            outside = limit.is_at_least_as_good_as(decision)
        else:
            inside = limit.is_at_least_as_good_as(decision)
            outside = limit.is_at_most_as_good_as(decision)
        if self.include_limiting_decision:
            if inside is TRUE:
                return TRUE
            if outside is TRUE:
                return FALSE
        else:
            if outside is TRUE:
                return FALSE
            if inside is TRUE:
                return TRUE
        return UNCOMPARABLE

    def is_decision_positive(self, decision: Decision) -> bool:
        return self.is_concordant_with_decision(decision) is TRUE

    def is_decision_negative(self, decision: Decision) -> bool:
        return self.is_concordant_with_decision(decision) is FALSE

    def is_decision_neutral(self, decision: Decision) -> bool:
        return self.is_concordant_with_decision(decision) is UNCOMPARABLE

    def count_negative(self, distribution: DecisionDistribution) -> int:
        """:return: Number of objects in `distribution` with a decision
            negative for this union.
        """
        return sum(count for decision, count in distribution.items()
                   if self.is_decision_negative(decision))

    def count_positive(self, distribution: DecisionDistribution) -> int:
        return sum(count for decision, count in distribution.items()
                   if self.is_decision_positive(decision))

    def cone_decision_distribution(self, object_index: int
                                   ) -> DecisionDistribution:
        """:return: Decision distribution in the dominance cone relevant for
            the consistency of `object_index`: its positive inverted cone for
            upward unions, its negative cone for downward unions.
        """
        cones = self.information_table.dominance_cones_decision_distributions
        if self.union_type is UnionType.AT_LEAST:
            return cones.positive_inv_d_cone_distributions[object_index]
        return cones.negative_d_cone_distributions[object_index]

    @property
    def complementary_set_size(self) -> int:
        """Number of objects neither positive nor neutral."""
        return (self.information_table.n_objects - len(self.objects)
                - len(self.neutral_objects))

    @property
    def complementary_union(self) -> 'Union':
        """The strict union of opposite type with the same limit."""
        if self._complementary_union is None:
            self._complementary_union = Union(
                self.union_type.opposite(), self.limiting_decision,
                self.information_table, self.calculator,
                include_limiting_decision=not self.include_limiting_decision)
        return self._complementary_union

    @property
    def lower_approximation(self) -> np.ndarray:
        if self._lower_approximation is None:
            self._lower_approximation = \
                self.calculator.calculate_lower_approximation(self)
            logger.debug("lower approximation of %s: %d of %d objects",
                         self, len(self._lower_approximation),
                         len(self.objects))
        return self._lower_approximation

    @property
    def upper_approximation(self) -> np.ndarray:
        if self._upper_approximation is None:
            self._upper_approximation = \
                self.calculator.calculate_upper_approximation(self)
        return self._upper_approximation

    @property
    def boundary(self) -> np.ndarray:
        """Upper approximation minus lower approximation."""
        return np.setdiff1d(self.upper_approximation,
                            self.lower_approximation)

    @property
    def positive_region(self) -> np.ndarray:
        """Objects dominating (upward union) or dominated by (downward union)
        some object of the lower approximation.
        """
        if self._positive_region is None:
            lower = self.lower_approximation
            dominance = self.information_table.dominance
            if self.union_type is UnionType.AT_LEAST:
                region = dominance[:, lower].any(axis=1)
            else:
                region = dominance[lower, :].any(axis=0)
            self._positive_region = np.flatnonzero(region)
        return self._positive_region

    @property
    def accuracy_of_approximation(self) -> float:
        """|lower| / |upper|, 0 for an empty upper approximation."""
        upper = len(self.upper_approximation)
        return len(self.lower_approximation) / upper if upper else 0.0

    @property
    def quality_of_approximation(self) -> float:
        """|lower| / |union|, 0 for an empty union."""
        return (len(self.lower_approximation) / len(self.objects)
                if len(self.objects) else 0.0)

    def __str__(self):
        return '{}{} {}'.format(
            '' if self.include_limiting_decision else 'strictly ',
            self.union_type.value, self.limiting_decision)

    def __repr__(self):
        return 'Union({})'.format(self)


class Unions:
    """All upward and downward unions of a table with a single limiting
    decision each.

    Upward unions are limited by every decision but the worst, listed from
    the best limit down. Downward unions are limited by every decision but
    the best, listed from the worst limit up.

    Attributes
    -----
    upward_unions : list of Union

    downward_unions : list of Union
    """

    def __init__(self, table: InformationTableWithDecisionDistributions,
                 calculator: DominanceBasedRoughSetCalculator):
        self.information_table = table
        self.calculator = calculator
        ordered = table.ordered_decisions
        self.upward_unions = [Union(UnionType.AT_LEAST, decision, table,
                                    calculator)
                              for decision in reversed(ordered[1:])]
        self.downward_unions = [Union(UnionType.AT_MOST, decision, table,
                                      calculator)
                                for decision in ordered[:-1]]

    def get(self, union_type: UnionType) -> List[Union]:
        if union_type is UnionType.AT_LEAST:
            return self.upward_unions
        return self.downward_unions

    def __iter__(self) -> Iterator[Union]:
        yield from self.upward_unions
        yield from self.downward_unions

    def __len__(self):
        return len(self.upward_unions) + len(self.downward_unions)
