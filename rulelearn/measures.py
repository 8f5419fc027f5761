"""
Measures: object consistency measures for VC-DRSA approximations, and
evaluators of rule conditions guiding rule induction.

Measures are stateless; instances of the same class are interchangeable.
"""

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np


class MeasureType(Enum):
    GAIN = 'gain'
    COST = 'cost'


class MonotonicityType(Enum):
    """How an evaluator's value changes when a condition is added."""
    IMPROVES_WITH_NUMBER_OF_COVERED_OBJECTS = 'improves'
    DETERIORATES_WITH_NUMBER_OF_COVERED_OBJECTS = 'deteriorates'


class Measure:
    """Base of all measures, knowing whether higher values are better."""

    measure_type: MeasureType

    def is_threshold_reached(self, value: float, threshold: float) -> bool:
        """:return: `value >= threshold` for gain, `value <= threshold` for
            cost type measures.
        """
        if self.measure_type is MeasureType.GAIN:
            return value >= threshold
        return value <= threshold

    def is_better(self, value: float, other: float) -> bool:
        """:return: Whether `value` is strictly better than `other`."""
        if self.measure_type is MeasureType.GAIN:
            return value > other
        return value < other

    def ordering_key(self, value: float) -> float:
        """:return: A key that sorts worse values first."""
        return value if self.measure_type is MeasureType.GAIN else -value

    def __eq__(self, other):
        return type(other) is type(self)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return type(self).__name__ + '()'


class ConsistencyMeasure(Measure, ABC):
    """Consistency of an object w.r.t. a union, computed on its dominance
    cone (see `Union.cone_decision_distribution`).
    """

    @abstractmethod
    def calculate_consistency(self, object_index: int, union) -> float:
        raise NotImplementedError

    def is_consistency_threshold_reached(self, object_index: int, union,
                                         threshold: float) -> bool:
        return self.is_threshold_reached(
            self.calculate_consistency(object_index, union), threshold)


class RuleConditionsEvaluator(Measure, ABC):
    """Evaluates the objects covered by (candidate) rule conditions.

    Subclasses implement `evaluate_covered_objects`, the three public entry
    points select the covered objects.
    """

    monotonicity_type: MonotonicityType

    @abstractmethod
    def evaluate_covered_objects(self, rule_conditions,
                                 covered_objects: np.ndarray) -> float:
        raise NotImplementedError

    def evaluate(self, rule_conditions) -> float:
        return self.evaluate_covered_objects(
            rule_conditions, rule_conditions.covered_objects)

    def evaluate_with_condition(self, rule_conditions, condition) -> float:
        """Evaluate as if `condition` were added to `rule_conditions`."""
        return self.evaluate_covered_objects(
            rule_conditions,
            rule_conditions.covered_objects_with_condition(condition))

    def evaluate_without_condition(self, rule_conditions,
                                   condition_index: int) -> float:
        """Evaluate as if the condition at `condition_index` were removed."""
        return self.evaluate_covered_objects(
            rule_conditions,
            rule_conditions.covered_objects_without_condition(condition_index))


def _count_negative(rule_conditions, covered_objects: np.ndarray) -> int:
    """Number of covered objects neither positive nor neutral."""
    return int(np.count_nonzero(
        ~rule_conditions.positive_mask[covered_objects]
        & ~rule_conditions.neutral_mask[covered_objects]))


def _negative_set_size(rule_conditions) -> int:
    return int(np.count_nonzero(~rule_conditions.positive_mask
                                & ~rule_conditions.neutral_mask))


class EpsilonConsistencyMeasure(ConsistencyMeasure, RuleConditionsEvaluator):
    """Epsilon: share of the complement of a union that is covered.

    For an object, the number of objects with a negative decision in its
    dominance cone divided by the complementary set size of the union. For
    rule conditions, the number of covered negative objects divided by the
    number of all negative objects. Both are 0 if numerator or denominator
    is 0.
    """

    measure_type = MeasureType.COST
    monotonicity_type = \
        MonotonicityType.DETERIORATES_WITH_NUMBER_OF_COVERED_OBJECTS

    def calculate_consistency(self, object_index, union):
        negative = union.count_negative(
            union.cone_decision_distribution(object_index))
        complementary = union.complementary_set_size
        if negative == 0 or complementary == 0:
            return 0.0
        return negative / complementary

    def evaluate_covered_objects(self, rule_conditions, covered_objects):
        negative = _count_negative(rule_conditions, covered_objects)
        all_negative = _negative_set_size(rule_conditions)
        if negative == 0 or all_negative == 0:
            return 0.0
        return negative / all_negative

    def evaluate_coverage(self, coverage_information) -> float:
        """Epsilon of a rule: covered objects contradicting its decisions,
        divided by all objects contradicting them. Neutral objects count
        for neither, as in `evaluate_covered_objects`.
        """
        negative_mask = coverage_information.negative_mask
        negative = int(np.count_nonzero(
            negative_mask[coverage_information.covered_objects]))
        all_negative = int(np.count_nonzero(negative_mask))
        if negative == 0 or all_negative == 0:
            return 0.0
        return negative / all_negative


class RoughMembershipMeasure(ConsistencyMeasure):
    """Share of objects with a positive decision in an object's dominance
    cone.

    :raise ValueError: On an empty cone. Never happens for cones of a table
        without missing values, as an object is in its own cone.
    """

    measure_type = MeasureType.GAIN

    def calculate_consistency(self, object_index, union):
        distribution = union.cone_decision_distribution(object_index)
        count = distribution.total
        if not count:
            raise ValueError("Rough membership of object {} is undefined for "
                             "its empty dominance cone w.r.t. {}."
                             .format(object_index, union))
        return union.count_positive(distribution) / count


class SupportMeasure(RuleConditionsEvaluator):
    """Number of covered positive objects."""

    measure_type = MeasureType.GAIN
    monotonicity_type = \
        MonotonicityType.IMPROVES_WITH_NUMBER_OF_COVERED_OBJECTS

    def evaluate_covered_objects(self, rule_conditions, covered_objects):
        return int(np.count_nonzero(
            rule_conditions.positive_mask[covered_objects]))

    def evaluate_coverage(self, coverage_information) -> int:
        return int(np.count_nonzero(
            coverage_information.positive_mask[
                coverage_information.covered_objects]))


class CoverageInApproximationMeasure(RuleConditionsEvaluator):
    """Number of covered objects in the approximated set."""

    measure_type = MeasureType.GAIN
    monotonicity_type = \
        MonotonicityType.IMPROVES_WITH_NUMBER_OF_COVERED_OBJECTS

    def evaluate_covered_objects(self, rule_conditions, covered_objects):
        return int(np.count_nonzero(
            rule_conditions.approximation_mask[covered_objects]))


class CoverageOutsideApproximationMeasure(RuleConditionsEvaluator):
    """Number of covered objects neither in the approximated set nor
    neutral.
    """

    measure_type = MeasureType.COST
    monotonicity_type = \
        MonotonicityType.DETERIORATES_WITH_NUMBER_OF_COVERED_OBJECTS

    def evaluate_covered_objects(self, rule_conditions, covered_objects):
        return int(np.count_nonzero(
            ~rule_conditions.approximation_mask[covered_objects]
            & ~rule_conditions.neutral_mask[covered_objects]))


class RelativeCoverageOutsideApproximationMeasure(
        CoverageOutsideApproximationMeasure):
    """`CoverageOutsideApproximationMeasure` divided by the number of
    objects neither positive nor neutral; 0 if either is 0.
    """

    def evaluate_covered_objects(self, rule_conditions, covered_objects):
        outside = super().evaluate_covered_objects(rule_conditions,
                                                   covered_objects)
        all_negative = _negative_set_size(rule_conditions)
        if outside == 0 or all_negative == 0:
            return 0.0
        return outside / all_negative
