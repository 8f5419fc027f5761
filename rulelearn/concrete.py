"""
Implementation of VC-DomLEM rule induction:
Concrete components (condition generator, stopping condition checker,
pruners, minimality checkers), and the component sets for certain and
possible rules.
"""

from typing import List, Sequence

import numpy as np

from rulelearn.common import \
    AllowedNegativeObjectsType, \
    ConditionGenerator, \
    ElementaryConditionNotFoundError, \
    RuleConditionsPruner, \
    RuleConditionsSetPruner, \
    RuleInducerComponents, \
    RuleInductionStoppingConditionChecker, \
    RuleMinimalityChecker, \
    RuleType, \
    make_condition
from rulelearn.measures import \
    CoverageInApproximationMeasure, \
    EpsilonConsistencyMeasure, \
    RelativeCoverageOutsideApproximationMeasure, \
    RuleConditionsEvaluator
from rulelearn.types import UnknownSimpleField


# Condition generators

class BestConditionGenerator(ConditionGenerator):
    """Try one condition per evaluation of each considered object on each
    unused active condition attribute, and return the best one.

    Candidates are compared lexicographically by `evaluators`: the first
    evaluator decides, ties go to the next one. Of completely tied
    candidates the first one found is kept, so attributes are tried in
    index order and values in order of the considered objects.

    Missing evaluations are skipped as limits if they would match any
    evaluation, depending on the rule type: for certain rules if a missing
    value is equal to anything, for possible rules if anything is equal to a
    missing value.
    """

    def __init__(self, evaluators: Sequence[RuleConditionsEvaluator]):
        if not evaluators:
            raise ValueError("Need at least one evaluator.")
        self.evaluators = tuple(evaluators)

    def _skip_missing(self, evaluation, rule_conditions) -> bool:
        if not isinstance(evaluation, UnknownSimpleField):
            return False
        if rule_conditions.rule_type is RuleType.POSSIBLE:
            return evaluation.equal_when_reverse_compared_to_any_evaluation
        return evaluation.equal_when_compared_to_any_evaluation

    def _is_better(self, evaluations: List[float],
                   best_evaluations: List[float]) -> bool:
        for evaluator, value, best in zip(self.evaluators, evaluations,
                                          best_evaluations):
            if evaluator.is_better(value, best):
                return True
            if evaluator.is_better(best, value):
                return False
        return False

    def get_best_condition(self, considered_objects, rule_conditions):
        table = rule_conditions.learning_information_table
        semantics = rule_conditions.rule_semantics
        base_mask = rule_conditions.base_mask
        considered_objects = considered_objects[base_mask[considered_objects]]
        evaluate_with_condition = [evaluator.evaluate_with_condition
                                   for evaluator in self.evaluators]

        best_condition = None
        best_evaluations = None
        for attribute_index in table.active_condition_attributes:
            if rule_conditions.contains_condition_for_attribute(
                    attribute_index):
                continue
            attribute = table.attributes[attribute_index]
            tried = set()
            for object_index in considered_objects:
                evaluation = table.get_field(object_index, attribute_index)
                if evaluation in tried \
                        or self._skip_missing(evaluation, rule_conditions):
                    continue
                tried.add(evaluation)
                candidate = make_condition(semantics, attribute_index,
                                           attribute, evaluation)
                evaluations = [evaluate(rule_conditions, candidate)
                               for evaluate in evaluate_with_condition]
                if best_condition is None \
                        or self._is_better(evaluations, best_evaluations):
                    best_condition = candidate
                    best_evaluations = evaluations

        if best_condition is None:
            raise ElementaryConditionNotFoundError(
                "No elementary condition left to add to {!r} for {} "
                "considered objects.".format(rule_conditions,
                                             len(considered_objects)))
        return best_condition


# Stopping condition checkers

class EvaluationAndCoverageStoppingConditionChecker(
        RuleInductionStoppingConditionChecker):
    """Rule conditions are complete when `evaluator` reaches `threshold` and
    they cover only allowed objects.
    """

    def __init__(self, evaluator: RuleConditionsEvaluator, threshold: float):
        self.evaluator = evaluator
        self.threshold = threshold

    def is_stopping_condition_satisfied(self, rule_conditions):
        return (self.evaluator.is_threshold_reached(
                    self.evaluator.evaluate(rule_conditions), self.threshold)
                and rule_conditions.covers_only_allowed(
                    rule_conditions.covered_objects))

    def is_stopping_condition_satisfied_without_condition(
            self, rule_conditions, condition_index):
        value = self.evaluator.evaluate_without_condition(rule_conditions,
                                                          condition_index)
        return (self.evaluator.is_threshold_reached(value, self.threshold)
                and rule_conditions.covers_only_allowed(
                    rule_conditions.covered_objects_without_condition(
                        condition_index)))


# Rule conditions pruners

class AttributeOrderRuleConditionsPruner(RuleConditionsPruner):
    """Try removing conditions in order of their attribute index, removing
    each one without which the stopping condition still holds.
    """

    def __init__(self,
                 stopping_condition_checker:
                 RuleInductionStoppingConditionChecker):
        self.stopping_condition_checker = stopping_condition_checker

    def prune(self, rule_conditions):
        is_satisfied_without = self.stopping_condition_checker \
            .is_stopping_condition_satisfied_without_condition
        for condition in sorted(rule_conditions.conditions,
                                key=lambda c: c.attribute_index):
            condition_index = rule_conditions.conditions.index(condition)
            if is_satisfied_without(rule_conditions, condition_index):
                rule_conditions.remove_condition(condition_index)
        return rule_conditions


class SkipConditionsPruning(RuleConditionsPruner):
    def prune(self, rule_conditions):
        return rule_conditions


# Rule conditions set pruners

class EvaluationsAndOrderRuleConditionsSetPruner(RuleConditionsSetPruner):
    """Remove rule conditions covering only objects also covered by other
    remaining ones, trying the worst first.

    Rule conditions are ranked lexicographically by `evaluators`; of tied
    ones the later induced is tried first.
    """

    def __init__(self, evaluators: Sequence[RuleConditionsEvaluator]):
        self.evaluators = tuple(evaluators)

    def _sort_key(self, item):
        position, rule_conditions = item
        return (tuple(evaluator.ordering_key(evaluator.evaluate(
                    rule_conditions))
                      for evaluator in self.evaluators),
                -position)

    def prune(self, rule_conditions_list, objects_to_cover):
        objects_to_cover = np.asarray(objects_to_cover, dtype=int)
        if not rule_conditions_list:
            return []
        n_objects = rule_conditions_list[0].n_objects
        to_cover = np.zeros(n_objects, dtype=bool)
        to_cover[objects_to_cover] = True

        covering_counts = np.zeros(n_objects, dtype=int)
        covered = []
        for rule_conditions in rule_conditions_list:
            objects = rule_conditions.covered_objects
            objects = objects[to_cover[objects]]
            covered.append(objects)
            covering_counts[objects] += 1

        kept = [True] * len(rule_conditions_list)
        for position, _ in sorted(enumerate(rule_conditions_list),
                                  key=self._sort_key):
            objects = covered[position]
            if np.all(covering_counts[objects] > 1):
                kept[position] = False
                covering_counts[objects] -= 1
        return [rule_conditions for rule_conditions, keep
                in zip(rule_conditions_list, kept) if keep]


class SkipRuleSetPruning(RuleConditionsSetPruner):
    def prune(self, rule_conditions_list, objects_to_cover):
        return list(rule_conditions_list)


# Rule minimality checkers

class SingleEvaluationRuleMinimalityChecker(RuleMinimalityChecker):
    """Rule conditions are not minimal if some accepted rule conditions are
    at least as general and evaluated at least as good by `evaluator`.
    """

    def __init__(self, evaluator: RuleConditionsEvaluator):
        self.evaluator = evaluator

    def is_minimal(self, rule_conditions, accepted):
        evaluator = self.evaluator
        value = evaluator.evaluate(rule_conditions)
        for other in accepted:
            if other.is_at_least_as_general_as(rule_conditions) \
                    and not evaluator.is_better(value,
                                                evaluator.evaluate(other)):
                return False
        return True


class SkipMinimalityCheck(RuleMinimalityChecker):
    def is_minimal(self, rule_conditions, accepted):
        return True


# Component sets

class CertainRuleInducerComponents(RuleInducerComponents):
    """VC-DomLEM components inducing certain rules from lower approximations.

    Conditions are chosen by epsilon, then by coverage of the lower
    approximation. Rule conditions are complete when their epsilon is at
    most `consistency_threshold` and they cover only the positive region.

    :param consistency_threshold: Maximum epsilon of a rule, in [0, 1].
    """

    rule_type = RuleType.CERTAIN
    allowed_negative_objects_type = AllowedNegativeObjectsType.POSITIVE_REGION

    def __init__(self, consistency_threshold: float = 0.0, **kwargs):
        if not 0.0 <= consistency_threshold <= 1.0:
            raise ValueError("Consistency threshold must be in [0, 1], got "
                             "{}.".format(consistency_threshold))
        self.consistency_threshold = consistency_threshold
        super().__init__(**kwargs)

    def make_condition_generator(self):
        return BestConditionGenerator([EpsilonConsistencyMeasure(),
                                       CoverageInApproximationMeasure()])

    def make_stopping_condition_checker(self):
        return EvaluationAndCoverageStoppingConditionChecker(
            EpsilonConsistencyMeasure(), self.consistency_threshold)

    def make_rule_conditions_pruner(self):
        return AttributeOrderRuleConditionsPruner(
            self.stopping_condition_checker)

    def make_rule_conditions_set_pruner(self):
        return EvaluationsAndOrderRuleConditionsSetPruner(
            [CoverageInApproximationMeasure(), EpsilonConsistencyMeasure()])

    def make_rule_minimality_checker(self):
        return SingleEvaluationRuleMinimalityChecker(
            EpsilonConsistencyMeasure())

    def get_params(self):
        params = super().get_params()
        params['consistency_threshold'] = self.consistency_threshold
        return params


class PossibleRuleInducerComponents(RuleInducerComponents):
    """VC-DomLEM components inducing possible rules from upper
    approximations.

    Conditions are chosen by relative coverage outside the upper
    approximation, then by coverage inside. Rule conditions are complete
    when they cover no object outside the upper approximation.
    """

    rule_type = RuleType.POSSIBLE
    allowed_negative_objects_type = AllowedNegativeObjectsType.APPROXIMATION

    def make_condition_generator(self):
        return BestConditionGenerator(
            [RelativeCoverageOutsideApproximationMeasure(),
             CoverageInApproximationMeasure()])

    def make_stopping_condition_checker(self):
        return EvaluationAndCoverageStoppingConditionChecker(
            RelativeCoverageOutsideApproximationMeasure(), 0.0)

    def make_rule_conditions_pruner(self):
        return AttributeOrderRuleConditionsPruner(
            self.stopping_condition_checker)

    def make_rule_conditions_set_pruner(self):
        return EvaluationsAndOrderRuleConditionsSetPruner(
            [CoverageInApproximationMeasure()])

    def make_rule_minimality_checker(self):
        return SingleEvaluationRuleMinimalityChecker(
            RelativeCoverageOutsideApproximationMeasure())
