"""
Implementation of VC-DomLEM rule induction:
Common conditions, rule conditions, `Rule`, rule sets with characteristics,
and the interfaces of the exchangeable induction components.
"""

from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum
from typing import Dict, Iterable, List, Sequence

import numpy as np

from rulelearn.data import EvaluationAttribute, InformationTable, \
    InvalidSizeError
from rulelearn.measures import EpsilonConsistencyMeasure, SupportMeasure
from rulelearn.types import EvaluationField, PreferenceType, TRUE


class UnknownValueError(ValueError):
    """Requested a rule characteristic that is neither set nor computable."""


class ElementaryConditionNotFoundError(ValueError):
    """No elementary condition can be added to the rule conditions."""


class RuleType(Enum):
    CERTAIN = 'certain'
    POSSIBLE = 'possible'
    APPROXIMATE = 'approximate'


class RuleSemantics(Enum):
    AT_LEAST = 'at least'
    AT_MOST = 'at most'
    EQUAL = 'equal'


class AllowedNegativeObjectsType(Enum):
    """Which objects outside the approximated set a rule may cover."""
    POSITIVE_REGION = 'positive region'
    POSITIVE_AND_BOUNDARY_REGIONS = 'positive and boundary regions'
    ANY_REGION = 'any region'
    APPROXIMATION = 'approximation'


class Condition(ABC):
    """Elementary condition `attribute <relation> limiting_evaluation`.

    Conditions are immutable and compare structurally.
    """

    def __init__(self, attribute_index: int, attribute: EvaluationAttribute,
                 limiting_evaluation: EvaluationField):
        if not isinstance(limiting_evaluation, EvaluationField):
            raise TypeError("Expected an evaluation field, got {!r}."
                            .format(limiting_evaluation))
        self.attribute_index = int(attribute_index)
        self.attribute = attribute
        self.limiting_evaluation = limiting_evaluation

    @abstractmethod
    def satisfied_by(self, evaluation: EvaluationField) -> bool:
        raise NotImplementedError

    @abstractmethod
    def contradicted_by(self, evaluation: EvaluationField) -> bool:
        """:return: Whether `evaluation` is on the limit or on its opposite
            side, i.e. whether the reversed condition is satisfied. For
            decision conditions, an object not satisfying all of them is
            negative if it contradicts all of them, and neutral otherwise.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def relation_symbol(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def rule_semantics(self) -> RuleSemantics:
        """Semantics of a rule having this condition as decision."""
        raise NotImplementedError

    def satisfied_by_object(self, object_index: int,
                            table: InformationTable) -> bool:
        return self.satisfied_by(table.get_field(object_index,
                                                 self.attribute_index))

    def satisfied_mask(self, table: InformationTable) -> np.ndarray:
        """:return: Boolean array, True for all objects satisfying self."""
        satisfied_by = self.satisfied_by
        return np.fromiter((satisfied_by(field) for field
                            in table.fields[:, self.attribute_index]),
                           dtype=bool, count=table.n_objects)

    def is_at_least_as_general_as(self, other: 'Condition') -> bool:
        """:return: Whether every evaluation satisfying `other` satisfies
            self, i.e. same kind and attribute, and a weaker limit.
        """
        return (type(other) is type(self)
                and other.attribute_index == self.attribute_index
                and self.satisfied_by(other.limiting_evaluation))

    def to_string(self, attribute_name: str = None) -> str:
        if attribute_name is None:
            attribute_name = self.attribute.name
        return '{} {} {}'.format(attribute_name, self.relation_symbol,
                                 self.limiting_evaluation)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return '{}({}, {!r})'.format(type(self).__name__,
                                     self.attribute_index,
                                     self.limiting_evaluation)

    def __eq__(self, other):
        if isinstance(other, Condition):
            return (type(other) is type(self)
                    and other.attribute_index == self.attribute_index
                    and other.limiting_evaluation == self.limiting_evaluation)
        return NotImplemented

    def __hash__(self):
        return hash((type(self), self.attribute_index,
                     self.limiting_evaluation))


class ConditionAtLeast(Condition):
    """Satisfied by evaluations at least as good as the limit, so
    `a >= v` on gain and `a <= v` on cost attributes.
    """

    def satisfied_by(self, evaluation):
        return evaluation.is_at_least_as_good_as(
            self.limiting_evaluation) is TRUE

    def contradicted_by(self, evaluation):
        return self.limiting_evaluation.is_at_least_as_good_as(
            evaluation) is TRUE

    @property
    def relation_symbol(self):
        return '<=' if self.attribute.preference_type is PreferenceType.COST \
            else '>='

    @property
    def rule_semantics(self):
        return RuleSemantics.AT_LEAST


class ConditionAtMost(Condition):
    """Satisfied by evaluations at most as good as the limit, so
    `a <= v` on gain and `a >= v` on cost attributes.
    """

    def satisfied_by(self, evaluation):
        return evaluation.is_at_most_as_good_as(
            self.limiting_evaluation) is TRUE

    def contradicted_by(self, evaluation):
        return self.limiting_evaluation.is_at_most_as_good_as(
            evaluation) is TRUE

    @property
    def relation_symbol(self):
        return '>=' if self.attribute.preference_type is PreferenceType.COST \
            else '<='

    @property
    def rule_semantics(self):
        return RuleSemantics.AT_MOST


class ConditionEqual(Condition):
    def satisfied_by(self, evaluation):
        return evaluation.is_equal_to(self.limiting_evaluation) is TRUE

    def contradicted_by(self, evaluation):
        return not self.satisfied_by(evaluation)

    @property
    def relation_symbol(self):
        return '='

    @property
    def rule_semantics(self):
        return RuleSemantics.EQUAL


def make_condition(rule_semantics: RuleSemantics, attribute_index: int,
                   attribute: EvaluationAttribute,
                   limiting_evaluation: EvaluationField) -> Condition:
    """:return: The condition of the given semantics, or a `ConditionEqual`
        for attributes without preference.
    """
    if attribute.preference_type is PreferenceType.NONE \
            or rule_semantics is RuleSemantics.EQUAL:
        return ConditionEqual(attribute_index, attribute, limiting_evaluation)
    if rule_semantics is RuleSemantics.AT_LEAST:
        return ConditionAtLeast(attribute_index, attribute,
                                limiting_evaluation)
    return ConditionAtMost(attribute_index, attribute, limiting_evaluation)


def _as_index_array(objects, n_objects: int) -> np.ndarray:
    indices = np.unique(np.asarray(objects, dtype=int).reshape(-1))
    if indices.size and (indices[0] < 0 or indices[-1] >= n_objects):
        raise IndexError("Object indices {} out of range for {} objects."
                         .format(indices, n_objects))
    return indices


def _as_mask(indices: np.ndarray, n_objects: int) -> np.ndarray:
    mask = np.zeros(n_objects, dtype=bool)
    mask[indices] = True
    return mask


class RuleConditions:
    """A growing (or pruned) conjunction of conditions, tracking which
    objects of the learning table it covers.

    :param positive_objects: Objects whose decision matches the rule's.
    :param approximation_objects: The approximated set, defaults to
        `positive_objects`.
    :param elementary_conditions_base_objects: Objects whose evaluations may
        become condition limits, defaults to `approximation_objects`.
    :param objects_that_can_be_covered: Objects the final conditions are
        allowed to cover, defaults to all objects.
    :param neutral_objects: Objects with a decision uncomparable to the
        rule's.

    Attributes
    -----
    conditions : list of Condition
        The conjunction, in order of addition.

    positive_mask, approximation_mask, neutral_mask, base_mask,
    allowed_mask : np.ndarray of bool
        The object sets above, as masks of length `n_objects`.
    """

    def __init__(self,
                 learning_information_table: InformationTable,
                 positive_objects,
                 approximation_objects=None,
                 elementary_conditions_base_objects=None,
                 objects_that_can_be_covered=None,
                 neutral_objects=(),
                 rule_type: RuleType = RuleType.CERTAIN,
                 rule_semantics: RuleSemantics = RuleSemantics.AT_LEAST):
        n = learning_information_table.n_objects
        self.learning_information_table = learning_information_table
        self.rule_type = rule_type
        self.rule_semantics = rule_semantics

        self.positive_objects = _as_index_array(positive_objects, n)
        self.approximation_objects = self.positive_objects \
            if approximation_objects is None \
            else _as_index_array(approximation_objects, n)
        self.elementary_conditions_base_objects = self.approximation_objects \
            if elementary_conditions_base_objects is None \
            else _as_index_array(elementary_conditions_base_objects, n)
        self.objects_that_can_be_covered = np.arange(n) \
            if objects_that_can_be_covered is None \
            else _as_index_array(objects_that_can_be_covered, n)
        self.neutral_objects = _as_index_array(neutral_objects, n)

        self.positive_mask = _as_mask(self.positive_objects, n)
        self.approximation_mask = _as_mask(self.approximation_objects, n)
        self.base_mask = _as_mask(self.elementary_conditions_base_objects, n)
        self.allowed_mask = _as_mask(self.objects_that_can_be_covered, n)
        self.neutral_mask = _as_mask(self.neutral_objects, n)

        self.conditions: List[Condition] = []
        self._attribute_counts = Counter()
        self._masks: Dict[Condition, np.ndarray] = {}
        self._covered = np.arange(n)

    @property
    def n_objects(self) -> int:
        return self.learning_information_table.n_objects

    def condition_mask(self, condition: Condition) -> np.ndarray:
        """:return: Objects satisfying `condition`, cached."""
        mask = self._masks.get(condition)
        if mask is None:
            mask = self._masks[condition] = condition.satisfied_mask(
                self.learning_information_table)
        return mask

    @property
    def covered_objects(self) -> np.ndarray:
        """Sorted indices of the objects satisfying all conditions."""
        return self._covered

    def covers(self, object_index: int) -> bool:
        return all(self.condition_mask(condition)[object_index]
                   for condition in self.conditions)

    def covers_only_allowed(self, covered_objects: np.ndarray) -> bool:
        """:return: Whether `covered_objects` are all allowed to be covered.
        """
        return bool(self.allowed_mask[covered_objects].all())

    def add_condition(self, condition: Condition) -> int:
        """Append `condition` and restrict the covered objects.

        :return: Index of the new condition.
        """
        if not isinstance(condition, Condition):
            raise TypeError("Expected a condition, got {!r}."
                            .format(condition))
        self.conditions.append(condition)
        self._attribute_counts[condition.attribute_index] += 1
        self._covered = self._covered[
            self.condition_mask(condition)[self._covered]]
        return len(self.conditions) - 1

    def remove_condition(self, condition_index: int) -> Condition:
        """Remove the condition at `condition_index`.

        :return: The removed condition.
        :raise IndexError: For an invalid index.
        """
        self._check_index(condition_index)
        self._covered = self.covered_objects_without_condition(
            condition_index)
        condition = self.conditions.pop(condition_index)
        self._attribute_counts[condition.attribute_index] -= 1
        return condition

    def _check_index(self, condition_index: int) -> None:
        if not 0 <= condition_index < len(self.conditions):
            raise IndexError("Condition index {} out of range for {} "
                             "conditions.".format(condition_index,
                                                  len(self.conditions)))

    def covered_objects_with_condition(self, condition: Condition
                                       ) -> np.ndarray:
        """:return: Objects covered after adding `condition`."""
        return self._covered[self.condition_mask(condition)[self._covered]]

    def covered_objects_without_condition(self, condition_index: int
                                          ) -> np.ndarray:
        """:return: Objects covered after removing the condition at
            `condition_index`.
        :raise IndexError: For an invalid index.
        """
        self._check_index(condition_index)
        covered = np.ones(self.n_objects, dtype=bool)
        for i, condition in enumerate(self.conditions):
            if i != condition_index:
                covered &= self.condition_mask(condition)
        return np.flatnonzero(covered)

    def contains_condition_for_attribute(self, attribute_index: int) -> bool:
        return self._attribute_counts[attribute_index] > 0

    def is_at_least_as_general_as(self, other: 'RuleConditions') -> bool:
        """:return: Whether every condition of self is at least as general
            as some condition of `other`, i.e. self covers whatever `other`
            covers.
        """
        return all(any(mine.is_at_least_as_general_as(theirs)
                       for theirs in other.conditions)
                   for mine in self.conditions)

    def __len__(self):
        return len(self.conditions)

    def __str__(self):
        return ' & '.join('(' + str(c) + ')' for c in self.conditions)

    def __repr__(self):
        return 'RuleConditions({}, covering {})'.format(
            self, len(self._covered))


class Rule:
    """Decision rule: if all `conditions` hold, all `decisions` hold.

    Attributes
    -----
    rule_type : RuleType

    semantics : RuleSemantics
        Derived from the first decision condition unless given.

    conditions : tuple of Condition

    decisions : tuple of Condition
        Conjunction of conditions on decision attributes.
    """

    TYPE_SYMBOLS = {RuleType.CERTAIN: 'c', RuleType.POSSIBLE: 'p',
                    RuleType.APPROXIMATE: 'a'}

    def __init__(self, rule_type: RuleType, conditions: Iterable[Condition],
                 decisions, semantics: RuleSemantics = None):
        if isinstance(decisions, Condition):
            decisions = [decisions]
        self.rule_type = rule_type
        self.conditions = tuple(conditions)
        self.decisions = tuple(decisions)
        if not self.decisions:
            raise ValueError("A rule needs at least one decision condition.")
        self.semantics = semantics if semantics is not None \
            else self.decisions[0].rule_semantics

    @property
    def decision(self) -> Condition:
        """The first decision condition."""
        return self.decisions[0]

    def covers(self, object_index: int, table: InformationTable) -> bool:
        return all(condition.satisfied_by_object(object_index, table)
                   for condition in self.conditions)

    def decisions_matched_by(self, object_index: int,
                             table: InformationTable) -> bool:
        return all(decision.satisfied_by_object(object_index, table)
                   for decision in self.decisions)

    def supported_by(self, object_index: int, table: InformationTable
                     ) -> bool:
        return (self.covers(object_index, table)
                and self.decisions_matched_by(object_index, table))

    def to_string(self, attribute_names: Sequence[str] = None) -> str:
        """:param attribute_names: Replaces the attribute names, indexed by
            attribute index.
        """
        def render(condition):
            name = attribute_names[condition.attribute_index] \
                if attribute_names is not None else None
            return '(' + condition.to_string(name) + ')'
        text = ' & '.join(render(c) for c in self.conditions)
        text += ' =>[{}] '.format(self.TYPE_SYMBOLS[self.rule_type])
        text += ' & '.join(render(d) for d in self.decisions)
        return text.lstrip()

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return 'Rule({})'.format(self)

    def __eq__(self, other):
        if isinstance(other, Rule):
            return (other.rule_type is self.rule_type
                    and other.semantics is self.semantics
                    and other.conditions == self.conditions
                    and other.decisions == self.decisions)
        return NotImplemented

    def __hash__(self):
        return hash((self.rule_type, self.semantics, self.conditions,
                     self.decisions))


class RuleCoverageInformation:
    """Which objects of a table a rule covers, and which match its decisions.

    Attributes
    -----
    covered_objects : np.ndarray
        Sorted indices of covered objects.

    positive_objects : np.ndarray
        Sorted indices of objects matching the rule's decisions.

    positive_mask : np.ndarray of bool

    neutral_mask : np.ndarray of bool
        Objects whose decision neither matches nor contradicts the rule's
        decisions, e.g. uncomparable composite decisions. Neutral objects do
        not count as negative for any characteristic.
    """

    def __init__(self, rule: Rule, table: InformationTable):
        self.rule = rule
        self.n_objects = table.n_objects
        self.covered_objects = np.array(
            [i for i in range(table.n_objects) if rule.covers(i, table)],
            dtype=int)
        self.positive_mask = np.array(
            [rule.decisions_matched_by(i, table)
             for i in range(table.n_objects)], dtype=bool).reshape(-1)
        self.positive_objects = np.flatnonzero(self.positive_mask)
        contradicted = np.array(
            [all(decision.contradicted_by(
                table.get_field(i, decision.attribute_index))
                for decision in rule.decisions)
             for i in range(table.n_objects)], dtype=bool).reshape(-1)
        self.neutral_mask = ~self.positive_mask & ~contradicted

    @property
    def negative_mask(self) -> np.ndarray:
        """Objects neither positive nor neutral."""
        return ~self.positive_mask & ~self.neutral_mask


def _characteristic(name: str, doc: str) -> property:
    def getter(self):
        value = self._values.get(name)
        if value is None:
            value = self._values[name] = self._compute(name)
        return value

    def setter(self, value):
        self._values[name] = value
    return property(getter, setter, doc=doc)


class RuleCharacteristics:
    """Numeric characteristics of a rule. Only explicitly set values are
    known, reading any other one raises `UnknownValueError`.

    Values are set as keyword arguments or attributes, e.g.
    `RuleCharacteristics(support=10, epsilon=0.1)`.
    """

    NAMES = ('support', 'strength', 'confidence', 'coverage_factor',
             'coverage', 'negative_coverage', 'epsilon', 'f_confirmation',
             's_confirmation')

    support = _characteristic(
        'support', "Number of covered objects matching the decisions.")
    strength = _characteristic('strength', "Support / number of objects.")
    confidence = _characteristic(
        'confidence', "Support / (support + negative coverage).")
    coverage_factor = _characteristic(
        'coverage_factor', "Support / number of objects matching the "
                           "decisions.")
    coverage = _characteristic('coverage', "Number of covered objects.")
    negative_coverage = _characteristic(
        'negative_coverage',
        "Number of covered objects contradicting the decisions.")
    epsilon = _characteristic('epsilon', "See `EpsilonConsistencyMeasure`.")
    f_confirmation = _characteristic(
        'f_confirmation', "Bayesian confirmation measure F, in [-1, 1].")
    s_confirmation = _characteristic(
        's_confirmation', "Bayesian confirmation measure S, in [-1, 1].")

    def __init__(self, **values):
        self._values = {}
        for name, value in values.items():
            if name not in self.NAMES:
                raise TypeError("Unknown rule characteristic {!r}."
                                .format(name))
            setattr(self, name, value)

    def _compute(self, name: str):
        raise UnknownValueError("Rule's {} is unknown.".format(name))

    def is_known(self, name: str) -> bool:
        try:
            getattr(self, name)
        except UnknownValueError:
            return False
        return True

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, ', '.join(
            '{}={!r}'.format(name, value)
            for name, value in self._values.items()))


class ComputableRuleCharacteristics(RuleCharacteristics):
    """Rule characteristics computed on demand from the rule's coverage of
    its learning table. All values are known.

    Neutral objects (see `RuleCoverageInformation.neutral_mask`) only count
    for `coverage` and `strength`. Strength is support divided by the number
    of all objects of the table rather than by the number of positive
    objects, the latter being the coverage factor.

    With `a` covered supporting objects, `b` covered negative ones, `c`
    uncovered supporting ones and `d` uncovered negative ones, the
    confirmation measures are
    `f = (a*d - b*c) / (a*d + b*c + 2*a*b)` and
    `s = a / (a + b) - c / (c + d)`; undefined fractions count as 0.
    """

    def __init__(self, coverage_information: RuleCoverageInformation,
                 **values):
        self.coverage_information = coverage_information
        super().__init__(**values)

    def _compute(self, name):
        return getattr(self, '_compute_' + name)()

    def _contingency(self):
        a = self.support
        b = self.negative_coverage
        c = len(self.coverage_information.positive_objects) - a
        d = int(np.count_nonzero(self.coverage_information.negative_mask)) - b
        return a, b, c, d

    def _compute_support(self):
        return SupportMeasure().evaluate_coverage(self.coverage_information)

    def _compute_strength(self):
        n = self.coverage_information.n_objects
        return self.support / n if n else 0.0

    def _compute_confidence(self):
        known = self.support + self.negative_coverage
        return self.support / known if known else 0.0

    def _compute_coverage_factor(self):
        positive = len(self.coverage_information.positive_objects)
        return self.support / positive if positive else 0.0

    def _compute_coverage(self):
        return len(self.coverage_information.covered_objects)

    def _compute_negative_coverage(self):
        information = self.coverage_information
        return int(np.count_nonzero(
            information.negative_mask[information.covered_objects]))

    def _compute_epsilon(self):
        return EpsilonConsistencyMeasure().evaluate_coverage(
            self.coverage_information)

    def _compute_f_confirmation(self):
        a, b, c, d = self._contingency()
        denominator = a * d + b * c + 2 * a * b
        return (a * d - b * c) / denominator if denominator else 0.0

    def _compute_s_confirmation(self):
        a, b, c, d = self._contingency()
        return ((a / (a + b) if a + b else 0.0)
                - (c / (c + d) if c + d else 0.0))


def _format_characteristic(characteristics: RuleCharacteristics,
                           name: str) -> str:
    try:
        value = getattr(characteristics, name)
    except UnknownValueError:
        return '?'
    return str(value)


class RuleSet:
    """Immutable sequence of rules."""

    def __init__(self, rules: Iterable[Rule]):
        self._rules = tuple(rules)
        for rule in self._rules:
            if not isinstance(rule, Rule):
                raise TypeError("Expected a rule, got {!r}.".format(rule))

    def __len__(self):
        return len(self._rules)

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]

    def __iter__(self):
        return iter(self._rules)

    @property
    def rules(self) -> tuple:
        return self._rules

    @classmethod
    def join(cls, first: 'RuleSet', second: 'RuleSet') -> 'RuleSet':
        """:return: The rules of `first` followed by those of `second`."""
        return RuleSet(first.rules + second.rules)

    def select_by_semantics(self, semantics: RuleSemantics) -> 'RuleSet':
        """:return: The rules of the given semantics, in order."""
        return RuleSet(rule for rule in self._rules
                       if rule.semantics is semantics)

    def serialize(self) -> str:
        """:return: One rule per line."""
        return ''.join(str(rule) + '\n' for rule in self._rules)

    def __eq__(self, other):
        if isinstance(other, RuleSet):
            return other.rules == self.rules
        return NotImplemented

    def __repr__(self):
        return '{}({} rules)'.format(type(self).__name__, len(self))


class RuleSetWithCharacteristics(RuleSet):
    """Rule set with one `RuleCharacteristics` per rule.

    :raise InvalidSizeError: If the numbers of rules and characteristics
        differ.
    """

    SERIALIZED_CHARACTERISTICS = (('support', 'support'),
                                  ('strength', 'strength'),
                                  ('coverage-factor', 'coverage_factor'),
                                  ('confidence', 'confidence'),
                                  ('epsilon', 'epsilon'))

    def __init__(self, rules: Iterable[Rule],
                 characteristics: Iterable[RuleCharacteristics]):
        super().__init__(rules)
        self._characteristics = tuple(characteristics)
        if len(self._characteristics) != len(self._rules):
            raise InvalidSizeError(
                "Got {} characteristics for {} rules."
                .format(len(self._characteristics), len(self._rules)))

    @classmethod
    def from_rule_set(cls, rule_set: RuleSet, table: InformationTable
                      ) -> 'RuleSetWithCharacteristics':
        """:return: `rule_set` with characteristics computed on `table`."""
        return cls(rule_set, (ComputableRuleCharacteristics(
            RuleCoverageInformation(rule, table)) for rule in rule_set))

    def get_rule_characteristics(self, index: int) -> RuleCharacteristics:
        return self._characteristics[index]

    @property
    def characteristics(self) -> tuple:
        return self._characteristics

    @classmethod
    def join(cls, first, second):
        """:return: Rules and characteristics of `first` followed by those of
            `second`.
        """
        return RuleSetWithCharacteristics(
            first.rules + second.rules,
            first.characteristics + second.characteristics)

    def select_by_semantics(self, semantics):
        selected = [(rule, characteristics) for rule, characteristics
                    in zip(self._rules, self._characteristics)
                    if rule.semantics is semantics]
        return RuleSetWithCharacteristics(
            [rule for rule, _ in selected],
            [characteristics for _, characteristics in selected])

    def serialize(self) -> str:
        """:return: One rule per line, followed by its characteristics, e.g.
            `(a >= 2) =>[c] (d >= 2) [support=3, strength=0.6,
            coverage-factor=1.0, confidence=1.0, epsilon=0.0]`.
            Unknown values are written as `?`.
        """
        lines = []
        for rule, characteristics in zip(self._rules, self._characteristics):
            values = ', '.join(
                '{}={}'.format(label,
                               _format_characteristic(characteristics, name))
                for label, name in self.SERIALIZED_CHARACTERISTICS)
            lines.append('{} [{}]\n'.format(rule, values))
        return ''.join(lines)


class ConditionGenerator(ABC):
    """Proposes the next elementary condition while growing rule conditions.
    """

    @abstractmethod
    def get_best_condition(self, considered_objects: np.ndarray,
                           rule_conditions: RuleConditions) -> Condition:
        """:return: The best condition not yet in `rule_conditions`, built
            from evaluations of `considered_objects`.
        :raise ElementaryConditionNotFoundError: If there is none.
        """
        raise NotImplementedError


class RuleInductionStoppingConditionChecker(ABC):
    """Decides when rule conditions are good enough to form a rule."""

    @abstractmethod
    def is_stopping_condition_satisfied(self,
                                        rule_conditions: RuleConditions
                                        ) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_stopping_condition_satisfied_without_condition(
            self, rule_conditions: RuleConditions, condition_index: int
    ) -> bool:
        raise NotImplementedError


class RuleConditionsPruner(ABC):
    @abstractmethod
    def prune(self, rule_conditions: RuleConditions) -> RuleConditions:
        """:return: `rule_conditions` with redundant conditions removed."""
        raise NotImplementedError


class RuleConditionsSetPruner(ABC):
    @abstractmethod
    def prune(self, rule_conditions_list: List[RuleConditions],
              objects_to_cover: np.ndarray) -> List[RuleConditions]:
        """:return: A sublist of `rule_conditions_list` still covering all
            of `objects_to_cover` covered by the whole list.
        """
        raise NotImplementedError


class RuleMinimalityChecker(ABC):
    @abstractmethod
    def is_minimal(self, rule_conditions: RuleConditions,
                   accepted: Sequence[RuleConditions]) -> bool:
        """:return: Whether no rule conditions in `accepted` make
            `rule_conditions` redundant.
        """
        raise NotImplementedError


class RuleInducerComponents:
    """A concrete rule induction algorithm, defined by exchangeable
    component objects.

    Each component can be passed to the constructor, otherwise it is made by
    the corresponding `make_*` method. Subclasses define the defaults by
    overriding these methods; the ones here raise `NotImplementedError`.
    Components are made in the order listed below, so e.g. a pruner may use
    `self.stopping_condition_checker`.

    Attributes
    -----
    condition_generator : ConditionGenerator

    stopping_condition_checker : RuleInductionStoppingConditionChecker

    rule_conditions_pruner : RuleConditionsPruner

    rule_conditions_set_pruner : RuleConditionsSetPruner

    rule_minimality_checker : RuleMinimalityChecker

    rule_type : RuleType
        Certain rules are induced from lower, possible from upper
        approximations.

    allowed_negative_objects_type : AllowedNegativeObjectsType
        Which objects the rules of a union may cover.
    """

    COMPONENT_NAMES = ('condition_generator', 'stopping_condition_checker',
                       'rule_conditions_pruner', 'rule_conditions_set_pruner',
                       'rule_minimality_checker')

    rule_type: RuleType = RuleType.CERTAIN
    allowed_negative_objects_type: AllowedNegativeObjectsType = \
        AllowedNegativeObjectsType.POSITIVE_REGION

    def __init__(self, *,
                 condition_generator: ConditionGenerator = None,
                 stopping_condition_checker:
                 RuleInductionStoppingConditionChecker = None,
                 rule_conditions_pruner: RuleConditionsPruner = None,
                 rule_conditions_set_pruner: RuleConditionsSetPruner = None,
                 rule_minimality_checker: RuleMinimalityChecker = None,
                 rule_type: RuleType = None,
                 allowed_negative_objects_type:
                 AllowedNegativeObjectsType = None):
        if rule_type is not None:
            self.rule_type = rule_type
        if allowed_negative_objects_type is not None:
            self.allowed_negative_objects_type = allowed_negative_objects_type
        given = dict(condition_generator=condition_generator,
                     stopping_condition_checker=stopping_condition_checker,
                     rule_conditions_pruner=rule_conditions_pruner,
                     rule_conditions_set_pruner=rule_conditions_set_pruner,
                     rule_minimality_checker=rule_minimality_checker)
        for name in self.COMPONENT_NAMES:
            component = given[name]
            if component is None:
                component = getattr(self, 'make_' + name)()
            setattr(self, name, component)

    def make_condition_generator(self) -> ConditionGenerator:
        raise NotImplementedError

    def make_stopping_condition_checker(
            self) -> RuleInductionStoppingConditionChecker:
        raise NotImplementedError

    def make_rule_conditions_pruner(self) -> RuleConditionsPruner:
        raise NotImplementedError

    def make_rule_conditions_set_pruner(self) -> RuleConditionsSetPruner:
        raise NotImplementedError

    def make_rule_minimality_checker(self) -> RuleMinimalityChecker:
        raise NotImplementedError

    def get_params(self) -> Dict[str, object]:
        """:return: Constructor arguments reproducing this instance."""
        params = {name: getattr(self, name) for name in self.COMPONENT_NAMES}
        params['rule_type'] = self.rule_type
        params['allowed_negative_objects_type'] = \
            self.allowed_negative_objects_type
        return params

    def replace(self, **changes) -> 'RuleInducerComponents':
        """:return: A copy with some components (or parameters) replaced;
            all others are shared with self.
        """
        params = self.get_params()
        unknown = set(changes) - set(params)
        if unknown:
            raise TypeError("Unknown components {}.".format(sorted(unknown)))
        params.update(changes)
        return type(self)(**params)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, ', '.join(
            '{}={!r}'.format(name, value)
            for name, value in self.get_params().items()))
