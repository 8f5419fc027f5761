"""
Dominance-based rough set approach:
Attributes, decisions and the information table holding the learning data.
"""

import functools
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from rulelearn.types import \
    EvaluationField, PreferenceType, TernaryLogicValue, UnknownSimpleField, \
    UnknownSimpleFieldMV2, make_field, TRUE, FALSE, UNCOMPARABLE
from rulelearn.util import round_half_up


class InvalidSizeError(ValueError):
    """A sequence argument has a length not matching the data."""


class AttributeType(Enum):
    CONDITION = 'condition'
    DECISION = 'decision'
    DESCRIPTION = 'description'


class EvaluationAttribute:
    """Metadata of one column of an `InformationTable`.

    Attributes
    -----
    name : str

    active : bool
        Inactive attributes are ignored by dominance checks and decisions.

    attribute_type : AttributeType

    preference_type : PreferenceType

    value_type : str
        One of 'integer', 'real', 'enumeration'.

    missing_value_type : subclass of `UnknownSimpleField`
        Semantics used for missing values of this attribute.

    domain : tuple of str or None
        Elements of an 'enumeration' attribute, worst first.
    """

    def __init__(self,
                 name: str,
                 active: bool = True,
                 attribute_type: AttributeType = AttributeType.CONDITION,
                 preference_type: PreferenceType = PreferenceType.GAIN,
                 value_type: str = 'real',
                 missing_value_type: type = UnknownSimpleFieldMV2,
                 domain: Sequence[str] = None):
        if not isinstance(attribute_type, AttributeType):
            raise TypeError("Invalid attribute type {!r}."
                            .format(attribute_type))
        if not isinstance(preference_type, PreferenceType):
            raise TypeError("Invalid preference type {!r}."
                            .format(preference_type))
        if value_type not in ('integer', 'real', 'enumeration'):
            raise ValueError("Unknown value type {!r} of attribute {}."
                             .format(value_type, name))
        if not (isinstance(missing_value_type, type)
                and issubclass(missing_value_type, UnknownSimpleField)):
            raise TypeError("Missing value type of attribute {} must be a "
                            "subclass of UnknownSimpleField, got {!r}."
                            .format(name, missing_value_type))
        if value_type == 'enumeration' and not domain:
            raise ValueError("Enumeration attribute {} needs a domain."
                             .format(name))
        self.name = name
        self.active = active
        self.attribute_type = attribute_type
        self.preference_type = preference_type
        self.value_type = value_type
        self.missing_value_type = missing_value_type
        self.domain = tuple(domain) if domain is not None else None

    def make_field(self, value) -> EvaluationField:
        """:return: The evaluation of raw `value` on this attribute."""
        if isinstance(value, EvaluationField):
            return value
        return make_field(value, self.value_type, self.preference_type,
                          self.missing_value_type, self.domain)

    def is_active_condition(self) -> bool:
        return self.active and self.attribute_type is AttributeType.CONDITION

    def is_active_decision(self) -> bool:
        return self.active and self.attribute_type is AttributeType.DECISION

    def __repr__(self):
        return ('EvaluationAttribute({!r}, active={}, {}, {}, {!r})'
                .format(self.name, self.active, self.attribute_type.name,
                        self.preference_type.name, self.value_type))


class Decision(ABC):
    """Class membership of one object, made of one or more evaluations on
    decision attributes. Immutable and hashable.
    """

    @property
    @abstractmethod
    def evaluations(self) -> Mapping[int, EvaluationField]:
        """Mapping attribute index => evaluation."""
        raise NotImplementedError

    @property
    def attribute_indices(self) -> frozenset:
        return frozenset(self.evaluations)

    def get_evaluation(self, attribute_index: int) -> EvaluationField:
        """:raise KeyError: If `attribute_index` does not contribute."""
        return self.evaluations[attribute_index]

    def _combine(self, other: 'Decision', relation: str
                 ) -> TernaryLogicValue:
        """Compare attribute-wise and take the infimum, ordering
        FALSE < UNCOMPARABLE < TRUE.
        """
        if not isinstance(other, Decision):
            raise TypeError("Expected a decision, got {!r}.".format(other))
        mine = self.evaluations
        theirs = other.evaluations
        if mine.keys() != theirs.keys():
            return UNCOMPARABLE
        result = TRUE
        for attribute_index, evaluation in mine.items():
            partial = getattr(evaluation, relation)(theirs[attribute_index])
            if partial is FALSE:
                return FALSE
            if partial is UNCOMPARABLE:
                result = UNCOMPARABLE
        return result

    def is_at_least_as_good_as(self, other: 'Decision') -> TernaryLogicValue:
        return self._combine(other, 'is_at_least_as_good_as')

    def is_at_most_as_good_as(self, other: 'Decision') -> TernaryLogicValue:
        return self._combine(other, 'is_at_most_as_good_as')

    def is_equal_to(self, other: 'Decision') -> TernaryLogicValue:
        return self._combine(other, 'is_equal_to')

    def __eq__(self, other):
        if isinstance(other, Decision):
            return dict(self.evaluations) == dict(other.evaluations)
        return NotImplemented

    def __hash__(self):
        return hash(frozenset(self.evaluations.items()))


class SimpleDecision(Decision):
    """Decision on a single decision attribute."""

    def __init__(self, evaluation: EvaluationField, attribute_index: int):
        if not isinstance(evaluation, EvaluationField):
            raise TypeError("Expected an evaluation field, got {!r}."
                            .format(evaluation))
        self.evaluation = evaluation
        self.attribute_index = attribute_index

    @property
    def evaluations(self):
        return {self.attribute_index: self.evaluation}

    def __str__(self):
        return str(self.evaluation)

    def __repr__(self):
        return 'SimpleDecision({!r}, {})'.format(self.evaluation,
                                                 self.attribute_index)


class CompositeDecision(Decision):
    """Decision on at least two decision attributes."""

    def __init__(self, evaluations: Mapping[int, EvaluationField]):
        if len(evaluations) < 2:
            raise ValueError("Composite decision needs at least two "
                             "evaluations, got {}.".format(len(evaluations)))
        for evaluation in evaluations.values():
            if not isinstance(evaluation, EvaluationField):
                raise TypeError("Expected an evaluation field, got {!r}."
                                .format(evaluation))
        self._evaluations = dict(sorted(evaluations.items()))

    @property
    def evaluations(self):
        return self._evaluations

    def __str__(self):
        return '(' + ', '.join(str(evaluation) for evaluation
                               in self._evaluations.values()) + ')'

    def __repr__(self):
        return 'CompositeDecision({!r})'.format(self._evaluations)


def compare_decisions(first: Decision, second: Decision) -> int:
    """Three-way comparison for sorting decisions from worst to best.
    Incomparable decisions compare as equal.
    """
    if first.is_equal_to(second) is TRUE:
        return 0
    if first.is_at_most_as_good_as(second) is TRUE:
        return -1
    if first.is_at_least_as_good_as(second) is TRUE:
        return 1
    return 0


class DecisionDistribution:
    """Count of objects per decision.

    Built from an information table, the counts sum up to its number of
    objects.
    """

    def __init__(self, decisions: Iterable[Decision] = ()):
        self._counts: Dict[Decision, int] = {}
        for decision in decisions:
            self.increase_count(decision)

    def increase_count(self, decision: Decision) -> None:
        if not isinstance(decision, Decision):
            raise TypeError("Expected a decision, got {!r}.".format(decision))
        self._counts[decision] = self._counts.get(decision, 0) + 1

    def get_count(self, decision: Decision) -> int:
        return self._counts.get(decision, 0)

    def is_present(self, decision: Decision) -> bool:
        return decision in self._counts

    __contains__ = is_present

    @property
    def decisions(self) -> frozenset:
        return frozenset(self._counts)

    def items(self):
        """:return: The `(decision, count)` pairs."""
        return self._counts.items()

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def __len__(self):
        """Number of different decisions."""
        return len(self._counts)

    def get_mode(self) -> Optional[List[Decision]]:
        """:return: The most frequent decision(s), in insertion order, or None
            if the distribution is empty.
        """
        if not self._counts:
            return None
        maximum = max(self._counts.values())
        return [decision for decision, count in self._counts.items()
                if count == maximum]

    def get_median(self, ordered_decisions: Sequence[Decision]
                   ) -> Optional[Decision]:
        """Median decision w.r.t. a caller supplied order.

        Returns the first decision (in `ordered_decisions`) where the
        cumulative count reaches half of the total count, rounded half up.
        On an even split this is the left (lower) one of the two middle
        decisions.

        :param ordered_decisions: All decisions of this distribution, each
            once, from the worst to the best.
        :return: The median, or None for an empty distribution.
        :raise InvalidSizeError: If `ordered_decisions` does not have one
            entry per distinct decision.
        """
        if len(ordered_decisions) != len(self._counts):
            raise InvalidSizeError(
                "Expected {} ordered decisions, got {}."
                .format(len(self._counts), len(ordered_decisions)))
        if not self._counts:
            return None
        half = round_half_up(self.total / 2)
        cumulative = 0
        for decision in ordered_decisions:
            cumulative += self.get_count(decision)
            if cumulative >= half:
                return decision
        raise ValueError("Ordered decisions {} do not match distribution {}."
                         .format(ordered_decisions, self))

    def __eq__(self, other):
        if type(other) is type(self):
            return self._counts == other._counts
        return NotImplemented

    def __repr__(self):
        return 'DecisionDistribution({})'.format(
            ', '.join('{}: {}'.format(decision, count)
                      for decision, count in self._counts.items()))


class InformationTable:
    """Objects (rows) evaluated on attributes (columns).

    Evaluations are kept in a numpy object array, decisions are derived once
    from the active decision attributes.

    :param attributes: Sequence of `EvaluationAttribute`, one per column.
    :param fields: 2d array-like of `EvaluationField`, of shape
        `(n_objects, n_attributes)`.
    """

    def __init__(self, attributes: Sequence[EvaluationAttribute], fields):
        self._attributes = tuple(attributes)
        for attribute in self._attributes:
            if not isinstance(attribute, EvaluationAttribute):
                raise TypeError("Expected an EvaluationAttribute, got {!r}."
                                .format(attribute))
        n_attributes = len(self._attributes)
        if isinstance(fields, np.ndarray) and fields.dtype == object \
                and fields.ndim == 2:
            self._fields = fields
        else:
            rows = [list(row) for row in fields]
            self._fields = np.empty((len(rows), n_attributes), dtype=object)
            for object_index, row in enumerate(rows):
                if len(row) != n_attributes:
                    raise InvalidSizeError(
                        "Object {} has {} evaluations, expected {}."
                        .format(object_index, len(row), n_attributes))
                self._fields[object_index, :] = row
        if self._fields.shape[1] != n_attributes:
            raise InvalidSizeError("Got {} columns of evaluations for {} "
                                   "attributes.".format(self._fields.shape[1],
                                                        n_attributes))
        for field in self._fields.flat:
            if not isinstance(field, EvaluationField):
                raise TypeError("Expected an evaluation field, got {!r}."
                                .format(field))

        self.active_condition_attributes = np.array(
            [i for i, attribute in enumerate(self._attributes)
             if attribute.is_active_condition()], dtype=int)
        self.active_decision_attributes = np.array(
            [i for i, attribute in enumerate(self._attributes)
             if attribute.is_active_decision()], dtype=int)
        self._decisions = self._build_decisions(
            self.active_decision_attributes)
        self._all_decisions = None

    @classmethod
    def from_rows(cls, attributes: Sequence[EvaluationAttribute],
                  rows: Iterable[Sequence]) -> 'InformationTable':
        """Build a table from raw values, converted by each attribute's
        `make_field`.
        """
        attributes = tuple(attributes)
        fields = []
        for row in rows:
            row = list(row)
            if len(row) != len(attributes):
                raise InvalidSizeError("Row {} has {} values, expected {}."
                                       .format(row, len(row), len(attributes)))
            fields.append([attribute.make_field(value)
                           for attribute, value in zip(attributes, row)])
        return cls(attributes, fields)

    def _build_decisions(self, attribute_indices: np.ndarray
                         ) -> Optional[List[Decision]]:
        if not len(attribute_indices):
            return None
        if len(attribute_indices) == 1:
            index = int(attribute_indices[0])
            return [SimpleDecision(field, index)
                    for field in self._fields[:, index]]
        return [CompositeDecision({int(i): self._fields[row, i]
                                   for i in attribute_indices})
                for row in range(self.n_objects)]

    @property
    def attributes(self) -> tuple:
        return self._attributes

    @property
    def n_objects(self) -> int:
        return self._fields.shape[0]

    @property
    def n_attributes(self) -> int:
        return len(self._attributes)

    @property
    def fields(self) -> np.ndarray:
        """All evaluations, shape `(n_objects, n_attributes)`. Do not modify.
        """
        return self._fields

    def get_field(self, object_index: int, attribute_index: int
                  ) -> EvaluationField:
        return self._fields[object_index, attribute_index]

    def get_decision(self, object_index: int) -> Optional[Decision]:
        """:return: The decision of the object, or None if the table has no
            active decision attribute.
        """
        if self._decisions is None:
            return None
        return self._decisions[object_index]

    def get_decisions(self, only_active: bool = True
                      ) -> Optional[List[Decision]]:
        """:return: The decisions of all objects, built from the active (if
            `only_active`) or all decision attributes. None if there is no
            such attribute.
        """
        if only_active:
            return self._decisions
        if self._all_decisions is None:
            indices = np.array(
                [i for i, attribute in enumerate(self._attributes)
                 if attribute.attribute_type is AttributeType.DECISION],
                dtype=int)
            self._all_decisions = self._build_decisions(indices)
        return self._all_decisions

    @property
    def unique_decisions(self) -> List[Decision]:
        """Distinct decisions, in order of first appearance."""
        if self._decisions is None:
            return []
        return list(dict.fromkeys(self._decisions))

    @property
    def ordered_decisions(self) -> List[Decision]:
        """Distinct decisions sorted from the worst to the best. Incomparable
        decisions keep their order of first appearance.
        """
        return sorted(self.unique_decisions,
                      key=functools.cmp_to_key(compare_decisions))

    def select(self, object_indices: Sequence[int]) -> 'InformationTable':
        """:return: A new table of the given objects, in the given order."""
        indices = np.asarray(object_indices, dtype=int).reshape(-1)
        return type(self)(self._attributes, self._fields[indices])

    def discard(self, object_indices: Sequence[int]) -> 'InformationTable':
        """:return: A new table of all objects but the given ones."""
        keep = np.ones(self.n_objects, dtype=bool)
        keep[np.asarray(object_indices, dtype=int).reshape(-1)] = False
        return type(self)(self._attributes, self._fields[keep])

    def __len__(self):
        return self.n_objects

    def __repr__(self):
        return '{}({} objects x {} attributes)'.format(
            type(self).__name__, self.n_objects, self.n_attributes)
