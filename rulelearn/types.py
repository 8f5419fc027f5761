"""
Dominance-based rough set approach:
Evaluations of objects on attributes, compared under gain/cost preference.

All comparisons return a `TernaryLogicValue`, since evaluations of different
kinds (or missing evaluations) may be incomparable.
"""

import math
import numbers
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence


class TernaryLogicValue(Enum):
    """Result of comparing two evaluations."""
    TRUE = 1
    FALSE = 0
    UNCOMPARABLE = -1

    @classmethod
    def of(cls, condition: bool) -> 'TernaryLogicValue':
        """:return: TRUE if `condition` holds, FALSE otherwise."""
        return cls.TRUE if condition else cls.FALSE


class PreferenceType(Enum):
    """Preference direction of an attribute's value set.

    - GAIN: the greater, the better
    - COST: the smaller, the better
    - NONE: no order, only equality matters
    """
    GAIN = 'gain'
    COST = 'cost'
    NONE = 'none'


TRUE = TernaryLogicValue.TRUE
FALSE = TernaryLogicValue.FALSE
UNCOMPARABLE = TernaryLogicValue.UNCOMPARABLE


class EvaluationField(ABC):
    """Evaluation of an object on an attribute."""

    @abstractmethod
    def is_at_least_as_good_as(self, other: 'EvaluationField'
                               ) -> TernaryLogicValue:
        raise NotImplementedError

    @abstractmethod
    def is_at_most_as_good_as(self, other: 'EvaluationField'
                              ) -> TernaryLogicValue:
        raise NotImplementedError

    @abstractmethod
    def is_equal_to(self, other: 'EvaluationField') -> TernaryLogicValue:
        raise NotImplementedError

    @staticmethod
    def _check_field(other) -> 'EvaluationField':
        if not isinstance(other, EvaluationField):
            raise TypeError("Expected an evaluation field, got {!r}."
                            .format(other))
        return other


class SimpleField(EvaluationField):
    """An evaluation holding a single (possibly missing) value."""

    has_value = True


class KnownSimpleField(SimpleField):
    """A present, single value with a preference type.

    Subclasses define `_key`, the value used for raw ordering, and may
    restrict which other fields they are comparable with (`_comparable`).
    """

    def __init__(self, value, preference_type: PreferenceType =
                 PreferenceType.NONE):
        if not isinstance(preference_type, PreferenceType):
            raise TypeError("Invalid preference type {!r}."
                            .format(preference_type))
        self.value = value
        self.preference_type = preference_type

    @property
    def _key(self):
        return self.value

    def _comparable(self, other: 'KnownSimpleField') -> bool:
        return type(other) is type(self)

    def compare_to(self, other: EvaluationField) -> int:
        """Raw comparison, ignoring the preference type.

        :return: -1, 0 or 1 if `self` is smaller, equal or greater than
            `other`. A missing `other` value compares as equal.
        :raise TypeError: If `other` is a field of another kind.
        """
        self._check_field(other)
        if isinstance(other, UnknownSimpleField):
            return 0
        if not isinstance(other, KnownSimpleField) \
                or not self._comparable(other):
            raise TypeError("Cannot compare {!r} with {!r}."
                            .format(self, other))
        return (self._key > other._key) - (self._key < other._key)

    def _relation(self, other: EvaluationField, sign: int
                  ) -> TernaryLogicValue:
        """Preference-aware comparison; `sign` 1 means "at least as good",
        -1 means "at most as good"."""
        self._check_field(other)
        if isinstance(other, UnknownSimpleField):
            return other.reverse_comparison()
        if not isinstance(other, KnownSimpleField) \
                or not self._comparable(other):
            return UNCOMPARABLE
        comparison = self.compare_to(other)
        if self.preference_type is PreferenceType.GAIN:
            return TernaryLogicValue.of(comparison * sign >= 0)
        if self.preference_type is PreferenceType.COST:
            return TernaryLogicValue.of(comparison * sign <= 0)
        return TernaryLogicValue.of(comparison == 0)

    def is_at_least_as_good_as(self, other):
        return self._relation(other, 1)

    def is_at_most_as_good_as(self, other):
        return self._relation(other, -1)

    def is_equal_to(self, other):
        self._check_field(other)
        if isinstance(other, UnknownSimpleField):
            return other.reverse_comparison()
        if not isinstance(other, KnownSimpleField) \
                or not self._comparable(other):
            return UNCOMPARABLE
        return TernaryLogicValue.of(self.compare_to(other) == 0)

    def mean(self, other: EvaluationField) -> EvaluationField:
        """:return: The mean of `self` and `other`, of the type of `self`.
            Mean with a missing value is the missing value.
        """
        if isinstance(other, UnknownSimpleField):
            return other
        if self.compare_to(other) == 0:
            return self
        return self._with_value(self._mean_value(other))

    def _mean_value(self, other: 'KnownSimpleField'):
        return (self.value + other.value) / 2

    def _with_value(self, value) -> 'KnownSimpleField':
        return type(self)(value, self.preference_type)

    def __eq__(self, other):
        if type(other) is type(self):
            return (self._key == other._key
                    and self.preference_type == other.preference_type)
        return NotImplemented

    def __hash__(self):
        return hash((type(self), self._key, self.preference_type))

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '{}({!r}, {})'.format(type(self).__name__, self.value,
                                     self.preference_type.name)


class IntegerField(KnownSimpleField):
    def __init__(self, value: int, preference_type=PreferenceType.NONE):
        super().__init__(int(value), preference_type)

    def _mean_value(self, other):
        # truncate toward zero, as integer division would
        return int((self.value + other.value) / 2)


class RealField(KnownSimpleField):
    def __init__(self, value: float, preference_type=PreferenceType.NONE):
        super().__init__(float(value), preference_type)

    def __str__(self):
        # print integral values without trailing ".0" noise
        if self.value.is_integer():
            return str(int(self.value))
        return str(self.value)


class EnumerationField(KnownSimpleField):
    """An element of a finite, ordered `domain`; ordered by position.

    :param value: The element (must be contained in `domain`) or its index.
    :param domain: Sequence of element names, worst first for gain type.
    """

    def __init__(self, value, domain: Sequence[str],
                 preference_type=PreferenceType.NONE):
        domain = tuple(domain)
        if not domain:
            raise ValueError("Enumeration domain is empty.")
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            index = int(value)
            if not 0 <= index < len(domain):
                raise ValueError("Enumeration index {} out of range for "
                                 "domain {}.".format(value, domain))
        else:
            try:
                index = domain.index(value)
            except ValueError:
                raise ValueError("Element {!r} not in enumeration domain {}."
                                 .format(value, domain)) from None
        super().__init__(index, preference_type)
        self.domain = domain

    def _comparable(self, other):
        return type(other) is type(self) and other.domain == self.domain

    @property
    def element(self) -> str:
        return self.domain[self.value]

    def _mean_value(self, other):
        return int((self.value + other.value) / 2)

    def _with_value(self, value):
        return EnumerationField(value, self.domain, self.preference_type)

    def __eq__(self, other):
        if type(other) is type(self):
            return (self.value == other.value and self.domain == other.domain
                    and self.preference_type == other.preference_type)
        return NotImplemented

    def __hash__(self):
        return hash((type(self), self.value, self.domain,
                     self.preference_type))

    def __str__(self):
        return str(self.element)

    def __repr__(self):
        return 'EnumerationField({!r}, {!r}, {})'.format(
            self.element, self.domain, self.preference_type.name)


class UnknownSimpleField(SimpleField):
    """A missing evaluation.

    Comparing a missing value with any simple field (`missing.is_*(field)`)
    yields `equal_when_compared_to_any_evaluation`, comparing a known field
    with a missing value (`field.is_*(missing)`) yields
    `equal_when_reverse_compared_to_any_evaluation`. Non-simple fields are
    uncomparable.

    Instances of the same class are equal.
    """

    has_value = False
    equal_when_compared_to_any_evaluation: bool
    equal_when_reverse_compared_to_any_evaluation: bool

    def _comparison(self, other) -> TernaryLogicValue:
        self._check_field(other)
        if not isinstance(other, SimpleField):
            return UNCOMPARABLE
        return TernaryLogicValue.of(self.equal_when_compared_to_any_evaluation)

    def reverse_comparison(self) -> TernaryLogicValue:
        """:return: Result of any comparison `known_field.is_*(self)`."""
        return TernaryLogicValue.of(
            self.equal_when_reverse_compared_to_any_evaluation)

    def is_at_least_as_good_as(self, other):
        return self._comparison(other)

    def is_at_most_as_good_as(self, other):
        return self._comparison(other)

    def is_equal_to(self, other):
        return self._comparison(other)

    def compare_to(self, other) -> int:
        return 0

    def mean(self, other):
        return self

    def __eq__(self, other):
        return type(other) is type(self)

    def __hash__(self):
        return hash(type(self))

    def __str__(self):
        return '?'

    def __repr__(self):
        return type(self).__name__ + '()'


class UnknownSimpleFieldMV15(UnknownSimpleField):
    """Missing value of type 1.5: a missing value is as good as anything,
    but no known value is as good as (or equal to) a missing one.
    """
    equal_when_compared_to_any_evaluation = True
    equal_when_reverse_compared_to_any_evaluation = False


class UnknownSimpleFieldMV2(UnknownSimpleField):
    """Missing value of type 2: a missing value is equal to anything, in
    both comparison directions.
    """
    equal_when_compared_to_any_evaluation = True
    equal_when_reverse_compared_to_any_evaluation = True


class PairField(EvaluationField):
    """A pair of simple evaluations, e.g. an interval.

    `self` is at least as good as `other` iff `first` is at least as good and
    `second` is at most as good as the respective other part.
    """

    def __init__(self, first: SimpleField, second: SimpleField):
        if not isinstance(first, SimpleField) \
                or not isinstance(second, SimpleField):
            raise TypeError("PairField requires two simple fields, got "
                            "{!r} and {!r}.".format(first, second))
        self.first = first
        self.second = second

    def _both(self, first: TernaryLogicValue, second: TernaryLogicValue
              ) -> TernaryLogicValue:
        if UNCOMPARABLE in (first, second):
            return UNCOMPARABLE
        return TernaryLogicValue.of(first is TRUE and second is TRUE)

    def is_at_least_as_good_as(self, other):
        self._check_field(other)
        if not isinstance(other, PairField):
            return UNCOMPARABLE
        return self._both(self.first.is_at_least_as_good_as(other.first),
                          self.second.is_at_most_as_good_as(other.second))

    def is_at_most_as_good_as(self, other):
        self._check_field(other)
        if not isinstance(other, PairField):
            return UNCOMPARABLE
        return self._both(self.first.is_at_most_as_good_as(other.first),
                          self.second.is_at_least_as_good_as(other.second))

    def is_equal_to(self, other):
        self._check_field(other)
        if not isinstance(other, PairField):
            return UNCOMPARABLE
        return self._both(self.first.is_equal_to(other.first),
                          self.second.is_equal_to(other.second))

    def __eq__(self, other):
        if type(other) is type(self):
            return self.first == other.first and self.second == other.second
        return NotImplemented

    def __hash__(self):
        return hash((PairField, self.first, self.second))

    def __str__(self):
        return '({}, {})'.format(self.first, self.second)

    def __repr__(self):
        return 'PairField({!r}, {!r})'.format(self.first, self.second)


def make_field(value, value_type: str,
               preference_type: PreferenceType = PreferenceType.NONE,
               missing_value_type: type = UnknownSimpleFieldMV2,
               domain: Optional[Sequence[str]] = None) -> EvaluationField:
    """Build an evaluation from a raw value.

    :param value: The raw value. `None`, `'?'` and NaN denote a missing value.
    :param value_type: One of 'integer', 'real', 'enumeration'.
    :param missing_value_type: Subclass of `UnknownSimpleField` to use for
        missing values.
    :param domain: Required for 'enumeration'.
    """
    if value is None or (isinstance(value, str) and value == '?') \
            or (isinstance(value, float) and math.isnan(value)):
        return missing_value_type()
    if value_type == 'integer':
        return IntegerField(value, preference_type)
    if value_type == 'real':
        return RealField(value, preference_type)
    if value_type == 'enumeration':
        if domain is None:
            raise ValueError("Enumeration value {!r} needs a domain."
                             .format(value))
        return EnumerationField(value, domain, preference_type)
    raise ValueError("Unknown value type {!r}, expected one of 'integer', "
                     "'real', 'enumeration'.".format(value_type))
