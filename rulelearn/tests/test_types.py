"""Tests for `rulelearn.types`."""

import math

import pytest

from rulelearn.types import EnumerationField, IntegerField, PairField, \
    PreferenceType, RealField, UnknownSimpleFieldMV15, \
    UnknownSimpleFieldMV2, make_field, TRUE, FALSE, UNCOMPARABLE

GAIN = PreferenceType.GAIN
COST = PreferenceType.COST
NONE = PreferenceType.NONE


@pytest.mark.parametrize('preference, at_least, at_most', [
    pytest.param(GAIN, FALSE, TRUE, id="gain"),
    pytest.param(COST, TRUE, FALSE, id="cost"),
    pytest.param(NONE, FALSE, FALSE, id="none"),
])
def test_known_field_relations(preference, at_least, at_most):
    small = IntegerField(2, preference)
    big = IntegerField(5, preference)
    assert small.is_at_least_as_good_as(big) is at_least
    assert small.is_at_most_as_good_as(big) is at_most
    assert small.is_equal_to(big) is FALSE
    assert small.is_at_least_as_good_as(IntegerField(2, preference)) is TRUE
    assert small.is_at_most_as_good_as(IntegerField(2, preference)) is TRUE


def test_fields_of_other_kind_are_uncomparable():
    assert IntegerField(1, GAIN).is_at_least_as_good_as(RealField(1, GAIN)) \
        is UNCOMPARABLE
    a = EnumerationField('x', ['x', 'y'], GAIN)
    b = EnumerationField('x', ['x', 'z'], GAIN)
    assert a.is_equal_to(b) is UNCOMPARABLE
    with pytest.raises(TypeError):
        IntegerField(1, GAIN).compare_to(RealField(1.0, GAIN))


@pytest.mark.parametrize('missing, forward, reverse', [
    pytest.param(UnknownSimpleFieldMV15, TRUE, FALSE, id="mv1.5"),
    pytest.param(UnknownSimpleFieldMV2, TRUE, TRUE, id="mv2"),
])
def test_missing_value_semantics(missing, forward, reverse):
    known = RealField(3.0, GAIN)
    unknown = missing()
    for relation in ('is_at_least_as_good_as', 'is_at_most_as_good_as',
                     'is_equal_to'):
        assert getattr(unknown, relation)(known) is forward
        assert getattr(known, relation)(unknown) is reverse
    pair = PairField(IntegerField(1), IntegerField(2))
    assert unknown.is_at_least_as_good_as(pair) is UNCOMPARABLE
    assert unknown == missing()
    assert unknown.compare_to(known) == 0
    assert known.compare_to(unknown) == 0


def test_mean():
    assert IntegerField(1, GAIN).mean(IntegerField(4, GAIN)) \
        == IntegerField(2, GAIN)
    assert IntegerField(-1, GAIN).mean(IntegerField(-4, GAIN)) \
        == IntegerField(-2, GAIN)
    assert RealField(1, COST).mean(RealField(4, COST)) == RealField(2.5, COST)
    domain = ['bad', 'medium', 'good']
    assert EnumerationField('bad', domain, GAIN).mean(
        EnumerationField('good', domain, GAIN)).element == 'medium'
    unknown = UnknownSimpleFieldMV2()
    assert IntegerField(3).mean(unknown) is unknown
    assert unknown.mean(IntegerField(3)) is unknown


def test_enumeration_field():
    domain = ('low', 'mid', 'high')
    field = EnumerationField('mid', domain, GAIN)
    assert field.value == 1
    assert field.element == 'mid'
    assert str(field) == 'mid'
    assert field == EnumerationField(1, domain, GAIN)
    assert field.is_at_least_as_good_as(EnumerationField('low', domain, GAIN)) \
        is TRUE
    with pytest.raises(ValueError):
        EnumerationField('none', domain)
    with pytest.raises(ValueError):
        EnumerationField(3, domain)


def test_pair_field():
    a = PairField(IntegerField(2, GAIN), IntegerField(5, GAIN))
    b = PairField(IntegerField(1, GAIN), IntegerField(6, GAIN))
    assert a.is_at_least_as_good_as(b) is TRUE
    assert b.is_at_most_as_good_as(a) is TRUE
    assert a.is_at_most_as_good_as(b) is FALSE
    assert a.is_equal_to(PairField(IntegerField(2, GAIN),
                                   IntegerField(5, GAIN))) is TRUE
    assert a.is_at_least_as_good_as(IntegerField(2, GAIN)) is UNCOMPARABLE
    with pytest.raises(TypeError):
        PairField(a, IntegerField(1))


def test_real_field_str():
    assert str(RealField(3.0)) == '3'
    assert str(RealField(2.5)) == '2.5'


@pytest.mark.parametrize('value', [None, '?', math.nan])
def test_make_field_missing(value):
    assert isinstance(make_field(value, 'real', GAIN, UnknownSimpleFieldMV15),
                      UnknownSimpleFieldMV15)


def test_make_field():
    assert make_field(3, 'integer', COST) == IntegerField(3, COST)
    assert make_field('2.5', 'real') == RealField(2.5)
    assert make_field('b', 'enumeration', domain=['a', 'b']).value == 1
    with pytest.raises(ValueError):
        make_field('b', 'enumeration')
    with pytest.raises(ValueError):
        make_field(1, 'complex')
