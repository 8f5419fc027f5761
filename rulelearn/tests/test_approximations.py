"""Tests for `rulelearn.approximations`."""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from rulelearn.approximations import \
    ClassicalDominanceBasedRoughSetCalculator, Union, Unions, UnionType, \
    VCDominanceBasedRoughSetCalculator
from rulelearn.data import EvaluationAttribute, InformationTable, \
    SimpleDecision
from rulelearn.dominance import InformationTableWithDecisionDistributions
from rulelearn.measures import EpsilonConsistencyMeasure, \
    RoughMembershipMeasure
from rulelearn.types import IntegerField, PreferenceType, TRUE, FALSE
from .datasets import decision_attribute


def limit(value):
    return SimpleDecision(IntegerField(value, PreferenceType.GAIN), 2)


def union_of(table, union_type, value, calculator=None):
    if calculator is None:
        calculator = ClassicalDominanceBasedRoughSetCalculator()
    return Union(union_type, limit(value), table, calculator)


def test_unions_order(classical_unions):
    assert len(classical_unions) == 4
    assert [str(u) for u in classical_unions.upward_unions] \
        == ['at least 3', 'at least 2']
    assert [str(u) for u in classical_unions.downward_unions] \
        == ['at most 1', 'at most 2']
    assert classical_unions.get(UnionType.AT_MOST) \
        is classical_unions.downward_unions
    assert [u.union_type for u in classical_unions] == \
        [UnionType.AT_LEAST] * 2 + [UnionType.AT_MOST] * 2


@pytest.mark.parametrize('union_type, value, objects, lower, upper', [
    pytest.param(UnionType.AT_LEAST, 3, [4, 5], [4, 5], [4, 5],
                 id="at_least_3"),
    pytest.param(UnionType.AT_LEAST, 2, [2, 3, 4, 5], [4, 5],
                 [2, 3, 4, 5, 6], id="at_least_2"),
    pytest.param(UnionType.AT_MOST, 1, [0, 1, 6], [0, 1],
                 [0, 1, 2, 3, 6], id="at_most_1"),
    pytest.param(UnionType.AT_MOST, 2, [0, 1, 2, 3, 6], [0, 1, 2, 3, 6],
                 [0, 1, 2, 3, 6], id="at_most_2"),
])
def test_classical_approximations(two_criteria, union_type, value, objects,
                                  lower, upper):
    union = union_of(two_criteria, union_type, value)
    assert_array_equal(union.objects, objects)
    assert_array_equal(union.lower_approximation, lower)
    assert_array_equal(union.upper_approximation, upper)
    assert_array_equal(union.boundary, np.setdiff1d(upper, lower))
    # lower approximation within the union within the upper approximation
    assert set(lower) <= set(objects) <= set(upper)
    assert union.quality_of_approximation == len(lower) / len(objects)
    assert union.accuracy_of_approximation == len(lower) / len(upper)


def test_complementary_union(two_criteria):
    union = union_of(two_criteria, UnionType.AT_LEAST, 2)
    complement = union.complementary_union
    assert str(complement) == 'strictly at most 2'
    assert complement.union_type is UnionType.AT_MOST
    assert_array_equal(complement.objects, [0, 1, 6])
    assert union.complementary_set_size == 3
    assert len(union.neutral_objects) == 0
    assert union.is_concordant_with_decision(limit(2)) is TRUE
    assert complement.is_concordant_with_decision(limit(2)) is FALSE
    assert union.is_decision_negative(limit(1))
    assert union.is_decision_positive(limit(3))
    assert not union.is_decision_neutral(limit(3))


def test_vc_approximations(two_criteria):
    calculator = VCDominanceBasedRoughSetCalculator(
        EpsilonConsistencyMeasure(), 0.34)
    union = union_of(two_criteria, UnionType.AT_LEAST, 2, calculator)
    # objects 2 and 3 have epsilon 1/3 due to object 6
    assert_array_equal(union.lower_approximation, [2, 3, 4, 5])
    assert_array_equal(union.positive_region, [2, 3, 4, 5, 6])
    strict = VCDominanceBasedRoughSetCalculator(EpsilonConsistencyMeasure(),
                                                0.3)
    assert_array_equal(
        union_of(two_criteria, UnionType.AT_LEAST, 2, strict)
        .lower_approximation, [4, 5])


def test_vc_rough_membership(two_criteria):
    calculator = VCDominanceBasedRoughSetCalculator(RoughMembershipMeasure(),
                                                    0.8)
    union = union_of(two_criteria, UnionType.AT_LEAST, 2, calculator)
    # rough membership of objects 2 and 3: 4 of 5 resp. 3 of 4 dominating
    assert_array_equal(union.lower_approximation, [2, 4, 5])


def test_positive_region(two_criteria):
    up = union_of(two_criteria, UnionType.AT_LEAST, 2)
    assert_array_equal(up.positive_region, [4, 5])
    down = union_of(two_criteria, UnionType.AT_MOST, 2)
    assert_array_equal(down.positive_region, [0, 1, 2, 3, 6])


def test_union_validation(two_criteria):
    calculator = ClassicalDominanceBasedRoughSetCalculator()
    with pytest.raises(TypeError):
        Union('at least', limit(2), two_criteria, calculator)
    with pytest.raises(ValueError):
        # not a decision attribute
        Union(UnionType.AT_LEAST,
              SimpleDecision(IntegerField(2, PreferenceType.GAIN), 0),
              two_criteria, calculator)

    attributes = [EvaluationAttribute('a'),
                  decision_attribute(preference_type=PreferenceType.NONE)]
    nominal = InformationTableWithDecisionDistributions.from_table(
        InformationTable.from_rows(attributes, [[1, 1], [2, 2]]))
    with pytest.raises(ValueError):
        Union(UnionType.AT_LEAST,
              SimpleDecision(IntegerField(2, PreferenceType.NONE), 1),
              nominal, calculator)
    with pytest.raises(TypeError):
        Union(UnionType.AT_LEAST, limit(2),
              InformationTable(two_criteria.attributes, two_criteria.fields),
              calculator)


def test_vc_calculator_validation():
    with pytest.raises(TypeError):
        VCDominanceBasedRoughSetCalculator(None, 0.0)
    with pytest.raises(TypeError):
        VCDominanceBasedRoughSetCalculator(EpsilonConsistencyMeasure(), '0')
    with pytest.raises(TypeError):
        VCDominanceBasedRoughSetCalculator(EpsilonConsistencyMeasure(), True)


def test_classical_lower_approximations_are_consistent(classical_unions):
    measure = EpsilonConsistencyMeasure()
    for union in classical_unions:
        assert set(union.lower_approximation) <= set(union.objects)
        assert set(union.objects) <= set(union.upper_approximation)
        for x in union.lower_approximation:
            assert measure.calculate_consistency(x, union) == 0.0
        for x in union.objects:
            assert 0.0 <= measure.calculate_consistency(x, union) <= 1.0
