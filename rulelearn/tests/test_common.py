"""Tests for `rulelearn.common`."""

import pytest
from numpy.testing import assert_array_equal

from rulelearn.common import ComputableRuleCharacteristics, \
    ConditionAtLeast, ConditionAtMost, ConditionEqual, Rule, \
    RuleCharacteristics, RuleConditions, RuleCoverageInformation, \
    RuleSemantics, RuleSet, RuleSetWithCharacteristics, RuleType, \
    UnknownValueError, make_condition
from rulelearn.data import EvaluationAttribute, InvalidSizeError
from rulelearn.types import IntegerField, PreferenceType
from .datasets import composite_decision_table, decision_attribute

GAIN = PreferenceType.GAIN
COST = PreferenceType.COST

A_GAIN = EvaluationAttribute('a', value_type='integer')
A_COST = EvaluationAttribute('a', value_type='integer', preference_type=COST)
D = decision_attribute()


def rule(condition_value, decision_value, semantics=RuleSemantics.AT_LEAST,
         rule_type=RuleType.CERTAIN):
    conditions = [] if condition_value is None else [
        make_condition(semantics, 0, A_GAIN,
                       IntegerField(condition_value, GAIN))]
    return Rule(rule_type, conditions,
                make_condition(semantics, 1, D,
                               IntegerField(decision_value, GAIN)))


@pytest.mark.parametrize('condition_class, attribute, text, satisfied', [
    pytest.param(ConditionAtLeast, A_GAIN, 'a >= 3', [False, True, True],
                 id="at_least_gain"),
    pytest.param(ConditionAtLeast, A_COST, 'a <= 3', [True, True, False],
                 id="at_least_cost"),
    pytest.param(ConditionAtMost, A_GAIN, 'a <= 3', [True, True, False],
                 id="at_most_gain"),
    pytest.param(ConditionAtMost, A_COST, 'a >= 3', [False, True, True],
                 id="at_most_cost"),
])
def test_conditions(condition_class, attribute, text, satisfied):
    preference = attribute.preference_type
    condition = condition_class(0, attribute, IntegerField(3, preference))
    assert str(condition) == text
    assert [condition.satisfied_by(IntegerField(v, preference))
            for v in (2, 3, 4)] == satisfied
    assert condition.to_string('b').startswith('b ')


def test_condition_equal_and_generality():
    attribute = EvaluationAttribute('n', value_type='integer',
                                    preference_type=PreferenceType.NONE)
    condition = make_condition(RuleSemantics.AT_LEAST, 0, attribute,
                               IntegerField(3))
    assert isinstance(condition, ConditionEqual)
    assert str(condition) == 'n = 3'
    assert condition.satisfied_by(IntegerField(3))
    assert not condition.satisfied_by(IntegerField(4))

    weak = ConditionAtLeast(0, A_GAIN, IntegerField(2, GAIN))
    strong = ConditionAtLeast(0, A_GAIN, IntegerField(4, GAIN))
    assert weak.is_at_least_as_general_as(strong)
    assert not strong.is_at_least_as_general_as(weak)
    assert not weak.is_at_least_as_general_as(
        ConditionAtMost(0, A_GAIN, IntegerField(4, GAIN)))
    assert weak == ConditionAtLeast(0, A_GAIN, IntegerField(2, GAIN))
    assert len({weak, strong, ConditionAtLeast(0, A_GAIN,
                                               IntegerField(4, GAIN))}) == 2


def test_rule_string():
    assert str(rule(4, 4)) == '(a >= 4) =>[c] (d >= 4)'
    assert str(rule(2, 1, RuleSemantics.AT_MOST, RuleType.POSSIBLE)) \
        == '(a <= 2) =>[p] (d <= 1)'
    assert str(rule(None, 1, rule_type=RuleType.APPROXIMATE)) \
        == '=>[a] (d >= 1)'
    assert rule(4, 4).to_string(['x', 'y']) == '(x >= 4) =>[c] (y >= 4)'
    two_conditions = Rule(
        RuleType.CERTAIN,
        [ConditionAtLeast(0, A_GAIN, IntegerField(2, GAIN)),
         ConditionAtLeast(0, A_GAIN, IntegerField(3, GAIN))],
        ConditionAtLeast(1, D, IntegerField(2, GAIN)))
    assert str(two_conditions) == '(a >= 2) & (a >= 3) =>[c] (d >= 2)'


def test_rule_coverage(monotonic):
    r = rule(4, 4)
    assert r.semantics is RuleSemantics.AT_LEAST
    assert r.covers(3, monotonic)
    assert not r.covers(2, monotonic)
    assert r.supported_by(4, monotonic)
    information = RuleCoverageInformation(r, monotonic)
    assert_array_equal(information.covered_objects, [3, 4])
    assert_array_equal(information.positive_objects, [3, 4])
    assert r == rule(4, 4)
    assert r != rule(4, 4, rule_type=RuleType.POSSIBLE)
    with pytest.raises(ValueError):
        Rule(RuleType.CERTAIN, [], [])


def test_computable_characteristics(monotonic):
    characteristics = ComputableRuleCharacteristics(
        RuleCoverageInformation(rule(4, 4), monotonic))
    assert characteristics.support == 2
    assert characteristics.strength == 0.4
    assert characteristics.coverage == 2
    assert characteristics.negative_coverage == 0
    assert characteristics.coverage_factor == 1.0
    assert characteristics.confidence == 1.0
    assert characteristics.epsilon == 0.0
    assert characteristics.f_confirmation == 1.0
    assert characteristics.s_confirmation == 1.0


def test_characteristics_of_inconsistent_rule(monotonic):
    # covers objects 2, 3, 4, where only 3 and 4 have d >= 4
    characteristics = ComputableRuleCharacteristics(
        RuleCoverageInformation(rule(3, 4), monotonic))
    assert characteristics.support == 2
    assert characteristics.negative_coverage == 1
    assert characteristics.confidence == pytest.approx(2 / 3)
    assert characteristics.epsilon == pytest.approx(1 / 3)
    # a=2, b=1, c=0, d=2
    assert characteristics.f_confirmation == pytest.approx(4 / 8)
    assert characteristics.s_confirmation == pytest.approx(2 / 3)


@pytest.mark.parametrize('condition_class, contradicted', [
    pytest.param(ConditionAtLeast, [True, True, False], id="at_least"),
    pytest.param(ConditionAtMost, [False, True, True], id="at_most"),
])
def test_condition_contradiction(condition_class, contradicted):
    condition = condition_class(0, A_GAIN, IntegerField(3, GAIN))
    assert [condition.contradicted_by(IntegerField(v, GAIN))
            for v in (2, 3, 4)] == contradicted
    attribute = EvaluationAttribute('n', value_type='integer',
                                    preference_type=PreferenceType.NONE)
    equal = ConditionEqual(0, attribute, IntegerField(3))
    assert not equal.contradicted_by(IntegerField(3))
    assert equal.contradicted_by(IntegerField(4))


def composite_rule(condition_value):
    """`(a <= condition_value) =>[c] (d0 <= 1) & (d1 <= 2)`, without
    conditions for None.
    """
    table = composite_decision_table()
    a, d0, d1 = table.attributes
    conditions = [] if condition_value is None else [
        ConditionAtMost(0, a, IntegerField(condition_value, GAIN))]
    return Rule(RuleType.CERTAIN, conditions,
                [ConditionAtMost(1, d0, IntegerField(1, GAIN)),
                 ConditionAtMost(2, d1, IntegerField(2, GAIN))]), table


def test_neutral_objects():
    # decision (2, 1) of object 1 is incomparable to the limit (1, 2),
    # decision (2, 2) of object 3 is worse
    r, table = composite_rule(3)
    information = RuleCoverageInformation(r, table)
    assert_array_equal(information.covered_objects, [0, 1, 2])
    assert_array_equal(information.positive_objects, [0, 2])
    assert_array_equal(information.neutral_mask, [False, True, False, False])
    assert_array_equal(information.negative_mask,
                       [False, False, False, True])
    characteristics = ComputableRuleCharacteristics(information)
    assert characteristics.coverage == 3
    assert characteristics.support == 2
    assert characteristics.negative_coverage == 0
    assert characteristics.confidence == 1.0
    assert characteristics.epsilon == 0.0
    assert characteristics.strength == 0.5
    assert characteristics.coverage_factor == 1.0
    assert characteristics.f_confirmation == 1.0


def test_characteristics_with_neutral_objects():
    # covers all objects: two positive, one neutral and one negative
    r, table = composite_rule(None)
    characteristics = ComputableRuleCharacteristics(
        RuleCoverageInformation(r, table))
    assert characteristics.coverage == 4
    assert characteristics.negative_coverage == 1
    assert characteristics.confidence == pytest.approx(2 / 3)
    assert characteristics.epsilon == 1.0
    # strength relates support to all objects, neutral ones included
    assert characteristics.strength == 0.5
    # a=2, b=1, c=0, d=0
    assert characteristics.f_confirmation == 0.0
    assert characteristics.s_confirmation == pytest.approx(2 / 3)


def test_unknown_characteristics():
    characteristics = RuleCharacteristics(support=10, epsilon=0.1)
    assert characteristics.support == 10
    assert characteristics.is_known('epsilon')
    assert not characteristics.is_known('confidence')
    with pytest.raises(UnknownValueError):
        characteristics.confidence
    characteristics.confidence = 0.5
    assert characteristics.confidence == 0.5
    with pytest.raises(TypeError):
        RuleCharacteristics(lift=2)


def test_rule_set_serialize():
    rules = [rule(4, 4), rule(1, 1, RuleSemantics.AT_MOST)]
    rule_set = RuleSetWithCharacteristics(rules, [
        RuleCharacteristics(support=10, strength=0.2, coverage_factor=0.3,
                            epsilon=0.1),
        RuleCharacteristics(support=1, strength=0.2, coverage_factor=1.0,
                            confidence=1.0, epsilon=0.0),
    ])
    assert rule_set.serialize() == (
        "(a >= 4) =>[c] (d >= 4) [support=10, strength=0.2, "
        "coverage-factor=0.3, confidence=?, epsilon=0.1]\n"
        "(a <= 1) =>[c] (d <= 1) [support=1, strength=0.2, "
        "coverage-factor=1.0, confidence=1.0, epsilon=0.0]\n")
    assert RuleSet(rules).serialize() == \
        "(a >= 4) =>[c] (d >= 4)\n(a <= 1) =>[c] (d <= 1)\n"


def test_rule_set_from_table(monotonic):
    rule_set = RuleSetWithCharacteristics.from_rule_set(
        RuleSet([rule(4, 4)]), monotonic)
    assert rule_set.serialize() == (
        "(a >= 4) =>[c] (d >= 4) [support=2, strength=0.4, "
        "coverage-factor=1.0, confidence=1.0, epsilon=0.0]\n")


def test_rule_set_join_and_select():
    up = RuleSetWithCharacteristics([rule(4, 4)],
                                    [RuleCharacteristics(support=2)])
    down = RuleSetWithCharacteristics([rule(1, 1, RuleSemantics.AT_MOST)],
                                      [RuleCharacteristics(support=1)])
    joined = RuleSetWithCharacteristics.join(up, down)
    assert len(joined) == 2
    assert joined[1] == rule(1, 1, RuleSemantics.AT_MOST)
    assert joined.get_rule_characteristics(1).support == 1
    selected = joined.select_by_semantics(RuleSemantics.AT_MOST)
    assert list(selected) == [rule(1, 1, RuleSemantics.AT_MOST)]
    assert selected.get_rule_characteristics(0).support == 1
    assert len(joined.select_by_semantics(RuleSemantics.EQUAL)) == 0
    assert RuleSet.join(RuleSet(up), RuleSet(down)) == RuleSet(joined)
    assert joined.select_by_semantics(RuleSemantics.AT_LEAST) == up
    assert selected == down
    with pytest.raises(InvalidSizeError):
        RuleSetWithCharacteristics([rule(4, 4)], [])


def test_rule_conditions(monotonic):
    rule_conditions = RuleConditions(monotonic, positive_objects=[3, 4])
    assert_array_equal(rule_conditions.covered_objects, range(5))
    assert rule_conditions.rule_type is RuleType.CERTAIN
    index = rule_conditions.add_condition(
        ConditionAtLeast(0, A_GAIN, IntegerField(2, GAIN)))
    assert index == 0
    rule_conditions.add_condition(
        ConditionAtLeast(0, A_GAIN, IntegerField(4, GAIN)))
    assert_array_equal(rule_conditions.covered_objects, [3, 4])
    assert rule_conditions.covers(3)
    assert not rule_conditions.covers(2)
    assert rule_conditions.contains_condition_for_attribute(0)
    assert str(rule_conditions) == '(a >= 2) & (a >= 4)'
    assert_array_equal(rule_conditions.covered_objects_without_condition(1),
                       [1, 2, 3, 4])
    assert_array_equal(rule_conditions.covered_objects_with_condition(
        ConditionAtLeast(0, A_GAIN, IntegerField(5, GAIN))), [4])
    assert rule_conditions.covers_only_allowed(
        rule_conditions.covered_objects)

    removed = rule_conditions.remove_condition(1)
    assert str(removed) == 'a >= 4'
    assert len(rule_conditions) == 1
    assert_array_equal(rule_conditions.covered_objects, [1, 2, 3, 4])
    with pytest.raises(IndexError):
        rule_conditions.remove_condition(5)
    with pytest.raises(IndexError):
        rule_conditions.covered_objects_without_condition(1)
    rule_conditions.remove_condition(0)
    assert not rule_conditions.contains_condition_for_attribute(0)


def test_rule_conditions_generality(monotonic):
    general = RuleConditions(monotonic, positive_objects=[3, 4])
    general.add_condition(ConditionAtLeast(0, A_GAIN, IntegerField(2, GAIN)))
    specific = RuleConditions(monotonic, positive_objects=[3, 4])
    specific.add_condition(ConditionAtLeast(0, A_GAIN, IntegerField(3, GAIN)))
    assert general.is_at_least_as_general_as(specific)
    assert not specific.is_at_least_as_general_as(general)


def test_rule_conditions_allowed_objects(monotonic):
    rule_conditions = RuleConditions(monotonic, positive_objects=[3, 4],
                                     objects_that_can_be_covered=[2, 3, 4])
    assert not rule_conditions.covers_only_allowed(
        rule_conditions.covered_objects)
    with pytest.raises(IndexError):
        RuleConditions(monotonic, positive_objects=[7])
