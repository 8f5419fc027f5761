"""pytest fixtures for the test cases in this directory."""

import pytest

from rulelearn.approximations import \
    ClassicalDominanceBasedRoughSetCalculator, Unions
from rulelearn.dominance import InformationTableWithDecisionDistributions

from .datasets import cone_table, monotonic_table, two_criteria_table


# pytest plugin, to print rules on test failure
@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    default = yield
    report = default.get_result()
    if report.failed and report.user_properties:
        for name, prop in report.user_properties:
            if name == 'rules':
                report.longrepr.addsection(name, str(prop))
                break
    return default


@pytest.fixture
def record_rules(record_property):
    def _record(rule_set):
        record_property("rules", rule_set.serialize())
    return _record


def with_distributions(table) -> InformationTableWithDecisionDistributions:
    return InformationTableWithDecisionDistributions.from_table(table)


@pytest.fixture
def monotonic():
    return with_distributions(monotonic_table())


@pytest.fixture
def cones():
    return with_distributions(cone_table())


@pytest.fixture
def two_criteria():
    return with_distributions(two_criteria_table())


@pytest.fixture
def classical_unions(two_criteria):
    """Unions of `two_criteria`: upward at least 3, at least 2; downward at
    most 1, at most 2.
    """
    return Unions(two_criteria, ClassicalDominanceBasedRoughSetCalculator())
