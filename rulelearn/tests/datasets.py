"""Small information tables (generator functions) for the rulelearn
unittests.
"""

import numpy as np
from sklearn.utils import Bunch

from rulelearn.data import AttributeType, EvaluationAttribute, \
    InformationTable
from rulelearn.types import PreferenceType, UnknownSimpleFieldMV2


class Dataset(Bunch):
    def __init__(self,
                 x_train: np.ndarray,
                 y_train: np.ndarray,
                 preferences=None,
                 **kwargs):
        super().__init__(x_train=x_train, y_train=y_train,
                         preferences=preferences, **kwargs)


def decision_attribute(name='d', value_type='integer',
                       preference_type=PreferenceType.GAIN, **kwargs):
    return EvaluationAttribute(name, attribute_type=AttributeType.DECISION,
                               preference_type=preference_type,
                               value_type=value_type, **kwargs)


def monotonic_table() -> InformationTable:
    """One gain criterion `a`, decision `d == a` for `a` in 1..5."""
    attributes = [EvaluationAttribute('a', value_type='integer'),
                  decision_attribute()]
    return InformationTable.from_rows(attributes,
                                      [[i, i] for i in range(1, 6)])


def cone_table() -> InformationTable:
    """Object 0 is dominated by all others, which hold one object of class 1,
    one of class 2 and three of class 3. Object 0 is of class 3, too.
    """
    attributes = [EvaluationAttribute('a', value_type='integer'),
                  decision_attribute()]
    return InformationTable.from_rows(attributes, [
        [0, 3],
        [1, 1],
        [2, 2],
        [3, 3],
        [4, 3],
        [5, 3],
    ])


TWO_CRITERIA_ROWS = [
    # c1 (gain), c2 (cost), d
    [1, 5.0, 1],
    [2, 4.0, 1],
    [3, 3.0, 2],
    [4, 2.0, 2],
    [5, 1.0, 3],
    [6, 1.0, 3],
    [4, 2.0, 1],  # same evaluations as object 3, worse decision
]


def two_criteria_table(missing_value_type=UnknownSimpleFieldMV2
                       ) -> InformationTable:
    """Seven objects totally ordered by dominance, with objects 3 and 6
    indiscernible but of different decisions 2 and 1.

    Classical lower approximations: at least 2 {4, 5}, at least 3 {4, 5},
    at most 1 {0, 1}, at most 2 {0, 1, 2, 3, 6}. Objects 2 and 3 have an
    epsilon of 1/3 w.r.t. at least 2.
    """
    attributes = [
        EvaluationAttribute('c1', value_type='integer',
                            missing_value_type=missing_value_type),
        EvaluationAttribute('c2', value_type='real',
                            preference_type=PreferenceType.COST,
                            missing_value_type=missing_value_type),
        decision_attribute(),
    ]
    return InformationTable.from_rows(attributes, TWO_CRITERIA_ROWS)


def two_criteria_dataset() -> Dataset:
    """`two_criteria_table` as numeric arrays."""
    rows = np.array(TWO_CRITERIA_ROWS, dtype=float)
    return Dataset(rows[:, :2], rows[:, 2].astype(int),
                   preferences=['gain', 'cost'])


def table_without_decision() -> InformationTable:
    attributes = [EvaluationAttribute('a', value_type='integer'),
                  EvaluationAttribute('b', value_type='integer')]
    return InformationTable.from_rows(attributes, [[1, 2], [2, 1]])


def crossing_table() -> InformationTable:
    """Objects 0 and 1 of class 2 are incomparable, object 2 of class 1 lies
    between them on both gain criteria. Conditions taken from both objects
    at once always cover object 2.
    """
    attributes = [EvaluationAttribute('a1', value_type='integer'),
                  EvaluationAttribute('a2', value_type='integer'),
                  decision_attribute()]
    return InformationTable.from_rows(attributes, [
        [1, 3, 2],
        [3, 1, 2],
        [2, 2, 1],
    ])


def partially_missing_table(missing_value_type=UnknownSimpleFieldMV2
                            ) -> InformationTable:
    """Object 2 of class 1 misses its evaluation on `a1` and is at least as
    good as object 0 of class 2 on `a2`.

    With missing values of type 1.5 object 0 is in the lower approximation
    of at least 2, but every rule covering it covers object 2, too. With
    type 2 object 2 is in the dominance cone of object 0.
    """
    attributes = [
        EvaluationAttribute('a1', value_type='integer',
                            missing_value_type=missing_value_type),
        EvaluationAttribute('a2', value_type='integer',
                            missing_value_type=missing_value_type),
        decision_attribute(),
    ]
    return InformationTable.from_rows(attributes, [
        [3, 1, 2],
        [5, 4, 2],
        [None, 2, 1],
    ])


def composite_decision_table() -> InformationTable:
    """Decisions on two gain attributes `d0` and `d1`. Decisions (2, 1) of
    object 1 and (1, 2) of object 2 are incomparable, so each is neutral
    for unions limited by the other one.
    """
    attributes = [EvaluationAttribute('a', value_type='integer'),
                  decision_attribute('d0'),
                  decision_attribute('d1')]
    return InformationTable.from_rows(attributes, [
        [1, 1, 1],
        [3, 2, 1],
        [3, 1, 2],
        [4, 2, 2],
    ])
