"""
Miscellaneous things depending on nothing from rulelearn but `types`.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np
from sklearn.utils import check_random_state

from rulelearn.types import PreferenceType


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from zero for x >= 0.

    Unlike `round`, `round_half_up(2.5) == 3`.
    """
    return int(math.floor(x + 0.5))


def build_preference_types(which_features, n_features: int
                           ) -> np.ndarray or None:
    """:return: An array of `PreferenceType` of length `n_features` based on
        `which_features`, see `VCDomLEMClassifier` docs.
        Returns None if `which_features` cannot be recognized.
    """
    # modeled like the categorical mask of sklearn's OneHotEncoder
    preference_types_ = np.full(n_features, PreferenceType.GAIN,
                                dtype=object)  # default "all gain"
    if which_features is None:
        return preference_types_
    if isinstance(which_features, str):
        if which_features in ('gain', 'cost', 'none'):
            preference_types_[:] = PreferenceType(which_features)
            return preference_types_
        return None
    which_features = np.asarray(which_features)
    if not which_features.size:
        pass  # keep default
    elif which_features.dtype == bool:
        if len(which_features) != n_features:
            return None
        preference_types_[which_features] = PreferenceType.COST
    elif np.issubdtype(which_features.dtype, np.integer):
        # indices of cost features
        preference_types_[which_features] = PreferenceType.COST
    elif len(which_features) == n_features:
        try:
            return np.array([PreferenceType(p) for p in which_features],
                            dtype=object)
        except ValueError:
            return None
    else:
        return None
    return preference_types_


def stratified_k_folds(decisions: Sequence, k: int, random_state=None
                       ) -> List[Tuple[np.ndarray, np.ndarray]]:
    """Split object indices into `k` folds keeping the decision distribution.

    The objects of each decision are shuffled and then dealt to the folds
    round-robin. The next fold to receive an object carries over from one
    decision to the next, so fold sizes differ by at most one.

    :param decisions: The decision (any hashable) of each object.
    :param k: Number of folds, at least 2.
    :param random_state: Seed or `numpy.random.RandomState`.
    :return: A list of `k` pairs `(train_indices, validation_indices)`.
    """
    if k < 2:
        raise ValueError("Number of folds must be at least 2, got {}."
                         .format(k))
    if k > len(decisions):
        raise ValueError("Cannot split {} objects into {} folds."
                         .format(len(decisions), k))
    random_state = check_random_state(random_state)
    by_decision = {}
    for object_index, decision in enumerate(decisions):
        by_decision.setdefault(decision, []).append(object_index)

    folds = [[] for _ in range(k)]
    fold = 0
    for object_indices in by_decision.values():
        for object_index in random_state.permutation(object_indices):
            folds[fold].append(int(object_index))
            fold = (fold + 1) % k

    all_objects = np.arange(len(decisions))
    splits = []
    for validation in folds:
        validation = np.sort(np.asarray(validation, dtype=int))
        splits.append((np.setdiff1d(all_objects, validation), validation))
    return splits
