"""
Implementation of VC-DomLEM rule induction:
Ready-made rule inducers, a simple rule classifier, and a scikit-learn
estimator on top of them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Type

import numpy as np
from joblib import Parallel, delayed
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.preprocessing import LabelEncoder
from sklearn.utils import check_X_y, check_array
from sklearn.utils.multiclass import check_classification_targets
from sklearn.utils.validation import check_is_fitted

from rulelearn.abstract import VCDomLEM
from rulelearn.approximations import \
    ClassicalDominanceBasedRoughSetCalculator, \
    DominanceBasedRoughSetCalculator, Unions, UnionType, \
    VCDominanceBasedRoughSetCalculator
from rulelearn.common import \
    RuleInducerComponents, RuleSemantics, RuleSet, RuleSetWithCharacteristics
from rulelearn.concrete import \
    CertainRuleInducerComponents, PossibleRuleInducerComponents
from rulelearn.data import \
    AttributeType, Decision, DecisionDistribution, EvaluationAttribute, \
    InformationTable, SimpleDecision
from rulelearn.dominance import InformationTableWithDecisionDistributions
from rulelearn.measures import ConsistencyMeasure, EpsilonConsistencyMeasure
from rulelearn.types import PreferenceType, TRUE, UnknownSimpleFieldMV2
from rulelearn.util import build_preference_types


class RuleInducerWrapper(ABC):
    """Induces upward and downward rules from an information table.

    The two directions run in parallel (see `n_jobs`), each on its own
    snapshot of the table and with its own components.

    Parameters
    -----
    n_jobs : int
        Passed to `joblib.Parallel`, threads are preferred. 1 runs the
        directions sequentially.
    """

    def __init__(self, n_jobs: int = 2):
        self.n_jobs = n_jobs

    @abstractmethod
    def make_components(self, **kwargs) -> RuleInducerComponents:
        raise NotImplementedError

    @abstractmethod
    def make_calculator(self, **kwargs) -> DominanceBasedRoughSetCalculator:
        raise NotImplementedError

    def _induce(self, table: InformationTable, union_type: UnionType,
                **kwargs) -> RuleSetWithCharacteristics:
        snapshot = InformationTableWithDecisionDistributions.from_table(table)
        unions = Unions(snapshot, self.make_calculator(**kwargs))
        inducer = VCDomLEM(self.make_components(**kwargs))
        return inducer.generate_rules(unions.get(union_type))

    def induce_rules_with_characteristics(self, table: InformationTable,
                                          **kwargs
                                          ) -> RuleSetWithCharacteristics:
        """:return: Rules for all upward unions, followed by rules for all
            downward unions.
        :raise ValueError: If `table` has no active decision attribute.
        """
        if table.get_decisions() is None:
            raise ValueError("Cannot induce rules from a table without active "
                             "decision attribute.")
        upward, downward = Parallel(n_jobs=self.n_jobs, prefer='threads')(
            delayed(self._induce)(table, union_type, **kwargs)
            for union_type in (UnionType.AT_LEAST, UnionType.AT_MOST))
        return RuleSetWithCharacteristics.join(upward, downward)

    def induce_rules(self, table: InformationTable, **kwargs) -> RuleSet:
        """:return: Like `induce_rules_with_characteristics`, rules only."""
        return RuleSet(self.induce_rules_with_characteristics(table, **kwargs))


class VariableConsistencyRuleInducerWrapper(RuleInducerWrapper):
    """Rule inducers on VC-DRSA lower approximations defined by
    `consistency_measure`.

    `induce_rules` and `induce_rules_with_characteristics` accept an explicit
    `consistency_threshold`, falling back to `default_consistency_threshold`.
    """

    default_consistency_threshold = 0.0
    consistency_measure: ConsistencyMeasure = EpsilonConsistencyMeasure()

    def _threshold(self, consistency_threshold):
        if consistency_threshold is None:
            return self.default_consistency_threshold
        return consistency_threshold

    def make_calculator(self, consistency_threshold=None):
        return VCDominanceBasedRoughSetCalculator(
            self.consistency_measure, self._threshold(consistency_threshold))

    def induce_rules_with_characteristics(self, table,
                                          consistency_threshold=None):
        if consistency_threshold is not None \
                and not 0.0 <= consistency_threshold <= 1.0:
            raise ValueError("Consistency threshold must be in [0, 1], got "
                             "{}.".format(consistency_threshold))
        return super().induce_rules_with_characteristics(
            table, consistency_threshold=consistency_threshold)

    def induce_rules(self, table, consistency_threshold=None):
        return RuleSet(self.induce_rules_with_characteristics(
            table, consistency_threshold))


class VCDomLEMWrapper(VariableConsistencyRuleInducerWrapper):
    """Certain rules from VC-DRSA lower approximations defined by epsilon.

    The consistency threshold (default 0, i.e. classical DRSA lower
    approximations) limits both the epsilon of objects in lower
    approximations and the epsilon of rules.
    """

    def make_components(self, consistency_threshold=None):
        return CertainRuleInducerComponents(
            consistency_threshold=self._threshold(consistency_threshold))


class PossibleVCDomLEMWrapper(RuleInducerWrapper):
    """Possible rules from classical DRSA upper approximations."""

    def make_components(self):
        return PossibleRuleInducerComponents()

    def make_calculator(self):
        return ClassicalDominanceBasedRoughSetCalculator()


class SimpleRuleClassifier:
    """Classify objects by the most restrictive covering rules.

    Of the covering `AT_LEAST` rules the best limit, of the covering
    `AT_MOST` rules the worst limit is taken. If both exist and differ, the
    decision is their mean; if no rule covers an object, it gets
    `default_decision`. Only the first decision condition of each rule is
    used.
    """

    def __init__(self, rule_set: RuleSet, default_decision: Decision):
        self.rule_set = rule_set
        self.default_decision = default_decision

    def covering_rules(self, object_index: int, table: InformationTable
                       ) -> List[int]:
        """:return: Indices of the rules covering the object."""
        return [i for i, rule in enumerate(self.rule_set)
                if rule.covers(object_index, table)]

    def classify(self, object_index: int, table: InformationTable
                 ) -> Decision:
        up_limit = None
        down_limit = None
        attribute_index = None
        for rule in self.rule_set:
            if not rule.covers(object_index, table):
                continue
            decision = rule.decision
            limit = decision.limiting_evaluation
            attribute_index = decision.attribute_index
            if rule.semantics is RuleSemantics.AT_LEAST:
                if up_limit is None \
                        or limit.is_at_least_as_good_as(up_limit) is TRUE:
                    up_limit = limit
            elif rule.semantics is RuleSemantics.AT_MOST:
                if down_limit is None \
                        or limit.is_at_most_as_good_as(down_limit) is TRUE:
                    down_limit = limit
        if up_limit is None and down_limit is None:
            return self.default_decision
        if up_limit is None:
            return SimpleDecision(down_limit, attribute_index)
        if down_limit is None or up_limit == down_limit:
            return SimpleDecision(up_limit, attribute_index)
        return SimpleDecision(down_limit.mean(up_limit), attribute_index)

    def classify_all(self, table: InformationTable) -> List[Decision]:
        return [self.classify(i, table) for i in range(table.n_objects)]


# noinspection PyAttributeOutsideInit
class VCDomLEMClassifier(BaseEstimator, ClassifierMixin):
    """Monotonic classification by VC-DomLEM decision rules.

    Class labels are taken as ordered by their sort order: the smallest
    label is the worst class, the biggest one the best.

    Parameters
    -----
    consistency_threshold : float in [0, 1]
        Maximum epsilon of objects in lower approximations and of rules.
        Only used by certain rules.

    preferences : None or 'gain' or 'cost' or array
        Preference direction of each feature.

        - None (default) or 'gain': higher values are better for all
          features.
        - 'cost': lower values are better for all features.
        - array of indices: Array of cost feature indices.
        - mask: Array of length n_features and with dtype=bool, True for
          cost features.
        - array of 'gain'/'cost'/'none' of length n_features.

    possible_rules : bool
        If True, induce possible rules from upper approximations instead of
        certain rules.

    n_jobs : int
        See `RuleInducerWrapper`.

    Missing feature values (NaN) are compared as missing values of type 2.

    Attributes
    -----
    classes_ : np.ndarray
        Class labels, worst first.

    n_features_in_ : int
        The number of features in (training) data `X`.

    preference_types_ : np.ndarray of PreferenceType, shape (n_features_in_,)

    attributes_ : tuple of EvaluationAttribute
        Condition attributes, followed by the decision attribute.

    rule_set_ : RuleSetWithCharacteristics
        The learned rules.

    default_decision_ : Decision
        Median training decision, predicted for objects no rule covers.
    """

    def __init__(self,
                 consistency_threshold: float = 0.0,
                 preferences=None,
                 possible_rules: bool = False,
                 n_jobs: int = 1):
        self.consistency_threshold = consistency_threshold
        self.preferences = preferences
        self.possible_rules = possible_rules
        self.n_jobs = n_jobs

    def _make_table(self, X: np.ndarray, y: Optional[np.ndarray]
                    ) -> InformationTable:
        if y is None:
            y = [None] * len(X)
        rows = [[float(value) for value in row]
                + [None if label is None else int(label)]
                for row, label in zip(X, y)]
        return InformationTable.from_rows(self.attributes_, rows)

    def fit(self, X, y):
        """Fit to data, i.e. induce rules.

        :param X: Feature values, NaN for missing ones.
        :param y: Ordinal class labels.
        """
        X, y = check_X_y(X, y, dtype=np.float64, ensure_all_finite='allow-nan')
        check_classification_targets(y)
        self.label_encoder_ = LabelEncoder().fit(y)
        self.classes_ = self.label_encoder_.classes_
        if len(self.classes_) < 2:
            raise ValueError("Need at least two classes, got {}."
                             .format(self.classes_))

        self.n_features_in_ = X.shape[1]
        self.preference_types_ = build_preference_types(self.preferences,
                                                        self.n_features_in_)
        if self.preference_types_ is None:
            raise ValueError("preferences must be one of: None, 'gain', "
                             "'cost', np.ndarray of dtype bool or integer, "
                             "sequence of preference types, but got {}."
                             .format(self.preferences))
        self.attributes_ = tuple(
            EvaluationAttribute('a{}'.format(i + 1),
                                preference_type=preference_type,
                                value_type='real',
                                missing_value_type=UnknownSimpleFieldMV2)
            for i, preference_type in enumerate(self.preference_types_)
        ) + (EvaluationAttribute('class',
                                 attribute_type=AttributeType.DECISION,
                                 preference_type=PreferenceType.GAIN,
                                 value_type='enumeration',
                                 domain=[str(c) for c in self.classes_]),)

        table = self._make_table(X, self.label_encoder_.transform(y))
        wrapper = self.make_wrapper()
        if self.possible_rules:
            self.rule_set_ = wrapper.induce_rules_with_characteristics(table)
        else:
            self.rule_set_ = wrapper.induce_rules_with_characteristics(
                table, consistency_threshold=self.consistency_threshold)
        self.default_decision_ = DecisionDistribution(
            table.get_decisions()).get_median(table.ordered_decisions)
        return self

    def make_wrapper(self) -> RuleInducerWrapper:
        wrapper_class: Type[RuleInducerWrapper] = \
            PossibleVCDomLEMWrapper if self.possible_rules \
            else VCDomLEMWrapper
        return wrapper_class(n_jobs=self.n_jobs)

    def predict(self, X) -> np.ndarray:
        """Predict the class of each sample in `X` by `SimpleRuleClassifier`.
        """
        check_is_fitted(self, ['rule_set_', 'default_decision_'])
        X: np.ndarray = check_array(X, dtype=np.float64,
                                    ensure_all_finite='allow-nan')
        n_features = X.shape[1]
        if self.n_features_in_ != n_features:
            raise ValueError("Number of features of the model must "
                             "match the input. Model n_features is %s and "
                             "input n_features is %s "
                             % (self.n_features_in_, n_features))
        table = self._make_table(X, None)
        classifier = SimpleRuleClassifier(self.rule_set_,
                                          self.default_decision_)
        indices = [decision.evaluation.value
                   for decision in classifier.classify_all(table)]
        return self.classes_[np.asarray(indices, dtype=int)]

    def export_text(self, feature_names: List[str] = None) -> str:
        """Build a text report showing the learned rules, one per line.

        :param feature_names: A list of length `n_features_in_` containing
            the feature names. If None, generic names `a1, a2, ...` are used.
        """
        check_is_fitted(self, 'rule_set_')
        names = None
        if feature_names is not None:
            if len(feature_names) != self.n_features_in_:
                raise ValueError("feature_names must contain %d elements, "
                                 "got %d"
                                 % (self.n_features_in_, len(feature_names)))
            names = list(feature_names) + [self.attributes_[-1].name]
        return '\n'.join(rule.to_string(names) for rule in self.rule_set_)
