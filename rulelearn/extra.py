"""
Implementation of VC-DomLEM rule induction:
Helpers in addition to the algorithms in `abstract.py`: tracing the coverage
of induced rules, and plotting such traces.
"""

import json
import math
import warnings
from typing import IO, Callable, Dict, List, MutableSequence, NamedTuple, \
    Optional, Sequence, Type, Union as TUnion

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure  # needed only for type hints

from rulelearn.abstract import VCDomLEM
from rulelearn.approximations import Union
from rulelearn.common import RuleConditions


def _covered_mask(rule_conditions: RuleConditions) -> np.ndarray:
    covered = np.zeros(rule_conditions.n_objects, dtype=bool)
    covered[rule_conditions.covered_objects] = True
    return covered


def _pn(rule_conditions: RuleConditions, covered: np.ndarray
        ) -> 'Trace.Step.Ancestor':
    """:return: (p, n) = count of positive resp. negative objects in the
        boolean mask `covered`.
    """
    positive = rule_conditions.positive_mask
    negative = ~positive & ~rule_conditions.neutral_mask
    return Trace.Step.Ancestor(int(np.count_nonzero(positive & covered)),
                               int(np.count_nonzero(negative & covered)))


class Trace:
    """Trace of the induction of rules for one union, i.e. one
    `VCDomLEM.induce_rule_conditions` invocation.

    Attributes
    -----
    - `union`: str
      Description of the union, e.g. "at least 3".

    - `P`: int
      Count of positive objects of the union.

    - `N`: int
      Count of negative objects, i.e. neither positive nor neutral.

    - `steps`: Sequence[Trace.Step]
      Each item represents one grown rule conditions, in order of induction.
      Only steps with `accepted` True became rules, though set pruning may
      still have removed some of them.
    """

    _JSON_DUMP_DESCRIPTION = "rulelearn.extra.trace_coverage dump"
    _JSON_DUMP_VERSION = 1

    steps: MutableSequence['Trace.Step']

    def __init__(self, union: str, P: int, N: int):
        self.union = union
        self.P = P
        self.N = N
        self.steps = []

    class Step:
        """Trace of growing one rule conditions, i.e. one
        `VCDomLEM.find_rule_conditions` invocation.

        Attributes
        -----
        `ancestors`: list of (p, n)
           Coverage of the empty rule conditions and after each added
           condition, in order of growing.

        `pruned`: (p, n)
           Coverage after pruning.

        `accepted`: bool
           Result of the minimality check.
        """
        Ancestor = NamedTuple('Ancestor', [('p', int), ('n', int)])

        def __init__(self, ancestors: Sequence[Ancestor],
                     pruned: Optional[Ancestor] = None,
                     accepted: Optional[bool] = None):
            self.ancestors = [Trace.Step.Ancestor(*a) for a in ancestors]
            self.pruned = Trace.Step.Ancestor(*pruned) \
                if pruned is not None else None
            self.accepted = accepted

        def __eq__(self, other):
            if type(other) is type(self):
                return self.__dict__ == other.__dict__
            return NotImplemented

        @staticmethod
        def from_json(dec: Dict) -> 'Trace.Step':
            return Trace.Step(dec['ancestors'], dec['pruned'],
                              dec['accepted'])

    def __eq__(self, other):
        if type(other) is type(self):
            return self.__dict__ == other.__dict__
        return NotImplemented

    def plot_coverage_log(self, **kwargs):
        """Plot the trace, see :func:`plot_coverage_log`."""
        return plot_coverage_log(self, **kwargs)

    @staticmethod
    def _json_encoder(obj):
        """Serialize `obj` when used as `json.JSONEncoder.default` method."""
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, Trace.Step):
            return obj.__dict__
        raise TypeError("Object of type {} is not JSON serializable"
                        .format(type(obj).__name__))

    def to_json(self) -> str:
        """:return: A string containing a JSON representation of the trace."""
        return json.dumps({
            "description": Trace._JSON_DUMP_DESCRIPTION,
            "version": Trace._JSON_DUMP_VERSION,
            "union": self.union,
            "P": self.P,
            "N": self.N,
            "steps": self.steps,
        }, allow_nan=False, default=Trace._json_encoder)

    @staticmethod
    def from_json(dump: TUnion[str, IO]) -> 'Trace':
        """
        :param dump: A file-like object or string containing JSON.
        :return : The trace dumped previously with `to_json`.
        """
        loader = json.loads if isinstance(dump, str) else json.load
        dec = loader(dump)

        if dec.get("description") != Trace._JSON_DUMP_DESCRIPTION:
            raise ValueError("No/invalid coverage trace json: %s" % repr(dec))
        if dec["version"] != Trace._JSON_DUMP_VERSION:
            raise ValueError("Unsupported coverage trace version: %s"
                             % dec["version"])
        trace = Trace(dec['union'], dec['P'], dec['N'])
        trace.steps = [Trace.Step.from_json(step) for step in dec['steps']]
        return trace


LogTraceCallback = Callable[[Trace], None]


def trace_coverage(inducer_cls: Type[VCDomLEM],
                   log_coverage_trace_callback: LogTraceCallback,
                   ) -> Type[VCDomLEM]:
    """Decorator for `VCDomLEM` that adds tracing of (p, n) while inducing
    rules. Traces can be plotted with `plot_coverage_log`.

    For each union, after its rule conditions are pruned as a set, the
    collected trace is submitted to the `log_coverage_trace_callback`
    function. When upward and downward unions are induced in parallel,
    the callback has to be thread safe.

    Usage
    =====
    Define the callback function to receive the trace & display it:

    >>> def callback(trace):
    ...     plot_coverage_log(trace).show()

    and call directly:

    >>> TracedVCDomLEM = trace_coverage(VCDomLEM, callback)
    >>> TracedVCDomLEM(components).generate_rules(unions)
    """

    class TracedInducer(inducer_cls):
        def induce_rule_conditions(self, union: Union):
            self._trace = Trace(str(union), len(union.objects),
                                union.complementary_set_size)
            try:
                result = super().induce_rule_conditions(union)
                log_coverage_trace_callback(self._trace)
            finally:
                self._trace = None
            return result

        def find_rule_conditions(self, rule_conditions, to_cover, seed=None):
            grown = super().find_rule_conditions(rule_conditions, to_cover,
                                                 seed=seed)
            covered = np.ones(grown.n_objects, dtype=bool)
            ancestors = [_pn(grown, covered)]
            for condition in grown.conditions:
                covered &= grown.condition_mask(condition)
                ancestors.append(_pn(grown, covered))
            self._trace.steps.append(Trace.Step(ancestors))
            return grown

        def is_minimal(self, rule_conditions, accepted):
            minimal = super().is_minimal(rule_conditions, accepted)
            step = self._trace.steps[-1]
            step.pruned = _pn(rule_conditions,
                              _covered_mask(rule_conditions))
            step.accepted = minimal
            return minimal

    TracedInducer.__name__ = 'Traced' + inducer_cls.__name__
    return TracedInducer


def plot_coverage_log(
        trace: Trace,
        *,
        title: Optional[str] = None,
        figure: Optional[Figure] = None,
) -> Figure:
    """Plot the traced (p, n) of the rule conditions induced for a union.

    Each grown conjunction of conditions is drawn as a path from the empty conjunction
    (covering all P positive and N negative objects) through each added
    condition; a cross marks the coverage after pruning, grey if the rule
    was rejected as not minimal.

    :param trace: collected `Trace`, see also `trace_coverage`.
    :param title: string or None. If not None, set as figure title.
    :param figure: If None, use `plt.figure()` to create a figure, otherwise
      draw into this one.
    :return: The figure.
    """
    n_rules = len(trace.steps)
    if not n_rules:
        warnings.warn("Empty trace of {}, nothing to plot."
                      .format(title or "a union"))
    rnd_style = dict(color='grey', alpha=0.5, linestyle='dotted')

    if figure is None:
        figure = plt.figure()
    ax = figure.add_subplot(1, 1, 1)
    ax.set_xlabel('n')
    ax.set_ylabel('p')
    ax.set_xlim(0, max(trace.N, 1))
    ax.set_ylim(0, max(trace.P, 1))
    ax.locator_params(integer=True)
    # draw "random rule" reference marker
    ax.plot([0, trace.N], [0, trace.P], **rnd_style)

    label_width = math.ceil(math.log10(n_rules + 1)) if n_rules else 1
    for rule_idx, step in enumerate(trace.steps):
        ancestors: List[Trace.Step.Ancestor] = step.ancestors
        line = ax.plot([a.n for a in ancestors], [a.p for a in ancestors],
                       'o-', markersize=3,
                       label="{i:{w}}: ({p:4}, {n:4})".format(
                           i=rule_idx, w=label_width,
                           p=ancestors[-1].p, n=ancestors[-1].n))
        if step.pruned is not None:
            ax.plot(step.pruned.n, step.pruned.p, 'x',
                    color=line[0].get_color() if step.accepted else 'grey')

    if title is not None:
        ax.set_title("%s: %s" % (title, trace.union))
    else:
        ax.set_title(trace.union)
    if n_rules:
        figure.legend(title="rule: (p,n)", loc='center right')
    return figure
