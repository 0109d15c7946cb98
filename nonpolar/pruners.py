"""
Pruners
=======

Feasibility predicates applied to a closed PartialObject. Each pruner
is a pure function (obj, degree, config) -> bool, True meaning prune.
All of them look ahead over every completion of the Undecided vertices
and are exact on fully decided objects.

    intersecting -- some facet restriction is non-polar in every completion
    cover        -- the Feasible vertices are stuck inside one facet
    minimal      -- some facet restriction can never hold an antipodal pair
    critical     -- minimal, or a Feasible vertex lost a facet-antipodal partner

A restriction is non-polar ("intersecting") when it has no pair of
vertices antipodal within the facet and its Feasible vertices do not all
agree on a coordinate.

Classes:
    SearchConfig    -- which optional pruners are on
    PrunerCounters  -- per-batch trigger counts

Author: Carmen Esteban
License: MIT
"""

from dataclasses import dataclass, field
from typing import Dict

import numpy as np

PRUNER_NAMES = ("closure", "intersecting", "cover", "minimal", "critical")

CONFIG_FLAGS = {"mnp": "minimal", "cnp": "critical"}


# ---------------------------------------------------------------------------
# Configuration and counters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchConfig:
    """Optional pruners: minimal (flag "mnp") and critical (flag "cnp")."""
    minimal: bool = False
    critical: bool = False

    @classmethod
    def from_flags(cls, flags=()):
        if isinstance(flags, str):
            flags = [flags]
        flags = set(flags)
        unknown = flags - set(CONFIG_FLAGS)
        if unknown:
            raise ValueError("Unknown config flag(s) {}; expected a subset of {}".format(
                sorted(unknown), sorted(CONFIG_FLAGS)))
        return cls(minimal="mnp" in flags, critical="cnp" in flags)

    def flags(self):
        out = []
        if self.minimal:
            out.append("mnp")
        if self.critical:
            out.append("cnp")
        return out


def as_config(config):
    """SearchConfig from a SearchConfig, None, or an iterable of flags."""
    if isinstance(config, SearchConfig):
        return config
    if config is None:
        return SearchConfig()
    return SearchConfig.from_flags(config)


@dataclass
class PrunerCounters:
    """How often each pruner fired. Summed by the caller across batches."""
    counts: Dict[str, int] = field(
        default_factory=lambda: {name: 0 for name in PRUNER_NAMES})

    def hit(self, name):
        self.counts[name] = self.counts.get(name, 0) + 1

    def merge(self, other):
        for name, n in other.counts.items():
            self.counts[name] = self.counts.get(name, 0) + n
        return self

    def __add__(self, other):
        return PrunerCounters(dict(self.counts)).merge(other)

    def total(self):
        return sum(self.counts.values())

    def as_dict(self):
        return dict(self.counts)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_non_polar(upper, lower, cube):
    """Non-polar in every completion between lower and upper.

    Antipode-freeness can only be lost by adding vertices, so it is
    checked on the largest completion; leaving a facet can only happen
    by adding vertices, so coverage is checked on the smallest.
    """
    if np.any(upper & upper[cube.antipode]):
        return False
    return not cube.is_covered(lower)


def intersecting_pruner(obj, degree, config):
    for i in range(obj.dimension):
        for value in (0, 1):
            sub = obj.restrict(i, value)
            upper = sub.feasible | sub.undecided
            if is_non_polar(upper, sub.feasible, sub.cube):
                return True
    return False


def cover_pruner(obj, degree, config):
    return obj.cube.is_covered(obj.feasible | obj.undecided)


def _facet_lacks_pair(obj):
    cube = obj.cube
    upper = obj.feasible | obj.undecided
    for i in range(obj.dimension):
        paired = upper & upper[cube.facet_antipode(i)]
        for value in (0, 1):
            if not np.any(paired & (cube.bits[:, i] == value)):
                return True
    return False


def minimal_pruner(obj, degree, config):
    return _facet_lacks_pair(obj)


def critical_pruner(obj, degree, config):
    if _facet_lacks_pair(obj):
        return True
    feas = obj.feasible
    infeas = obj.infeasible
    for i in range(obj.dimension):
        if np.any(feas & infeas[obj.cube.facet_antipode(i)]):
            return True
    return False


def active_pruners(config):
    """(name, predicate) pairs in application order."""
    config = as_config(config)
    pruners = [
        ("intersecting", intersecting_pruner),
        ("cover", cover_pruner),
    ]
    if config.minimal:
        pruners.append(("minimal", minimal_pruner))
    if config.critical:
        pruners.append(("critical", critical_pruner))
    return pruners


def first_pruner(obj, degree, pruners, config=None):
    """Name of the first pruner that fires, or None."""
    for name, pred in pruners:
        if pred(obj, degree, config):
            return name
    return None
