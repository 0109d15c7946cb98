"""
Batch Generation
================

Runs the branch-and-bound search over one batch of stamped seeds and
keeps one output per isomorphism class.

Functions:
    generate                     -- strictly non-polar objects
    half_dense_regular_generate  -- half-dense d-regular variant
    dedupe_outputs               -- intra-batch deduplication
    merge_results                -- cross-batch deduplication

Classes:
    Output       -- a terminal object with its provenance
    BatchResult  -- outputs, pruner counters and per-seed timings

Author: Carmen Esteban
License: MIT
"""

import json
import time
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from nonpolar.closure import STRICT_CLOSURE, HALF_DENSE_CLOSURE
from nonpolar.hypercube import to_bitstring, from_bitstring
from nonpolar.pruners import PrunerCounters, active_pruners, as_config
from nonpolar.search import branch_and_bound
from nonpolar.seeds import check_parameters, check_embedded_seed
from nonpolar.symmetry import canonical_form


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Output:
    """Feasible vertex set of a terminal object, with provenance."""
    vertices: Tuple[int, ...]
    dimension: int
    stamp: int
    batch_id: int

    def bitstrings(self):
        return [to_bitstring(v, self.dimension) for v in self.vertices]

    def canonical_form(self):
        return canonical_form(self.vertices, self.dimension)


@dataclass
class BatchResult:
    """Everything one batch produces, serializable to JSON."""
    batch_id: int
    variant: str
    degree: int
    dimension: int
    flags: List[str]
    outputs: List[Output] = field(default_factory=list)
    counters: PrunerCounters = field(default_factory=PrunerCounters)
    timings: Dict[int, float] = field(default_factory=dict)
    total_time: float = 0.0

    def to_dict(self):
        return {
            "batch_id": self.batch_id,
            "variant": self.variant,
            "degree": self.degree,
            "dimension": self.dimension,
            "flags": list(self.flags),
            "outputs": [{"stamp": o.stamp, "vertices": o.bitstrings()}
                        for o in self.outputs],
            "pruners": self.counters.as_dict(),
            "timings": {str(k): v for k, v in self.timings.items()},
            "total_time": self.total_time,
        }

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path):
        with open(path, "w") as f:
            f.write(self.to_json())

    @classmethod
    def from_dict(cls, d):
        outputs = [Output(tuple(sorted(from_bitstring(s) for s in o["vertices"])),
                          d["dimension"], o["stamp"], d["batch_id"])
                   for o in d["outputs"]]
        return cls(batch_id=d["batch_id"], variant=d["variant"],
                   degree=d["degree"], dimension=d["dimension"],
                   flags=list(d["flags"]), outputs=outputs,
                   counters=PrunerCounters(dict(d["pruners"])),
                   timings={int(k): v for k, v in d["timings"].items()},
                   total_time=d.get("total_time", 0.0))

    @classmethod
    def load(cls, path):
        with open(path) as f:
            return cls.from_dict(json.load(f))


# ---------------------------------------------------------------------------
# Deduplication
# ---------------------------------------------------------------------------

def dedupe_outputs(outputs):
    """First output of every isomorphism class, in order."""
    seen = set()
    kept = []
    for out in outputs:
        key = out.canonical_form()
        if key in seen:
            continue
        seen.add(key)
        kept.append(out)
    return kept


def merge_results(results):
    """Cross-batch merge: union of all batch outputs, deduplicated again.

    Needed even though every batch is deduplicated on its own, since
    different seeds can end in isomorphic objects.
    """
    results = list(results)
    dims = {r.dimension for r in results}
    if len(dims) > 1:
        raise ValueError("Cannot merge batches of dimensions {}".format(sorted(dims)))
    outputs = []
    for r in sorted(results, key=lambda r: r.batch_id):
        outputs.extend(r.outputs)
    return dedupe_outputs(outputs)


# ---------------------------------------------------------------------------
# Batch runs
# ---------------------------------------------------------------------------

def _run_batch(variant, rules, batch_id, degree, target_dimension, config,
               embedded_seeds, verbose):
    check_parameters(degree, target_dimension, "target dimension")
    config = as_config(config)
    embedded_seeds = list(embedded_seeds)
    for es in embedded_seeds:
        check_embedded_seed(es, target_dimension)

    pruners = active_pruners(config)
    counters = PrunerCounters()
    result = BatchResult(batch_id, variant, degree, target_dimension,
                         config.flags(), counters=counters)

    if verbose:
        print("--- Batch {}: {} seeds, {} d={} n={} flags={} ---".format(
            batch_id, len(embedded_seeds), variant, degree, target_dimension,
            config.flags()))

    t_batch = time.time()
    found = []
    for es in embedded_seeds:
        t0 = time.time()
        n_before = len(found)
        for obj in branch_and_bound(es.obj, degree, rules, pruners, counters, config):
            found.append(Output(tuple(sorted(obj.feasible_set())),
                                target_dimension, es.stamp, batch_id))
        result.timings[es.stamp] = time.time() - t0
        if verbose:
            print("  seed #{}: {} terminal objects ({:.3f}s)".format(
                es.stamp, len(found) - n_before, result.timings[es.stamp]))

    result.outputs = dedupe_outputs(found)
    result.total_time = time.time() - t_batch
    if verbose:
        print("  Batch {}: {} terminal, {} non-isomorphic, {:.2f}s".format(
            batch_id, len(found), len(result.outputs), result.total_time))
    return result


def generate(batch_id, degree, target_dimension, config, embedded_seeds,
             verbose=False):
    """Strictly non-polar objects reachable from a batch of seeds.

    Parameters
    ----------
    batch_id : int
    degree : int
        Degree bound d, at most target_dimension.
    target_dimension : int
    config : SearchConfig, iterable of "mnp"/"cnp" flags, or None
    embedded_seeds : sequence of EmbeddedSeed
    verbose : bool

    Returns
    -------
    BatchResult
    """
    return _run_batch("strict", STRICT_CLOSURE, batch_id, degree,
                      target_dimension, config, embedded_seeds, verbose)


def half_dense_regular_generate(batch_id, degree, target_dimension, config,
                                embedded_seeds, verbose=False):
    """Like generate, with the half-dense d-regular closure.

    Every output has exactly 2^(n-1) Feasible vertices, one of each
    antipodal pair, and every Infeasible vertex has exactly d Infeasible
    neighbors.
    """
    return _run_batch("half_dense_regular", HALF_DENSE_CLOSURE, batch_id, degree,
                      target_dimension, config, embedded_seeds, verbose)
