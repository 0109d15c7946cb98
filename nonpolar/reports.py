"""
Batch Reports
=============

Flat text reports for one batch, plus the JSON dump of the full result:

    outputs_<batch>.txt   one object per line, space-separated bitstrings
    pruners_<batch>.txt   "<pruner> <count>" per line
    timings_<batch>.txt   "<stamp> <seconds>" per line
    batch_<batch>.json    BatchResult.to_json()

Author: Carmen Esteban
License: MIT
"""

import os

from nonpolar.hypercube import from_bitstring
from nonpolar.pruners import PRUNER_NAMES
from nonpolar.symmetry import filter_isomorphic


def report_paths(directory, batch_id):
    return {
        "outputs": os.path.join(directory, "outputs_{}.txt".format(batch_id)),
        "pruners": os.path.join(directory, "pruners_{}.txt".format(batch_id)),
        "timings": os.path.join(directory, "timings_{}.txt".format(batch_id)),
        "json": os.path.join(directory, "batch_{}.json".format(batch_id)),
    }


def format_outputs(outputs):
    return "".join(" ".join(o.bitstrings()) + "\n" for o in outputs)


def format_pruners(counters):
    counts = counters.as_dict()
    names = list(PRUNER_NAMES) + sorted(set(counts) - set(PRUNER_NAMES))
    return "".join("{} {}\n".format(name, counts.get(name, 0)) for name in names)


def format_timings(timings):
    return "".join("{} {:.6f}\n".format(stamp, timings[stamp])
                   for stamp in sorted(timings))


def write_batch_reports(result, directory):
    """Write the four report files of a batch; returns their paths.

    OSError from an unwritable directory propagates to the caller.
    """
    os.makedirs(directory, exist_ok=True)
    paths = report_paths(directory, result.batch_id)
    with open(paths["outputs"], "w") as f:
        f.write(format_outputs(result.outputs))
    with open(paths["pruners"], "w") as f:
        f.write(format_pruners(result.counters))
    with open(paths["timings"], "w") as f:
        f.write(format_timings(result.timings))
    result.save(paths["json"])
    return paths


def read_outputs(path):
    """Vertex sets (as bitstring lists) from an outputs file."""
    with open(path) as f:
        return [line.split() for line in f]


def merge_reports(paths, dimension):
    """Cross-batch merge of several outputs files.

    Returns one vertex set per isomorphism class, as sorted integer
    tuples, in file order.
    """
    union = []
    for path in paths:
        for bits in read_outputs(path):
            if any(len(b) != dimension for b in bits):
                raise ValueError("{}: vertex of wrong length for dimension {}".format(
                    path, dimension))
            union.append(tuple(sorted(from_bitstring(b) for b in bits)))
    return filter_isomorphic(union, dimension)
