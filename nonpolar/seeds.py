"""
Seeds, Embedding and Batches
============================

Low-dimensional seeds start every large search.

    generate_seeds  -- all non-isomorphic seed objects of Q_m
    stamp_embed     -- place seeds on the facet x_m = ... = x_{n-1} = 0 of Q_n
                       and number them 1, 2, ... in input order
    check_embedded_seed -- reject a stamped seed that does not fit Q_n
    take_batch      -- contiguous slice of the stamped list
    partition       -- consecutive batches covering the stamped list

Seeds are searched with the seed closure (degree rules only) and no
pruners, so a seed is any labeling of Q_m whose Infeasible vertices
have at most d Infeasible neighbors.

Author: Carmen Esteban
License: MIT
"""

import time
from dataclasses import dataclass

import numpy as np

from nonpolar.closure import SEED_CLOSURE
from nonpolar.partial import PartialObject, UNDECIDED
from nonpolar.pruners import PrunerCounters
from nonpolar.search import branch_and_bound
from nonpolar.symmetry import canonical_form


def check_parameters(degree, dimension, what="dimension"):
    """Reject negative parameters and a degree above the dimension."""
    if degree < 0:
        raise ValueError("Degree must be non-negative, got {}".format(degree))
    if dimension < 0:
        raise ValueError("{} must be non-negative, got {}".format(
            what.capitalize(), dimension))
    if degree > dimension:
        raise ValueError("Degree {} exceeds {} {}".format(degree, what, dimension))


@dataclass(frozen=True)
class EmbeddedSeed:
    """A seed placed into the target dimension, with its stamp.

    Attributes:
        stamp: position in the stamped list, starting at 1
        seed_dimension: dimension m of the facet holding the seed
        obj: PartialObject of the target dimension
    """
    stamp: int
    seed_dimension: int
    obj: PartialObject

    @property
    def dimension(self):
        return self.obj.dimension

    def seed(self):
        """The seed itself, read back from the facet it was placed on."""
        return PartialObject(self.seed_dimension,
                             self.obj.status[:1 << self.seed_dimension].copy())


def generate_seeds(degree, dimension, verbose=False):
    """All seeds of the given dimension and degree bound, up to isomorphism.

    Returns
    -------
    list of PartialObject
        Fully decided seeds, first representative of each class in
        search order.
    """
    check_parameters(degree, dimension)
    t0 = time.time()
    counters = PrunerCounters()
    seen = set()
    seeds = []
    for obj in branch_and_bound(PartialObject(dimension), degree,
                                SEED_CLOSURE, [], counters):
        key = canonical_form(obj.feasible_set(), dimension)
        if key in seen:
            continue
        seen.add(key)
        seeds.append(obj)
    if verbose:
        print("Seeds (d={}, m={}): {} classes, {} closure prunes, {:.2f}s".format(
            degree, dimension, len(seeds), counters.counts["closure"],
            time.time() - t0))
    return seeds


def stamp_embed(degree, seed_dimension, target_dimension, seeds, first_stamp=1):
    """Embed seeds of dimension m into Q_n and stamp them.

    Seed vertex s keeps index s, i.e. the extra coordinates m .. n-1 are
    clamped to 0. Every other vertex of Q_n is Undecided.

    Parameters
    ----------
    degree : int
        Degree bound of the run the seeds are meant for.
    seed_dimension : int
    target_dimension : int
    seeds : sequence of PartialObject
    first_stamp : int

    Returns
    -------
    list of EmbeddedSeed
    """
    check_parameters(degree, target_dimension, "target dimension")
    if seed_dimension < 0:
        raise ValueError("Seed dimension must be non-negative, got {}".format(
            seed_dimension))
    if seed_dimension >= target_dimension:
        raise ValueError("Seed dimension {} must be below target dimension {}".format(
            seed_dimension, target_dimension))

    width = 1 << seed_dimension
    embedded = []
    for offset, seed in enumerate(seeds):
        if seed.dimension != seed_dimension:
            raise ValueError("Seed {} has dimension {}, declared {}".format(
                offset, seed.dimension, seed_dimension))
        if not seed.is_decided():
            raise ValueError("Seed {} is not fully decided".format(offset))
        obj = PartialObject(target_dimension)
        obj.status[:width] = seed.status
        embedded.append(EmbeddedSeed(first_stamp + offset, seed_dimension, obj))
    return embedded


def check_embedded_seed(es, target_dimension):
    """Reject a stamped seed that does not fit the target dimension.

    The seed must sit decided on the first 2^m vertices, with every
    other vertex still Undecided.
    """
    if es.dimension != target_dimension:
        raise ValueError("Seed #{} has dimension {}, target is {}".format(
            es.stamp, es.dimension, target_dimension))
    if not 0 <= es.seed_dimension < target_dimension:
        raise ValueError("Seed #{} has seed dimension {}, target is {}".format(
            es.stamp, es.seed_dimension, target_dimension))
    width = 1 << es.seed_dimension
    if np.any(es.obj.status[:width] == UNDECIDED):
        raise ValueError("Seed #{} leaves vertices of its {}-dimensional "
                         "facet undecided".format(es.stamp, es.seed_dimension))
    if np.any(es.obj.status[width:] != UNDECIDED):
        raise ValueError("Seed #{} decides vertices outside its {}-dimensional "
                         "facet".format(es.stamp, es.seed_dimension))


def take_batch(embedded, start, count):
    """The count stamped seeds from position start (0-based).

    Callers running several batches must make the ranges disjoint and
    covering; that is not checked here.
    """
    if start < 0 or count < 0 or start + count > len(embedded):
        raise ValueError("Batch range [{}, {}) outside stamped list of {} seeds".format(
            start, start + count, len(embedded)))
    return list(embedded[start:start + count])


def partition(embedded, batch_size):
    """Split the stamped list into (batch_id, seeds) pairs, batch ids from 1."""
    if batch_size < 1:
        raise ValueError("Batch size must be positive, got {}".format(batch_size))
    batches = []
    for batch_id, start in enumerate(range(0, len(embedded), batch_size), 1):
        count = min(batch_size, len(embedded) - start)
        batches.append((batch_id, take_batch(embedded, start, count)))
    return batches
