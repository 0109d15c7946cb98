"""
Hypercube Symmetry Group
========================

The hyperoctahedral group B_n acting on vertex sets of Q_n: a coordinate
permutation combined with a complementation of any subset of coordinates
(n! * 2^n elements).

Canonical forms are found by brute force over a precomputed image table,
which is fine for the dimensions searched here (n <= 6). Larger
dimensions would need a canonical labeling algorithm instead.

Functions:
    symmetry_group     -- cached SymmetryGroup for a dimension
    canonical_form     -- isomorphism key of a vertex set
    isomorphic         -- key equality
    filter_isomorphic  -- one representative per isomorphism class

Author: Carmen Esteban
License: MIT
"""

from functools import lru_cache
from itertools import permutations

import numpy as np

from nonpolar.hypercube import hypercube, from_bitstring


class SymmetryGroup:
    """All (permutation, flip) pairs for Q_n with their vertex images.

    Element (perm, flip) maps v to the vertex whose coordinate perm[i]
    equals coordinate i of (v XOR flip).
    """

    def __init__(self, dimension):
        cube = hypercube(dimension)
        self.dimension = dimension
        self.cube = cube

        verts = np.arange(cube.size, dtype=np.int64)
        self.elements = []
        rows = []
        for perm in permutations(range(dimension)):
            weights = np.array([1 << p for p in perm], dtype=np.int64)
            relabel = cube.bits.astype(np.int64) @ weights if dimension else verts.copy()
            for flip in range(cube.size):
                self.elements.append((perm, flip))
                rows.append(relabel[verts ^ flip])
        self.images = np.array(rows, dtype=np.int32)

    @property
    def order(self):
        return len(self.elements)

    def apply(self, index, vertices):
        """Image of a vertex set under element number index."""
        row = self.images[index]
        return frozenset(int(row[v]) for v in vertices)

    def canonical_form(self, vertices):
        """Smallest sorted image tuple of the set over the whole group."""
        members = np.array(sorted(set(int(v) for v in vertices)), dtype=np.int64)
        if len(members) == 0:
            return ()
        if members[-1] >= self.cube.size or members[0] < 0:
            raise ValueError("Vertex out of range for dimension {}".format(
                self.dimension))
        imgs = np.sort(self.images[:, members], axis=1)
        best = np.lexsort(imgs.T[::-1])[0]
        return tuple(int(v) for v in imgs[best])

    def __repr__(self):
        return "SymmetryGroup(n={}, order={})".format(self.dimension, self.order)


@lru_cache(maxsize=None)
def symmetry_group(dimension):
    return SymmetryGroup(dimension)


def canonical_form(vertices, dimension):
    return symmetry_group(dimension).canonical_form(vertices)


def isomorphic(a, b, dimension):
    """True if some group element maps vertex set a onto vertex set b."""
    a, b = set(a), set(b)
    if len(a) != len(b):
        return False
    return canonical_form(a, dimension) == canonical_form(b, dimension)


def _as_vertices(vertex_set, dimension):
    """Accept a set of ints or of bitstrings; return (ints, dimension)."""
    items = list(vertex_set)
    if not items:
        return [], dimension
    if isinstance(items[0], str):
        lengths = {len(s) for s in items}
        if len(lengths) != 1:
            raise ValueError("Bitstrings of mixed length: {}".format(sorted(lengths)))
        width = lengths.pop()
        if dimension is not None and dimension != width:
            raise ValueError("Bitstrings of length {} in dimension {}".format(
                width, dimension))
        return [from_bitstring(s) for s in items], width
    if dimension is None:
        raise ValueError("Dimension is required for integer vertex sets")
    return [int(v) for v in items], dimension


def filter_isomorphic(vertex_sets, dimension=None):
    """Keep the first vertex set of every isomorphism class, in input order.

    Parameters
    ----------
    vertex_sets : iterable of iterables
        Vertex sets as integers (dimension required) or as bitstrings
        (dimension read from the string length).
    dimension : int, optional

    Returns
    -------
    list
        The kept vertex sets, unchanged.
    """
    seen = set()
    kept = []
    for vs in vertex_sets:
        verts, dim = _as_vertices(vs, dimension)
        if dimension is None:
            dimension = dim
        key = canonical_form(verts, dim) if verts else ()
        if key in seen:
            continue
        seen.add(key)
        kept.append(vs)
    return kept
