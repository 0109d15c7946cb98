"""
Hypercube Geometry
==================

Vertex tables for the n-dimensional Boolean hypercube Q_n.

A vertex is an integer 0 .. 2^n - 1; coordinate i is bit i. All tables
are numpy arrays indexed by vertex, built once per dimension and cached.

Functions:
    hypercube        -- cached Hypercube for a dimension
    antipode         -- bitwise complement of a vertex
    neighbors        -- the n vertices at Hamming distance 1
    to_bitstring     -- render a vertex, coordinate 0 first
    from_bitstring   -- parse a rendered vertex

Author: Carmen Esteban
License: MIT
"""

from functools import lru_cache

import numpy as np
from scipy import sparse


def antipode(v, dimension):
    """Bitwise complement of v in Q_dimension."""
    return v ^ ((1 << dimension) - 1)


def neighbors(v, dimension):
    """The vertices at Hamming distance 1 from v, by coordinate."""
    return [v ^ (1 << i) for i in range(dimension)]


def to_bitstring(v, dimension):
    return "".join(str((v >> i) & 1) for i in range(dimension))


def from_bitstring(bits):
    v = 0
    for i, ch in enumerate(bits):
        if ch == "1":
            v |= 1 << i
        elif ch != "0":
            raise ValueError("Invalid vertex bitstring: {!r}".format(bits))
    return v


class Hypercube:
    """Lookup tables for Q_n.

    Attributes
    ----------
    dimension : int
    size : int
        Number of vertices, 2^dimension.
    mask : int
        All-ones vertex.
    antipode : ndarray (size,)
        antipode[v] = v XOR mask.
    neighbor_table : ndarray (size, dimension)
        neighbor_table[v, i] = v XOR 2^i.
    adjacency : scipy.sparse.csr_matrix (size, size)
        0/1 adjacency matrix; adjacency @ indicator counts marked neighbors.
    bits : ndarray (size, dimension)
        bits[v, i] = coordinate i of v.
    """

    def __init__(self, dimension):
        if dimension < 0:
            raise ValueError("Dimension must be non-negative, got {}".format(dimension))
        self.dimension = dimension
        self.size = 1 << dimension
        self.mask = self.size - 1

        verts = np.arange(self.size, dtype=np.int64)
        self.antipode = verts ^ self.mask
        self.bits = ((verts[:, None] >> np.arange(dimension)) & 1).astype(np.int8)

        if dimension > 0:
            self.neighbor_table = verts[:, None] ^ (1 << np.arange(dimension))
        else:
            self.neighbor_table = np.zeros((1, 0), dtype=np.int64)

        rows = np.repeat(verts, dimension)
        cols = self.neighbor_table.ravel()
        vals = np.ones(len(rows), dtype=np.int64)
        self.adjacency = sparse.csr_matrix(
            (vals, (rows, cols)), shape=(self.size, self.size))

    def count_neighbors(self, indicator):
        """Number of marked neighbors of every vertex.

        indicator : bool ndarray (size,)
        """
        return self.adjacency @ indicator.astype(np.int64)

    def touches(self, indicator):
        """Vertices with at least one marked neighbor."""
        return self.count_neighbors(indicator) > 0

    def facet(self, coordinate, value):
        """Vertices with the given coordinate fixed to value, ascending."""
        self._check_coordinate(coordinate)
        return np.flatnonzero(self.bits[:, coordinate] == value)

    def facet_antipode(self, coordinate):
        """Antipodal map inside the facets orthogonal to coordinate.

        Flips every coordinate except the fixed one, so each facet is
        mapped onto itself.
        """
        self._check_coordinate(coordinate)
        return self.antipode ^ (1 << coordinate)

    def is_covered(self, indicator):
        """True if the marked vertices all agree on some coordinate.

        The empty set agrees on every coordinate. In dimension 0 a
        non-empty set has no coordinate to agree on.
        """
        members = np.flatnonzero(indicator)
        if len(members) == 0:
            return True
        cols = self.bits[members]
        return bool(np.any(cols.min(axis=0) == cols.max(axis=0)))

    def _check_coordinate(self, coordinate):
        if not 0 <= coordinate < self.dimension:
            raise ValueError("Coordinate {} out of range for dimension {}".format(
                coordinate, self.dimension))

    def __repr__(self):
        return "Hypercube(n={}, {} vertices)".format(self.dimension, self.size)


@lru_cache(maxsize=None)
def hypercube(dimension):
    """Shared, read-only Hypercube tables for a dimension."""
    return Hypercube(dimension)
