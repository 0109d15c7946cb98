"""Three-valued vertex labelings of Q_n: PartialObject."""

import numpy as np

from nonpolar.hypercube import hypercube, to_bitstring

UNDECIDED = 0
FEASIBLE = 1
INFEASIBLE = 2

STATUS_NAMES = {UNDECIDED: "undecided", FEASIBLE: "feasible", INFEASIBLE: "infeasible"}


class PartialObject:
    """Status (UNDECIDED / FEASIBLE / INFEASIBLE) for every vertex of Q_n.

    Statuses only move away from UNDECIDED; assigning a different status
    to a decided vertex raises ValueError.
    """

    def __init__(self, dimension, status=None):
        self.cube = hypercube(dimension)
        self.dimension = dimension
        if status is None:
            status = np.zeros(self.cube.size, dtype=np.int8)
        else:
            status = np.asarray(status, dtype=np.int8)
            if status.shape != (self.cube.size,):
                raise ValueError("Status vector of shape {} for dimension {}".format(
                    status.shape, dimension))
        self.status = status

    @classmethod
    def from_feasible(cls, dimension, feasible):
        """Fully decided object whose Feasible set is the given vertices."""
        obj = cls(dimension)
        obj.status[:] = INFEASIBLE
        obj.status[list(feasible)] = FEASIBLE
        return obj

    def copy(self):
        return PartialObject(self.dimension, self.status.copy())

    # --- masks ---

    @property
    def feasible(self):
        return self.status == FEASIBLE

    @property
    def infeasible(self):
        return self.status == INFEASIBLE

    @property
    def undecided(self):
        return self.status == UNDECIDED

    def is_decided(self):
        return not np.any(self.status == UNDECIDED)

    def first_undecided(self):
        """Lowest undecided vertex, or None."""
        idx = np.flatnonzero(self.status == UNDECIDED)
        return int(idx[0]) if len(idx) else None

    # --- updates ---

    def assign(self, vertices, value):
        """Set the given vertices to value, enforcing monotonicity."""
        vertices = np.atleast_1d(np.asarray(vertices, dtype=np.int64))
        current = self.status[vertices]
        if np.any((current != UNDECIDED) & (current != value)):
            bad = int(vertices[(current != UNDECIDED) & (current != value)][0])
            raise ValueError("Vertex {} is already {}, cannot set {}".format(
                bad, STATUS_NAMES[int(self.status[bad])], STATUS_NAMES[value]))
        self.status[vertices] = value

    def child(self, vertex, value):
        """Copy of this object with one more vertex decided."""
        out = self.copy()
        out.assign(vertex, value)
        return out

    # --- derived queries ---

    def infeasible_degree(self):
        """Number of Infeasible neighbors of every vertex."""
        return self.cube.count_neighbors(self.infeasible)

    def restrict(self, coordinate, value):
        """Sub-object of dimension n - 1 on the facet x_coordinate = value.

        Facet vertices are taken in ascending order, which is exactly the
        order of the (n - 1)-bit indices left after deleting the bit.
        """
        verts = self.cube.facet(coordinate, value)
        return PartialObject(self.dimension - 1, self.status[verts].copy())

    def feasible_set(self):
        return frozenset(int(v) for v in np.flatnonzero(self.feasible))

    def bitstrings(self):
        return [to_bitstring(v, self.dimension) for v in sorted(self.feasible_set())]

    def counts(self):
        return {name: int(np.sum(self.status == code)) for code, name in STATUS_NAMES.items()}

    def __eq__(self, other):
        return (isinstance(other, PartialObject) and self.dimension == other.dimension
                and np.array_equal(self.status, other.status))

    def __repr__(self):
        c = self.counts()
        return "PartialObject(n={}, {} feasible, {} infeasible, {} undecided)".format(
            self.dimension, c["feasible"], c["infeasible"], c["undecided"])
