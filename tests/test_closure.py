"""
Closure engine: the three rule sets on hand-checked instances.

Author: Carmen Esteban
"""

import numpy as np

from nonpolar.closure import (
    close, violates, SEED_CLOSURE, STRICT_CLOSURE, HALF_DENSE_CLOSURE,
)
from nonpolar.partial import PartialObject, UNDECIDED, FEASIBLE, INFEASIBLE


def _obj(n, feasible=(), infeasible=()):
    obj = PartialObject(n)
    if feasible:
        obj.assign(list(feasible), FEASIBLE)
    if infeasible:
        obj.assign(list(infeasible), INFEASIBLE)
    return obj


def test_antipodal_conflict_prunes():
    assert close(_obj(3, feasible=[0, 7]), 3) is None
    assert violates(_obj(3, feasible=[0, 7]), 3)


def test_degree_overflow_prunes():
    assert close(_obj(3, infeasible=[0, 1, 2]), 1) is None
    assert close(_obj(3, infeasible=[0, 1, 2]), 2) is not None


def test_antipodal_forcing():
    out = close(_obj(3, feasible=[1]), 3)
    assert out.status[6] == INFEASIBLE
    assert out.status[1] == FEASIBLE
    assert np.sum(out.status == UNDECIDED) == 6


def test_saturation_forcing_reaches_the_odd_tetrahedron():
    # d = 0: vertex 0 pushes its neighbors to Feasible, their antipodes
    # become Infeasible, which in turn pushes 7 to Feasible
    out = close(_obj(3, infeasible=[0]), 0)
    assert out.is_decided()
    assert out.feasible_set() == frozenset({1, 2, 4, 7})


def test_closure_is_monotone_and_idempotent():
    start = _obj(4, feasible=[3], infeasible=[0, 5])
    out = close(start, 2)
    decided = start.status != UNDECIDED
    assert np.array_equal(out.status[decided], start.status[decided])
    assert close(out, 2) == out
    # input left alone
    assert start.status[12] == UNDECIDED


def test_seed_closure_ignores_antipodes():
    out = close(_obj(3, feasible=[0, 7]), 3, SEED_CLOSURE)
    assert out is not None
    assert out.status[7] == FEASIBLE
    assert close(_obj(2, infeasible=[0, 1]), 0, SEED_CLOSURE) is None


def test_half_dense_balance():
    out = close(_obj(3, infeasible=[0]), 2, HALF_DENSE_CLOSURE)
    assert out.status[7] == FEASIBLE
    assert close(_obj(3, infeasible=[0, 7]), 2, HALF_DENSE_CLOSURE) is None
    # the strict rules allow two antipodal Infeasible vertices
    assert close(_obj(3, infeasible=[0, 7]), 2, STRICT_CLOSURE) is not None


def test_half_dense_regularity():
    # vertex 0 can reach at most one Infeasible neighbor
    assert close(_obj(3, feasible=[1, 2], infeasible=[0]), 2,
                 HALF_DENSE_CLOSURE) is None
    # vertex 0 needs both of its remaining neighbors; the result is the
    # facet x0 = 0 Infeasible and x0 = 1 Feasible
    out = close(_obj(3, feasible=[1], infeasible=[0]), 2, HALF_DENSE_CLOSURE)
    assert out.is_decided()
    assert out.feasible_set() == frozenset({1, 3, 5, 7})
    deg = out.infeasible_degree()
    assert all(deg[v] == 2 for v in (0, 2, 4, 6))


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print("  PASSED: {}".format(name))
    print("All closure tests passed!")
