"""
Closure Engine
==============

Fixed-point constraint propagation over a PartialObject with degree
bound d. One routine, three rule sets:

    SEED_CLOSURE        degree overflow + saturation forcing
    STRICT_CLOSURE      antipodal conflict/forcing + degree overflow/saturation
    HALF_DENSE_CLOSURE  strict rules + antipodal balance + d-regularity

Rules, in the order they are tried on every pass:
    (i)   two antipodal Feasible vertices             -> prune
    (ii)  Infeasible vertex with > d Infeasible nbrs  -> prune
    (iii) Feasible vertex, Undecided antipode         -> antipode Infeasible
    (iv)  Infeasible vertex with exactly d Infeasible nbrs
                                                      -> Undecided nbrs Feasible
Half-dense additions:
    two antipodal Infeasible vertices                 -> prune
    Infeasible vertex that cannot reach d Infeasible nbrs -> prune
    Infeasible vertex, Undecided antipode             -> antipode Feasible
    Infeasible vertex whose Infeasible + Undecided nbrs number exactly d
                                                      -> Undecided nbrs Infeasible

After any forcing rule changes something the pass restarts from (i).

Author: Carmen Esteban
License: MIT
"""

from dataclasses import dataclass

import numpy as np

from nonpolar.partial import FEASIBLE, INFEASIBLE, UNDECIDED


@dataclass(frozen=True)
class ClosureRules:
    """Which closure rules are active."""
    name: str
    antipodal: bool = True
    balanced: bool = False
    regular: bool = False


SEED_CLOSURE = ClosureRules("seed", antipodal=False)
STRICT_CLOSURE = ClosureRules("strict")
HALF_DENSE_CLOSURE = ClosureRules("half_dense_regular", balanced=True, regular=True)


def violates(obj, degree, rules=STRICT_CLOSURE):
    """True if obj breaks one of the pruning checks of rules."""
    status = obj.status
    anti = obj.cube.antipode
    feas = status == FEASIBLE
    infeas = status == INFEASIBLE

    if rules.antipodal and np.any(feas & feas[anti]):
        return True
    if rules.balanced and np.any(infeas & infeas[anti]):
        return True

    deg = obj.cube.count_neighbors(infeas)
    if np.any(infeas & (deg > degree)):
        return True
    if rules.regular:
        reach = obj.cube.count_neighbors(status != FEASIBLE)
        if np.any(infeas & (reach < degree)):
            return True
    return False


def _force(status, targets, value):
    """Set Undecided targets to value; return True if anything changed."""
    targets = targets & (status == UNDECIDED)
    if not np.any(targets):
        return False
    status[targets] = value
    return True


def close(obj, degree, rules=STRICT_CLOSURE):
    """Propagate rules to a fixed point.

    Parameters
    ----------
    obj : PartialObject
        Left untouched.
    degree : int
        Degree bound d.
    rules : ClosureRules

    Returns
    -------
    PartialObject or None
        The tightened copy, or None if the object was pruned.
    """
    out = obj.copy()
    status = out.status
    cube = out.cube
    anti = cube.antipode

    while True:
        if violates(out, degree, rules):
            return None

        feas = status == FEASIBLE
        infeas = status == INFEASIBLE

        if rules.antipodal and _force(status, feas[anti], INFEASIBLE):
            continue
        if rules.balanced and _force(status, infeas[anti], FEASIBLE):
            continue

        deg = cube.count_neighbors(infeas)
        saturated = infeas & (deg == degree)
        if _force(status, cube.touches(saturated), FEASIBLE):
            continue

        if rules.regular:
            reach = cube.count_neighbors(status != FEASIBLE)
            tight = infeas & (reach == degree)
            if _force(status, cube.touches(tight), INFEASIBLE):
                continue

        return out
