"""
Branch-and-Bound Driver
=======================

Depth-first search over PartialObjects with an explicit stack.

Every node on the stack is closed and has passed the active pruners.
A popped node with no Undecided vertex is terminal. Otherwise the
lowest Undecided vertex is decided both ways; the Feasible child is
pushed first, so the Infeasible branch is explored first.

Functions:
    tighten          -- close + prune one node, counting what fired
    branch_and_bound -- generator of terminal objects reachable from a root

Author: Carmen Esteban
License: MIT
"""

from nonpolar.closure import close
from nonpolar.partial import FEASIBLE, INFEASIBLE
from nonpolar.pruners import first_pruner


def tighten(obj, degree, rules, pruners, counters, config=None):
    """Closed copy of obj, or None if closure or a pruner rejected it."""
    closed = close(obj, degree, rules)
    if closed is None:
        counters.hit("closure")
        return None
    name = first_pruner(closed, degree, pruners, config)
    if name is not None:
        counters.hit(name)
        return None
    return closed


def branch_and_bound(root, degree, rules, pruners, counters, config=None):
    """Yield every fully decided object below root that survives.

    Parameters
    ----------
    root : PartialObject
        Starting node; closed and pruned here before the search.
    degree : int
    rules : ClosureRules
    pruners : list of (name, predicate)
        As returned by pruners.active_pruners; may be empty.
    counters : PrunerCounters
        Updated in place.
    config : SearchConfig, optional
        Passed through to the predicates.

    Yields
    ------
    PartialObject
        Terminal objects in search order.
    """
    start = tighten(root, degree, rules, pruners, counters, config)
    if start is None:
        return
    stack = [start]
    while stack:
        node = stack.pop()
        v = node.first_undecided()
        if v is None:
            yield node
            continue
        for value in (FEASIBLE, INFEASIBLE):
            child = tighten(node.child(v, value), degree, rules, pruners,
                            counters, config)
            if child is not None:
                stack.append(child)
