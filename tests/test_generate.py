"""
Batch generation: the worked scenarios and the search invariants.

Author: Carmen Esteban
"""

import numpy as np
import pytest

from nonpolar.closure import STRICT_CLOSURE, HALF_DENSE_CLOSURE
from nonpolar.generate import (
    generate, half_dense_regular_generate, merge_results, dedupe_outputs,
)
from nonpolar.hypercube import hypercube
from nonpolar.partial import PartialObject
from nonpolar.pruners import PrunerCounters, SearchConfig, active_pruners
from nonpolar.search import branch_and_bound
from nonpolar.seeds import (
    EmbeddedSeed, generate_seeds, stamp_embed, take_batch, partition,
)
from nonpolar.symmetry import isomorphic, filter_isomorphic

TETRAHEDRON = {0, 3, 5, 6}


def _check_invariants(outputs, degree):
    for out in outputs:
        n = out.dimension
        cube = hypercube(n)
        feas = np.zeros(cube.size, dtype=bool)
        feas[list(out.vertices)] = True
        infeas = ~feas
        # no antipodal Feasible pair
        assert not np.any(feas & feas[cube.antipode])
        # Infeasible degree bound
        deg = cube.count_neighbors(infeas)
        assert np.all(deg[infeas] <= degree)
        # not inside a facet
        assert not cube.is_covered(feas)


def _scenario_one_seeds():
    seeds = generate_seeds(2, 2)
    return stamp_embed(2, 2, 3, seeds)


def test_scenario_strict_dimension_three():
    embedded = _scenario_one_seeds()
    assert len(embedded) == 6
    result = generate(1, 3, 3, {}, embedded)
    assert len(result.outputs) == 3
    assert sorted(len(o.vertices) for o in result.outputs) == [3, 4, 4]
    assert any(isomorphic(o.vertices, TETRAHEDRON, 3) for o in result.outputs)
    assert all(o.batch_id == 1 for o in result.outputs)
    assert sorted(result.timings) == [1, 2, 3, 4, 5, 6]
    _check_invariants(result.outputs, 3)


def test_scenario_critical_is_a_subset():
    embedded = _scenario_one_seeds()
    strict = generate(1, 3, 3, {}, embedded)
    critical = generate(1, 3, 3, {"cnp"}, embedded)
    assert len(critical.outputs) == 1
    assert isomorphic(critical.outputs[0].vertices, TETRAHEDRON, 3)
    strict_sets = [o.vertices for o in strict.outputs]
    for o in critical.outputs:
        assert any(isomorphic(o.vertices, s, 3) for s in strict_sets)
    assert critical.counters.counts["critical"] > 0


def test_scenario_minimal_dimension_four():
    embedded = stamp_embed(2, 2, 4, generate_seeds(2, 2))
    result = generate(1, 3, 4, SearchConfig(minimal=True), embedded)
    _check_invariants(result.outputs, 3)
    cube = hypercube(4)
    for out in result.outputs:
        feas = np.zeros(cube.size, dtype=bool)
        feas[list(out.vertices)] = True
        for i in range(4):
            paired = feas & feas[cube.facet_antipode(i)]
            for value in (0, 1):
                assert np.any(paired & (cube.bits[:, i] == value))
    assert len(filter_isomorphic([o.vertices for o in result.outputs], 4)) == \
        len(result.outputs)


def test_scenario_degree_zero_batches():
    embedded = stamp_embed(0, 2, 3, generate_seeds(0, 2))
    assert len(embedded) == 3

    whole = generate(1, 0, 3, {}, embedded)
    assert len(whole.outputs) == 1
    assert isomorphic(whole.outputs[0].vertices, TETRAHEDRON, 3)

    first = generate(1, 0, 3, {}, take_batch(embedded, 0, 2))
    second = generate(2, 0, 3, {}, take_batch(embedded, 2, 1))
    assert len(first.outputs) == 1
    assert len(second.outputs) == 0
    assert second.counters.counts["closure"] == 1
    assert len(merge_results([first, second])) == 1


def test_batch_union_matches_single_batch():
    embedded = _scenario_one_seeds()
    single = generate(1, 3, 3, {}, embedded)
    for size in (1, 2, 4):
        results = [generate(b, 3, 3, {}, seeds) for b, seeds in partition(embedded, size)]
        merged = merge_results(results)
        assert len(merged) == len(single.outputs)
        for o in merged:
            assert any(isomorphic(o.vertices, s.vertices, 3) for s in single.outputs)
        total = PrunerCounters()
        for r in results:
            total.merge(r.counters)
        assert total.as_dict() == single.counters.as_dict()


def test_dedupe_keeps_first_representative():
    result = generate(1, 3, 3, {}, _scenario_one_seeds())
    doubled = result.outputs + result.outputs
    assert dedupe_outputs(doubled) == result.outputs


def test_generate_validates_inputs():
    embedded = _scenario_one_seeds()
    with pytest.raises(ValueError):
        generate(1, 4, 3, {}, embedded)
    with pytest.raises(ValueError):
        generate(1, -1, 3, {}, embedded)
    with pytest.raises(ValueError):
        generate(1, 3, 4, {}, embedded)
    with pytest.raises(ValueError):
        generate(1, 3, 3, {"xnp"}, embedded)


def test_terminals_keep_the_seed_vertices():
    pruners = active_pruners(SearchConfig())
    for es in _scenario_one_seeds():
        root = es.obj
        fixed = root.status != 0
        for obj in branch_and_bound(root, 3, STRICT_CLOSURE, pruners, PrunerCounters()):
            assert np.array_equal(obj.status[fixed], root.status[fixed])


def test_half_dense_cube_terminals_are_facet_pairs():
    found = list(branch_and_bound(PartialObject(3), 2, HALF_DENSE_CLOSURE, [],
                                  PrunerCounters()))
    assert len(found) == 6
    for obj in found:
        assert len(obj.feasible_set()) == 4
        deg = obj.infeasible_degree()
        assert np.all(deg[obj.infeasible] == 2)
    assert len(filter_isomorphic([o.feasible_set() for o in found], 3)) == 1


def test_half_dense_generate_prunes_facet_pairs():
    result = half_dense_regular_generate(1, 2, 3, {}, _scenario_one_seeds())
    assert result.outputs == []
    assert result.variant == "half_dense_regular"


def test_half_dense_parity_object_is_reached():
    found = [o.feasible_set() for o in branch_and_bound(
        PartialObject(4), 1, HALF_DENSE_CLOSURE, [], PrunerCounters())]
    parity = frozenset(v for v in range(16)
                       if (v & 1) ^ ((v >> 1) & 1) ^ ((v >> 2) & 1))
    assert parity in found
    for f in found:
        assert len(f) == 8


def test_half_dense_degree_one_dimension_four_is_empty():
    embedded = stamp_embed(1, 2, 4, generate_seeds(1, 2))
    result = half_dense_regular_generate(1, 1, 4, {}, embedded)
    # no 1-regular half set of Q_4 survives the pruners
    assert result.outputs == []
    assert result.counters.total() > 0
    assert sorted(result.timings) == [e.stamp for e in embedded]


def test_half_dense_degree_two_dimension_five():
    embedded = stamp_embed(2, 2, 5, generate_seeds(2, 2))
    result = half_dense_regular_generate(1, 2, 5, {}, embedded)
    assert len(result.outputs) == 1
    out = result.outputs[0]
    assert len(out.vertices) == 16
    cube = hypercube(5)
    feas = np.zeros(cube.size, dtype=bool)
    feas[list(out.vertices)] = True
    # one vertex of every antipodal pair
    assert np.all(feas != feas[cube.antipode])
    deg = cube.count_neighbors(~feas)
    assert np.all(deg[~feas] == 2)
    assert not cube.is_covered(feas)


def test_generate_rejects_mismatched_seed_dimension():
    seed = generate_seeds(2, 2)[0]
    obj = PartialObject(3)
    obj.status[:4] = seed.status
    with pytest.raises(ValueError):
        generate(1, 3, 3, {}, [EmbeddedSeed(1, 1, obj)])
    with pytest.raises(ValueError):
        generate(1, 3, 3, {}, [EmbeddedSeed(1, 2, PartialObject(3))])
    with pytest.raises(ValueError):
        half_dense_regular_generate(1, 2, 3, {}, [EmbeddedSeed(1, 1, obj)])
    # the same object declared with its real seed dimension is accepted
    generate(1, 3, 3, {}, [EmbeddedSeed(1, 2, obj)])

if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print("  PASSED: {}".format(name))
    print("All generation tests passed!")
