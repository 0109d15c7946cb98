"""
Parallel Batch Runner
=====================

Runs consecutive batches of stamped seeds as independent tasks in a
ProcessPoolExecutor, waits for all of them, and merges the outputs.

Batches share only read-only inputs. Each worker owns its own
PrunerCounters; the parent sums them after the barrier.

Functions:
    run_batches  -- partition, run in parallel, merge

Author: Carmen Esteban
License: MIT
"""

import time
from concurrent.futures import ProcessPoolExecutor

from nonpolar.generate import generate, half_dense_regular_generate, merge_results
from nonpolar.pruners import PrunerCounters, as_config
from nonpolar.reports import write_batch_reports
from nonpolar.seeds import partition

VARIANTS = {
    "strict": generate,
    "half_dense_regular": half_dense_regular_generate,
}


def _run_single_batch(args):
    """Worker function for parallel runs. Must be at module level for pickle.

    Parameters
    ----------
    args : tuple
        (variant, batch_id, degree, dimension, config, seeds, report_dir)

    Returns
    -------
    dict with 'batch_id', 'result' (BatchResult or None), 'error' (str or None)
    """
    variant, batch_id, degree, dimension, config, seeds, report_dir = args
    result = VARIANTS[variant](batch_id, degree, dimension, config, seeds)
    try:
        if report_dir is not None:
            write_batch_reports(result, report_dir)
    except OSError as e:
        return {"batch_id": batch_id, "result": None,
                "error": "report writing failed: {}".format(e)}
    return {"batch_id": batch_id, "result": result, "error": None}


def run_batches(embedded, degree, dimension, config=None, batch_size=None,
                variant="strict", max_workers=None, report_dir=None,
                verbose=False):
    """Search every batch of a stamped seed list and merge the results.

    Parameters
    ----------
    embedded : list of EmbeddedSeed
    degree : int
    dimension : int
    config : SearchConfig or flags, optional
    batch_size : int, optional
        Seeds per batch. None = a single batch.
    variant : str
        'strict' or 'half_dense_regular'.
    max_workers : int or None
        Number of parallel workers. None = os.cpu_count().
    report_dir : str or None
        Where each batch writes its reports; None = no reports.
    verbose : bool

    Returns
    -------
    dict
        'outputs' : list of Output (cross-batch deduplicated)
        'batches' : list of BatchResult (successful batches, by id)
        'errors' : dict batch_id -> message
        'counters' : PrunerCounters (summed)
        'total_time' : float
    """
    if variant not in VARIANTS:
        raise ValueError("Unknown variant {!r}; expected one of {}".format(
            variant, sorted(VARIANTS)))
    config = as_config(config)
    t0 = time.time()

    if batch_size is None:
        batch_size = max(1, len(embedded))
    batches = partition(embedded, batch_size)
    tasks = [(variant, batch_id, degree, dimension, config, seeds, report_dir)
             for batch_id, seeds in batches]

    if verbose:
        print("Running {} batches of up to {} seeds ({} variant)".format(
            len(tasks), batch_size, variant))

    done = []
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        for item in executor.map(_run_single_batch, tasks):
            done.append(item)

    results = [d["result"] for d in done if d["result"] is not None]
    errors = {d["batch_id"]: d["error"] for d in done if d["error"] is not None}

    counters = PrunerCounters()
    for r in results:
        counters.merge(r.counters)
    merged = merge_results(results)

    total_time = time.time() - t0
    if verbose:
        for r in results:
            print("  batch {}: {} outputs ({:.2f}s)".format(
                r.batch_id, len(r.outputs), r.total_time))
        for batch_id, msg in sorted(errors.items()):
            print("  batch {}: ERROR {}".format(batch_id, msg))
        print("Merged: {} non-isomorphic outputs, {:.2f}s".format(
            len(merged), total_time))

    return {
        "outputs": merged,
        "batches": sorted(results, key=lambda r: r.batch_id),
        "errors": errors,
        "counters": counters,
        "total_time": round(total_time, 4),
    }
