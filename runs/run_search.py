#!/usr/bin/env python3
"""
Enumeration Runner
==================

Generates seeds, embeds and stamps them, runs the batches in parallel,
writes per-batch reports and merges the outputs across batches.

Usage:
    python runs/run_search.py --list                  # show the job queue
    python runs/run_search.py --job "SNP(d=3,n=3)"    # one queued job
    python runs/run_search.py --degree 3 --seed-dim 2 --dim 4 --flags mnp
    python runs/run_search.py ... --start 0 --count 2 --batch-id 1
                                                      # one batch only
    python runs/run_search.py --merge results/x/outputs_*.txt --dim 4

Author: Carmen Esteban
"""

import os
import sys
import time
import argparse

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from runs.config import DEFAULT_RUN, JOB_QUEUE
from nonpolar.hypercube import to_bitstring
from nonpolar.pruners import SearchConfig
from nonpolar.seeds import generate_seeds, stamp_embed, take_batch
from nonpolar.parallel import VARIANTS, run_batches
from nonpolar.reports import write_batch_reports, merge_reports


def job_dir(name):
    safe = name.replace("(", "_").replace(")", "").replace(",", "_").replace("=", "")
    return os.path.join(PROJECT_ROOT, DEFAULT_RUN["results_dir"], safe)


def prepare_seeds(degree, seed_dim, dim, verbose):
    seed_degree = DEFAULT_RUN["seed_degree"]
    if seed_degree is None:
        seed_degree = min(degree, seed_dim)
    seeds = generate_seeds(seed_degree, seed_dim, verbose=verbose)
    return stamp_embed(seed_degree, seed_dim, dim, seeds)


def run_job(name, variant, degree, seed_dim, dim, flags, batch_size, workers,
            verbose=True):
    """Full pipeline for one job; returns the run_batches summary."""
    config = SearchConfig.from_flags(flags)
    out_dir = job_dir(name)
    print("--- Job: {} ---".format(name))

    embedded = prepare_seeds(degree, seed_dim, dim, verbose)
    summary = run_batches(embedded, degree, dim, config, batch_size=batch_size,
                          variant=variant, max_workers=workers,
                          report_dir=out_dir, verbose=verbose)

    merged_path = os.path.join(out_dir, "merged.txt")
    with open(merged_path, "w") as f:
        for out in summary["outputs"]:
            f.write(" ".join(out.bitstrings()) + "\n")
    print("  Saved: {}".format(merged_path))
    print("  Pruners: {}".format(summary["counters"].as_dict()))
    return summary


def run_one_batch(args):
    """Single batch for an external scheduler: [start, start + count)."""
    config = SearchConfig.from_flags(args.flags)
    embedded = prepare_seeds(args.degree, args.seed_dim, args.dim, args.verbose)
    seeds = take_batch(embedded, args.start, args.count)
    result = VARIANTS[args.variant](args.batch_id, args.degree, args.dim, config,
                                   seeds, verbose=args.verbose)
    paths = write_batch_reports(result, args.out)
    print("Batch {}: {} outputs -> {}".format(
        args.batch_id, len(result.outputs), paths["outputs"]))


def main():
    parser = argparse.ArgumentParser(description="Non-polar set enumeration runner")
    parser.add_argument("--list", action="store_true", help="List queued jobs")
    parser.add_argument("--job", help="Run one queued job by name")
    parser.add_argument("--all", action="store_true", help="Run the whole queue")
    parser.add_argument("--variant", default="strict", choices=sorted(VARIANTS))
    parser.add_argument("--degree", type=int)
    parser.add_argument("--seed-dim", type=int)
    parser.add_argument("--dim", type=int)
    parser.add_argument("--flags", nargs="*", default=[],
                        help="Config flags: mnp, cnp")
    parser.add_argument("--batch-size", type=int, default=DEFAULT_RUN["batch_size"])
    parser.add_argument("--workers", type=int, default=DEFAULT_RUN["max_workers"])
    parser.add_argument("--start", type=int, help="Single batch: first seed index")
    parser.add_argument("--count", type=int, help="Single batch: number of seeds")
    parser.add_argument("--batch-id", type=int, default=1)
    parser.add_argument("--out", default=os.path.join(PROJECT_ROOT, DEFAULT_RUN["results_dir"]))
    parser.add_argument("--merge", nargs="+", help="Merge outputs files")
    parser.add_argument("--quiet", dest="verbose", action="store_false",
                        default=DEFAULT_RUN["verbose"])
    args = parser.parse_args()

    if args.list:
        for name, variant, degree, seed_dim, dim, flags in JOB_QUEUE:
            print("{:16s} {:20s} d={} m={} n={} {}".format(
                name, variant, degree, seed_dim, dim, flags))
        return

    if args.merge:
        if args.dim is None:
            parser.error("--merge needs --dim")
        merged = merge_reports(args.merge, args.dim)
        for verts in merged:
            print(" ".join(to_bitstring(v, args.dim) for v in verts))
        print("{} non-isomorphic objects".format(len(merged)), file=sys.stderr)
        return

    if args.job or args.all:
        jobs = [j for j in JOB_QUEUE if args.all or j[0] == args.job]
        if not jobs:
            parser.error("Unknown job: {}".format(args.job))
        print("=== Non-Polar Enumeration ===")
        t0 = time.time()
        for name, variant, degree, seed_dim, dim, flags in jobs:
            run_job(name, variant, degree, seed_dim, dim, flags,
                    args.batch_size, args.workers, args.verbose)
        print("\n=== Done ({:.1f}s) ===".format(time.time() - t0))
        return

    if args.degree is None or args.seed_dim is None or args.dim is None:
        parser.error("--degree, --seed-dim and --dim are required")

    if args.start is not None or args.count is not None:
        if args.start is None or args.count is None:
            parser.error("--start and --count go together")
        run_one_batch(args)
        return

    name = "custom_{}(d={},m={},n={}{})".format(
        args.variant, args.degree, args.seed_dim, args.dim,
        "," + ",".join(args.flags) if args.flags else "")
    run_job(name, args.variant, args.degree, args.seed_dim, args.dim, args.flags,
            args.batch_size, args.workers, args.verbose)


if __name__ == "__main__":
    main()
