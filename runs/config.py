"""
Run configuration and job definitions.
======================================

Default search parameters and the queue of enumeration runs.

Each job: (name, variant, degree, seed_dimension, dimension, flags).
Seeds use DEFAULT_RUN["seed_degree"] when set, otherwise the search
degree capped at the seed dimension.

Author: Carmen Esteban
"""


# --- Default run parameters ---

DEFAULT_RUN = {
    "batch_size": 4,
    "max_workers": None,
    "seed_degree": None,   # None = same degree as the search
    "results_dir": "results",
    "verbose": True,
}


# --- Job queue ---
# Ordered by increasing dimension.

JOB_QUEUE = [
    # --- small checks ---
    ("SNP(d=0,n=3)",   "strict",             0, 2, 3, []),
    ("SNP(d=3,n=3)",   "strict",             3, 2, 3, []),
    ("CNP(d=3,n=3)",   "strict",             3, 2, 3, ["cnp"]),

    # --- dimension 4 ---
    ("SNP(d=2,n=4)",   "strict",             2, 2, 4, []),
    ("MNP(d=3,n=4)",   "strict",             3, 2, 4, ["mnp"]),
    ("CNP(d=3,n=4)",   "strict",             3, 2, 4, ["cnp"]),

    # --- half-dense d-regular ---
    ("HDR(d=1,n=4)",   "half_dense_regular", 1, 2, 4, []),
    ("HDR(d=2,n=5)",   "half_dense_regular", 2, 3, 5, []),
]
