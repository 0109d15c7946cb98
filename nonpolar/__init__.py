"""
Non-Polar Set Enumeration
=========================

Enumerates, up to hypercube symmetry, vertex sets of Q_n whose
Infeasible complement has bounded induced degree:

  strict   - no antipodal Feasible pair, not inside a facet, and no
             facet restriction is itself non-polar
  minimal  - additionally every facet restriction holds an antipodal pair
  critical - additionally every Feasible vertex keeps all its
             facet-antipodal partners
  half-dense d-regular - exactly one vertex of each antipodal pair,
             every Infeasible vertex with exactly d Infeasible neighbors

Pipeline: generate_seeds -> stamp_embed -> batches -> generate ->
intra-batch dedup -> reports -> cross-batch merge.

Author: Carmen Esteban
License: MIT
"""

__version__ = "0.1.0"
__author__ = "Carmen Esteban"

from nonpolar.hypercube import (
    Hypercube, hypercube, antipode, neighbors, to_bitstring, from_bitstring,
)
from nonpolar.symmetry import (
    SymmetryGroup, symmetry_group, canonical_form, isomorphic, filter_isomorphic,
)
from nonpolar.partial import PartialObject, UNDECIDED, FEASIBLE, INFEASIBLE
from nonpolar.closure import (
    ClosureRules, close, violates,
    SEED_CLOSURE, STRICT_CLOSURE, HALF_DENSE_CLOSURE,
)
from nonpolar.pruners import (
    SearchConfig, PrunerCounters, PRUNER_NAMES, active_pruners,
    intersecting_pruner, cover_pruner, minimal_pruner, critical_pruner,
)
from nonpolar.search import branch_and_bound, tighten
from nonpolar.seeds import (
    EmbeddedSeed, generate_seeds, stamp_embed, take_batch, partition,
)
from nonpolar.generate import (
    Output, BatchResult, generate, half_dense_regular_generate,
    dedupe_outputs, merge_results,
)
from nonpolar.reports import write_batch_reports, read_outputs, merge_reports
from nonpolar.parallel import run_batches
