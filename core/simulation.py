from typing import Sequence

from .metrics import compute_metrics
from .models import ServiceRecord, SimulationResult
from .timeline import build_gantt, build_timeline


def simulate(records: Sequence[ServiceRecord], per_server: bool = False) -> SimulationResult:
    # full recompute from the snapshot: timeline first, then aggregates over it
    rows = build_timeline(records, per_server=per_server)

    return SimulationResult(
        rows=rows,
        gantt=build_gantt(rows),
        metrics=compute_metrics(rows)
    )
