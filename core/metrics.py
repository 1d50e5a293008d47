from typing import Sequence, Tuple

from .models import PerformanceMetrics, SimulationRow


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_metrics(rows: Sequence[SimulationRow]) -> PerformanceMetrics:
    """
    Aggregate statistics over a simulation table.

    Utilization here is customer-time weighted: service / (service + wait),
    not the counter's busy/idle ratio over the clock.
    """
    n = len(rows)
    if n == 0:
        return PerformanceMetrics()

    total_waiting = sum(r.waiting_time for r in rows)
    total_service = sum(r.service_time for r in rows)

    interarrival_times: Tuple[float, ...] = tuple(
        (rows[i].arrival_time - rows[i - 1].arrival_time).total_seconds()
        for i in range(1, n)
    )

    total_time_spent = total_waiting + total_service
    utilization = total_service / total_time_spent if total_time_spent > 0 else 0.0

    return PerformanceMetrics(
        total_waiting_time=total_waiting,
        total_service_time=total_service,
        interarrival_times=interarrival_times,
        average_interarrival_time=_mean(interarrival_times),
        average_waiting_time=total_waiting / n,
        average_service_time=total_service / n,
        total_time_spent=total_time_spent,
        server_utilization=utilization
    )
