import math
from typing import Dict, List, Sequence

from .models import GanttBlock, ServiceRecord, SimulationRow


def format_clock(minutes: float) -> str:
    """
    Render a minutes-of-day value as zero-padded HH:MM.
    Seconds are truncated, not rounded: 125.5 -> "02:05".
    """
    total_seconds = math.floor(minutes * 60)
    hours = total_seconds // 3600
    mins = (total_seconds % 3600) // 60
    return f"{hours:02d}:{mins:02d}"


def build_timeline(records: Sequence[ServiceRecord], per_server: bool = False) -> List[SimulationRow]:
    """
    Sequential FIFO over the records in insertion order.

    Every record shares one completion clock unless per_server is set, in
    which case each server id keeps its own clock.
    """
    shared_clock = 0.0
    server_clock: Dict[str, float] = {}
    rows: List[SimulationRow] = []

    for rec in records:
        arrival = rec.arrival_minutes
        current_time = server_clock.get(rec.server, 0.0) if per_server else shared_clock

        start = float(max(current_time, arrival))
        end = start + rec.duration
        waiting = max(0.0, start - arrival)

        if per_server:
            server_clock[rec.server] = end
        else:
            shared_clock = end

        rows.append(SimulationRow(
            id=rec.id,
            customer=rec.customer,
            duration=rec.duration,
            interarrival_time=rec.interarrival_time,
            server=rec.server,
            arrival_time=rec.arrival_time,
            start_time=start,
            end_time=end,
            waiting_time=waiting,
            service_time=float(rec.duration)
        ))

    return rows


def build_gantt(rows: Sequence[SimulationRow]) -> List[GanttBlock]:
    # one bar per customer: start/end minute
    return [
        GanttBlock(
            server=r.server,
            customer_id=r.id,
            customer=r.customer,
            start=r.start_time,
            end=r.end_time
        )
        for r in rows
    ]
