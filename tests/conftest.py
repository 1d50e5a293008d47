from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence, Tuple

import pytest

from core.config import DEFAULT_SERVERS, parse_servers
from core.models import ServiceRecord
from core.session import SimulationSession

MIDNIGHT = datetime(2024, 1, 1, 0, 0, 0)


def _make_records(entries: Sequence[Tuple[str, int, int, str]], start: datetime = MIDNIGHT) -> List[ServiceRecord]:
    """entries: (customer, duration minutes, gap seconds, server)"""
    records: List[ServiceRecord] = []
    for i, (name, duration, gap, server) in enumerate(entries, start=1):
        arrival = start if not records else records[-1].arrival_time + timedelta(seconds=gap)
        records.append(ServiceRecord(i, name, duration, gap, server, arrival))
    return records


@pytest.fixture
def make_records():
    return _make_records


@pytest.fixture
def servers() -> dict:
    return parse_servers(DEFAULT_SERVERS)


@pytest.fixture
def session(servers) -> SimulationSession:
    return SimulationSession(servers, clock=lambda: MIDNIGHT)
