import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from .models import ServiceRecord, SimulationResult
from .simulation import simulate
from .validators import (
    parse_int, require_choice, require_non_empty,
    require_non_negative, require_positive
)

logger = logging.getLogger(__name__)


class SimulationSession:
    """
    Append-only customer list for one simulation session.

    Arrival instants are fixed when a record is added: the clock's "now" for
    the first customer, the previous arrival plus the gap after that. Reads
    get a tuple snapshot; the table and metrics are recomputed on every read.
    """

    def __init__(self,
                 servers: Dict[str, str],
                 per_server: bool = False,
                 clock: Callable[[], datetime] = datetime.now):
        if not servers:
            raise ValueError("servers must not be empty")
        self.servers = dict(servers)
        self.per_server = per_server
        self._clock = clock
        self._lock = threading.Lock()
        self._records: List[ServiceRecord] = []
        self._durations: Dict[str, List[int]] = {s: [] for s in self.servers}

    def add_customer(self, customer: Any, duration: Any, interarrival_time: Any, server: Any) -> ServiceRecord:
        name = require_non_empty("customer", customer)
        dur = parse_int("duration", duration)
        gap = parse_int("interarrival_time", interarrival_time)
        require_positive("duration", dur)
        require_non_negative("interarrival_time", gap)
        server_id = require_choice("server", server, self.servers)

        with self._lock:
            if self._records:
                arrival_time = self._records[-1].arrival_time + timedelta(seconds=gap)
            else:
                arrival_time = self._clock()

            record = ServiceRecord(
                id=len(self._records) + 1,
                customer=name,
                duration=dur,
                interarrival_time=gap,
                server=server_id,
                arrival_time=arrival_time
            )
            self._records.append(record)
            self._durations[server_id].append(dur)

        logger.info(f"Customer #{record.id} '{name}' added: server={server_id}, arrival={record.arrival}")
        return record

    def records(self) -> Tuple[ServiceRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def average_duration(self, server: str) -> float:
        # running mean of durations entered for this server
        require_choice("server", server, self.servers)
        with self._lock:
            durations = list(self._durations[server])
        return sum(durations) / len(durations) if durations else 0.0

    def result(self, per_server: Optional[bool] = None) -> SimulationResult:
        snapshot = self.records()
        use_per_server = self.per_server if per_server is None else per_server
        logger.debug(f"Recomputing timeline over {len(snapshot)} records (per_server={use_per_server})")
        return simulate(snapshot, per_server=use_per_server)

    def reset(self) -> None:
        with self._lock:
            count = len(self._records)
            self._records = []
            self._durations = {s: [] for s in self.servers}
        logger.info(f"Session reset, {count} records discarded")

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
