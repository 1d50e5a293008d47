from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple


@dataclass(frozen=True)
class ServiceRecord:
    id: int                    # 1-based, insertion order
    customer: str
    duration: int              # service duration, minutes
    interarrival_time: int     # gap from previous arrival, seconds
    server: str                # e.g. "sr01"
    arrival_time: datetime     # fixed when the record is created

    @property
    def arrival(self) -> str:
        return self.arrival_time.strftime("%H:%M")

    @property
    def arrival_minutes(self) -> int:
        # minutes of day, seconds dropped
        return self.arrival_time.hour * 60 + self.arrival_time.minute


@dataclass(frozen=True)
class SimulationRow:
    id: int
    customer: str
    duration: int
    interarrival_time: int
    server: str
    arrival_time: datetime
    start_time: float          # minutes of day
    end_time: float
    waiting_time: float
    service_time: float

    @property
    def arrival(self) -> str:
        return self.arrival_time.strftime("%H:%M")


@dataclass(frozen=True)
class GanttBlock:
    server: str
    customer_id: int
    customer: str
    start: float
    end: float


@dataclass(frozen=True)
class PerformanceMetrics:
    total_waiting_time: float = 0.0
    total_service_time: float = 0.0
    interarrival_times: Tuple[float, ...] = ()
    average_interarrival_time: float = 0.0   # seconds
    average_waiting_time: float = 0.0        # minutes
    average_service_time: float = 0.0        # minutes
    total_time_spent: float = 0.0
    server_utilization: float = 0.0


@dataclass
class SimulationResult:
    rows: List[SimulationRow]
    gantt: List[GanttBlock]
    metrics: PerformanceMetrics
