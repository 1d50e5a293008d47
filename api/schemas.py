from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ---------- Input capture ----------
class CustomerRequest(BaseModel):
    customer: str = Field(..., min_length=1, examples=["Alice"])
    duration: int = Field(..., gt=0, description="service duration, minutes")
    interarrival_time: int = Field(..., ge=0, description="gap from previous arrival, seconds")
    server: str = Field("sr01", examples=["sr01", "sr02"])

    @field_validator("customer")
    @classmethod
    def strip_customer(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("customer must not be empty")
        return v


class SimulateRequest(BaseModel):
    customers: List[CustomerRequest]
    start: Optional[datetime] = None       # first arrival; defaults to now
    per_server: Optional[bool] = None


class ServerInfo(BaseModel):
    id: str
    label: str


class RecordOut(BaseModel):
    id: int
    customer: str
    arrival: str
    arrival_time: datetime
    duration: int
    server: str
    interarrival_time: int


class CustomerAdded(BaseModel):
    record: RecordOut
    server_average_duration: float


# ---------- Simulation ----------
class SimulationRowOut(BaseModel):
    id: int
    customer: str
    arrival: str
    duration: int
    server: str
    start_time: str
    end_time: str
    start_minutes: float
    end_minutes: float
    waiting_time: float
    service_time: float
    interarrival_time: int


class GanttBlockOut(BaseModel):
    server: str
    customer_id: int
    customer: str
    start: float
    end: float


class MetricsOut(BaseModel):
    total_waiting_time: float
    total_service_time: float
    interarrival_times: List[float]
    average_interarrival_time: float
    average_waiting_time: float
    average_service_time: float
    total_time_spent: float
    server_utilization: float


class SimulationResponse(BaseModel):
    rows: List[SimulationRowOut]
    gantt: List[GanttBlockOut]
    metrics: MetricsOut
