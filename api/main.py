import logging
from datetime import datetime
from typing import List, Literal

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from api.schemas import (
    CustomerAdded, CustomerRequest, GanttBlockOut, MetricsOut, RecordOut,
    ServerInfo, SimulateRequest, SimulationResponse, SimulationRowOut
)

from core.config import Settings, load_settings
from core.export import export_csv_text, export_xlsx_bytes
from core.models import ServiceRecord, SimulationResult
from core.session import SimulationSession
from core.timeline import format_clock

settings = load_settings()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    # handlers first, so the settings line below is not dropped
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.info(f"Settings loaded: servers={list(settings.servers)}, per_server_timelines={settings.per_server_timelines}")


configure_logging(settings)

app = FastAPI(title="Bank Queue Simulator API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_session = SimulationSession(settings.servers, per_server=settings.per_server_timelines)


def get_session() -> SimulationSession:
    return _session


# ---------- Helpers ----------
def _record_out(rec: ServiceRecord) -> RecordOut:
    return RecordOut(
        id=rec.id,
        customer=rec.customer,
        arrival=rec.arrival,
        arrival_time=rec.arrival_time,
        duration=rec.duration,
        server=rec.server,
        interarrival_time=rec.interarrival_time
    )

def _metrics_out(res: SimulationResult) -> MetricsOut:
    m = res.metrics
    return MetricsOut(
        total_waiting_time=m.total_waiting_time,
        total_service_time=m.total_service_time,
        interarrival_times=list(m.interarrival_times),
        average_interarrival_time=m.average_interarrival_time,
        average_waiting_time=m.average_waiting_time,
        average_service_time=m.average_service_time,
        total_time_spent=m.total_time_spent,
        server_utilization=m.server_utilization
    )

def _simulation_out(res: SimulationResult) -> SimulationResponse:
    rows = [
        SimulationRowOut(
            id=r.id,
            customer=r.customer,
            arrival=r.arrival,
            duration=r.duration,
            server=r.server,
            start_time=format_clock(r.start_time),
            end_time=format_clock(r.end_time),
            start_minutes=r.start_time,
            end_minutes=r.end_time,
            waiting_time=r.waiting_time,
            service_time=r.service_time,
            interarrival_time=r.interarrival_time
        )
        for r in res.rows
    ]
    gantt = [GanttBlockOut(**g.__dict__) for g in res.gantt]
    return SimulationResponse(rows=rows, gantt=gantt, metrics=_metrics_out(res))


# ---------- Endpoints ----------
@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/servers", response_model=List[ServerInfo])
def servers(session: SimulationSession = Depends(get_session)):
    return [ServerInfo(id=k, label=v) for k, v in session.servers.items()]

@app.post("/customers", response_model=CustomerAdded, status_code=201)
def add_customer(req: CustomerRequest, session: SimulationSession = Depends(get_session)):
    try:
        rec = session.add_customer(req.customer, req.duration, req.interarrival_time, req.server)
    except ValueError as e:
        logger.warning(f"Customer rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return CustomerAdded(
        record=_record_out(rec),
        server_average_duration=session.average_duration(rec.server)
    )

@app.get("/customers", response_model=List[RecordOut])
def list_customers(session: SimulationSession = Depends(get_session)):
    return [_record_out(r) for r in session.records()]

@app.get("/simulation", response_model=SimulationResponse)
def simulation(session: SimulationSession = Depends(get_session)):
    return _simulation_out(session.result())

@app.get("/metrics", response_model=MetricsOut)
def metrics(session: SimulationSession = Depends(get_session)):
    return _metrics_out(session.result())

@app.get("/export")
def export(fmt: Literal["xlsx", "csv"] = Query("xlsx", alias="format"),
           session: SimulationSession = Depends(get_session)):
    res = session.result()
    logger.info(f"Exporting {len(res.rows)} rows as {fmt}")

    if fmt == "csv":
        content = export_csv_text(res.rows)
        media_type = "text/csv"
    else:
        content = export_xlsx_bytes(res.rows)
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{settings.export_name}.{fmt}"'}
    )

@app.post("/simulate", response_model=SimulationResponse)
def simulate_endpoint(req: SimulateRequest, session: SimulationSession = Depends(get_session)):
    # stateless: a throwaway session with the same servers, live session untouched
    start = req.start or datetime.now()
    per_server = session.per_server if req.per_server is None else req.per_server
    scratch = SimulationSession(session.servers, per_server=per_server, clock=lambda: start)
    try:
        for c in req.customers:
            scratch.add_customer(c.customer, c.duration, c.interarrival_time, c.server)
    except ValueError as e:
        logger.warning(f"Simulation request rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return _simulation_out(scratch.result())

@app.post("/session/reset")
def reset(session: SimulationSession = Depends(get_session)):
    session.reset()
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
