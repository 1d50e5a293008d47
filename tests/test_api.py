import logging
from datetime import datetime
from io import BytesIO

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from api.main import app, configure_logging, get_session
from core.config import load_settings
from core.session import SimulationSession


@pytest.fixture
def client(session: SimulationSession):
    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _add(client, customer, duration, gap, server="sr01"):
    return client.post("/customers", json={
        "customer": customer,
        "duration": duration,
        "interarrival_time": gap,
        "server": server,
    })


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_servers(client) -> None:
    assert client.get("/servers").json() == [
        {"id": "sr01", "label": "Server 01"},
        {"id": "sr02", "label": "Server 02"},
    ]


def test_add_customer_returns_record_and_running_average(client) -> None:
    r = _add(client, "Alice", 10, 0)
    assert r.status_code == 201
    body = r.json()
    assert body["record"]["id"] == 1
    assert body["record"]["arrival"] == "00:00"
    assert body["server_average_duration"] == 10

    body = _add(client, "Bob", 4, 60).json()
    assert body["record"]["id"] == 2
    assert body["server_average_duration"] == 7


def test_schema_violations_are_422(client) -> None:
    assert _add(client, "", 10, 0).status_code == 422
    assert _add(client, "Alice", 0, 0).status_code == 422
    assert _add(client, "Alice", 10, -5).status_code == 422
    assert client.get("/customers").json() == []


def test_unknown_server_is_400(client) -> None:
    r = _add(client, "Alice", 10, 0, server="sr99")
    assert r.status_code == 400
    assert "server" in r.json()["detail"]


def test_simulation_table_and_metrics(client) -> None:
    _add(client, "A", 10, 0)
    _add(client, "B", 5, 300, "sr02")

    body = client.get("/simulation").json()
    assert [(r["start_time"], r["end_time"], r["waiting_time"]) for r in body["rows"]] == [
        ("00:00", "00:10", 0.0),
        ("00:10", "00:15", 5.0),
    ]
    assert [(g["start"], g["end"]) for g in body["gantt"]] == [(0.0, 10.0), (10.0, 15.0)]

    m = client.get("/metrics").json()
    assert m["average_waiting_time"] == 2.5
    assert m["average_service_time"] == 7.5
    assert m["total_time_spent"] == 20.0
    assert m["server_utilization"] == 0.75


def test_empty_session_metrics_are_zero(client) -> None:
    m = client.get("/metrics").json()
    assert m["average_waiting_time"] == 0
    assert m["server_utilization"] == 0
    assert m["interarrival_times"] == []


def test_export_csv(client) -> None:
    _add(client, "A", 4, 0)
    _add(client, "B", 6, 0)

    r = client.get("/export", params={"format": "csv"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "SimulationData.csv" in r.headers["content-disposition"]
    lines = r.text.strip().splitlines()
    assert lines[0].startswith("ID,Customer,Arrival,Duration,Server,Start Time,End Time")
    assert len(lines) == 3


def test_stateless_simulate_leaves_session_untouched(client) -> None:
    r = client.post("/simulate", json={
        "start": datetime(2024, 1, 1, 9, 0).isoformat(),
        "customers": [
            {"customer": "A", "duration": 4, "interarrival_time": 0, "server": "sr01"},
            {"customer": "B", "duration": 6, "interarrival_time": 0, "server": "sr02"},
        ],
    })
    assert r.status_code == 200
    rows = r.json()["rows"]
    assert rows[0]["start_time"] == "09:00"
    assert rows[1]["waiting_time"] == 4
    assert client.get("/customers").json() == []


def test_stateless_simulate_per_server(client) -> None:
    r = client.post("/simulate", json={
        "start": datetime(2024, 1, 1, 9, 0).isoformat(),
        "per_server": True,
        "customers": [
            {"customer": "A", "duration": 4, "interarrival_time": 0, "server": "sr01"},
            {"customer": "B", "duration": 6, "interarrival_time": 0, "server": "sr02"},
        ],
    })
    assert r.json()["rows"][1]["waiting_time"] == 0


def test_stateless_simulate_rejects_unknown_server(client) -> None:
    r = client.post("/simulate", json={
        "customers": [{"customer": "A", "duration": 4, "interarrival_time": 0, "server": "nope"}],
    })
    assert r.status_code == 400


def test_reset(client) -> None:
    _add(client, "A", 4, 0)
    assert client.post("/session/reset").json() == {"status": "ok"}
    assert client.get("/customers").json() == []


def test_settings_are_logged_once_logging_is_configured(caplog) -> None:
    caplog.set_level(logging.INFO, logger="api.main")
    configure_logging(load_settings({"QUEUE_SIM_SERVERS": "desk:Desk"}))
    assert "Settings loaded: servers=['desk']" in caplog.text


def test_export_defaults_to_xlsx(client) -> None:
    _add(client, "A", 4, 0)
    _add(client, "B", 6, 0)

    r = client.get("/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert "SimulationData.xlsx" in r.headers["content-disposition"]

    df = pd.read_excel(BytesIO(r.content), sheet_name="Simulation Data")
    assert df["Customer"].tolist() == ["A", "B"]
    assert df["Waiting Time"].tolist() == [0.0, 4.0]


def test_export_rejects_unknown_format(client) -> None:
    assert client.get("/export", params={"format": "pdf"}).status_code == 422
