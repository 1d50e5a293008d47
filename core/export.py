from io import BytesIO
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from .models import SimulationRow
from .timeline import format_clock

SHEET_NAME = "Simulation Data"

# same order as the simulation table on screen
EXPORT_COLUMNS = [
    "ID",
    "Customer",
    "Arrival",
    "Duration",
    "Server",
    "Start Time",
    "End Time",
    "Waiting Time",
    "Service Time",
    "Interarrival Time (seconds)",
]


def rows_to_frame(rows: Sequence[SimulationRow]) -> pd.DataFrame:
    records = [
        {
            "ID": r.id,
            "Customer": r.customer,
            "Arrival": r.arrival,
            "Duration": r.duration,
            "Server": r.server,
            "Start Time": format_clock(r.start_time),
            "End Time": format_clock(r.end_time),
            "Waiting Time": r.waiting_time,
            "Service Time": r.service_time,
            "Interarrival Time (seconds)": r.interarrival_time,
        }
        for r in rows
    ]
    return pd.DataFrame(records, columns=EXPORT_COLUMNS)


def export_csv(rows: Sequence[SimulationRow], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows_to_frame(rows).to_csv(path, index=False)
    return path


def export_csv_text(rows: Sequence[SimulationRow]) -> str:
    return rows_to_frame(rows).to_csv(index=False)


def export_xlsx(rows: Sequence[SimulationRow], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows_to_frame(rows).to_excel(path, sheet_name=SHEET_NAME, index=False, engine="openpyxl")
    return path


def export_xlsx_bytes(rows: Sequence[SimulationRow]) -> bytes:
    buf = BytesIO()
    rows_to_frame(rows).to_excel(buf, sheet_name=SHEET_NAME, index=False, engine="openpyxl")
    return buf.getvalue()
