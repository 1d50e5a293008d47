"""
Settings for the queue simulator, read from environment variables.

A .env file at the project root is loaded first; variables already present in
the environment win.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

ENV_FILE = Path(__file__).parent.parent / ".env"

DEFAULT_SERVERS = "sr01:Server 01,sr02:Server 02"


@dataclass
class Settings:
    servers: Dict[str, str] = field(default_factory=lambda: parse_servers(DEFAULT_SERVERS))
    per_server_timelines: bool = False
    export_name: str = "SimulationData"      # extension follows the format
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 8000


def load_env(env_file: Path = ENV_FILE) -> bool:
    if not env_file.exists():
        return False
    return load_dotenv(env_file, override=False)


def parse_servers(raw: str) -> Dict[str, str]:
    # "sr01:Server 01,sr02" -> {"sr01": "Server 01", "sr02": "sr02"}
    servers: Dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        key, _, label = item.partition(":")
        servers[key.strip()] = label.strip() or key.strip()
    if not servers:
        raise ValueError("at least one server must be configured")
    return servers


def _flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings(environ: Optional[Dict[str, str]] = None) -> Settings:
    if environ is None:
        load_env()
        environ = dict(os.environ)

    return Settings(
        servers=parse_servers(environ.get("QUEUE_SIM_SERVERS", DEFAULT_SERVERS)),
        per_server_timelines=_flag(environ.get("QUEUE_SIM_PER_SERVER_TIMELINES", "false")),
        export_name=environ.get("QUEUE_SIM_EXPORT_NAME", "SimulationData"),
        allowed_origins=[o.strip() for o in environ.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()],
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        port=int(environ.get("API_PORT", "8000")),
    )
