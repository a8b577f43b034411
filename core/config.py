from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional


CSV_SUFFIX = ".csv"
LABEL_KEY = "name"
CHART_COLORS = [
    "hsl(243, 75%, 59%)",
    "hsl(173, 80%, 40%)",
    "hsl(38, 92%, 50%)",
    "hsl(280, 65%, 60%)",
    "hsl(0, 84%, 60%)",
]

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    strict_selection: bool = True
    strict_projection: bool = True
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    log_level = (env.get("DATA_PAGE_LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = "INFO"

    raw_origins = env.get("DATA_PAGE_CORS_ORIGINS") or ""
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return Settings(
        strict_selection=_as_bool(env.get("DATA_PAGE_STRICT_SELECTION"), True),
        strict_projection=_as_bool(env.get("DATA_PAGE_STRICT_PROJECTION"), True),
        log_level=log_level,
        cors_origins=origins or list(DEFAULT_CORS_ORIGINS),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
