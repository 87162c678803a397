"""Runtime settings read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_DAYS = 365 * 200
DEFAULT_MAX_SNAPSHOTS = 20


@dataclass(frozen=True)
class Settings:
    secret_key: str = "dev-secret-key"
    # Iteration cap for the CLI and web app; the engine itself is uncapped.
    max_days: int = DEFAULT_MAX_DAYS
    max_snapshots: int = DEFAULT_MAX_SNAPSHOTS
    log_level: str = "WARNING"
    currency: str = "USD"


def _int_from_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        secret_key=env.get("FLASK_SECRET_KEY", "dev-secret-key"),
        max_days=_int_from_env(env, "LOAN_PAYOFF_MAX_DAYS", DEFAULT_MAX_DAYS),
        max_snapshots=_int_from_env(env, "LOAN_PAYOFF_MAX_SNAPSHOTS", DEFAULT_MAX_SNAPSHOTS),
        log_level=env.get("LOAN_PAYOFF_LOG_LEVEL", "WARNING").upper(),
        currency=env.get("LOAN_PAYOFF_CURRENCY", "USD").upper(),
    )


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
