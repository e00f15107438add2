"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.inventory import DEFAULT_REORDER_LEVEL, LOW_STOCK_THRESHOLD
from stockledger.domain.service.inventory_ledger_service import DEFAULT_MAX_ATTEMPTS

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    default_reorder_level: int = DEFAULT_REORDER_LEVEL


def _int_setting(env: dict[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValidationError(f"{name} must be at least {minimum}, got {value}")
    return value


def load_settings(env: dict[str, str] | None = None) -> Settings:
    env = dict(os.environ) if env is None else env
    data_dir = env.get("STOCKLEDGER_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        max_attempts=_int_setting(env, "STOCKLEDGER_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS, 1),
        low_stock_threshold=_int_setting(
            env, "STOCKLEDGER_LOW_STOCK_THRESHOLD", LOW_STOCK_THRESHOLD, 0
        ),
        default_reorder_level=_int_setting(
            env, "STOCKLEDGER_DEFAULT_REORDER_LEVEL", DEFAULT_REORDER_LEVEL, 0
        ),
    )
