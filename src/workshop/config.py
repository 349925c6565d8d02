import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    # Input limits enforced by the reader
    max_tiers: int
    max_capacity: int
    log_level: str
    # Observability
    obs_metrics_enabled: bool
    traces_dir: str


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in {"0", "false", "no"}


def get_settings() -> Settings:
    load_dotenv()
    max_tiers = _env_int("WORKSHOP_MAX_TIERS", 64)
    max_capacity = _env_int("WORKSHOP_MAX_CAPACITY", 1023)
    if max_tiers < 0 or max_capacity < 1:
        raise RuntimeError("WORKSHOP_MAX_TIERS must be >= 0 and WORKSHOP_MAX_CAPACITY >= 1.")

    log_level = (os.getenv("WORKSHOP_LOG_LEVEL", "WARNING") or "WARNING").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "WARNING"

    # Determine project root (two levels up from this file: src/workshop/)
    project_root = Path(__file__).resolve().parents[2]
    traces_dir = os.getenv("TRACES_DIR", str(project_root / "traces"))
    obs_metrics_enabled = _env_flag("OBS_METRICS_ENABLED", "false")

    return Settings(
        max_tiers=max_tiers,
        max_capacity=max_capacity,
        log_level=log_level,
        obs_metrics_enabled=obs_metrics_enabled,
        traces_dir=traces_dir,
    )
