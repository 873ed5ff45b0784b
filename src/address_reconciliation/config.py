from __future__ import annotations

import os
from dataclasses import dataclass

import dotenv

from .streets import DEFAULT_SUGGESTION_CUTOFF

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    log_level: str = "INFO"
    use_index: bool = True
    orphan_cutoff: float = DEFAULT_SUGGESTION_CUTOFF


def _float_setting(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def load_settings(load_env_file: bool = True) -> Settings:
    """Read settings from the environment, after loading a ``.env`` file if present."""
    if load_env_file:
        dotenv.load_dotenv()
    return Settings(
        log_level=os.getenv("ADDRESS_LOG_LEVEL", "INFO").upper(),
        use_index=os.getenv("ADDRESS_USE_INDEX", "true").strip().lower() in _TRUE_VALUES,
        orphan_cutoff=_float_setting("ADDRESS_ORPHAN_CUTOFF", DEFAULT_SUGGESTION_CUTOFF),
    )
