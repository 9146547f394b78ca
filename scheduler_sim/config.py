"""
Runtime configuration for the command line front end.

Values come from environment variables prefixed with ``SCHEDULER_SIM_``
(e.g. ``SCHEDULER_SIM_DEFAULT_QUANTUM=4``) or a ``.env`` file, falling back
to the defaults below. The scheduling functions never read these; the CLI
passes them in as arguments.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from .metrics import STARVATION_FACTOR


class Settings(BaseSettings):
    # ── Scheduling ──────────────────────────────────────────────
    DEFAULT_QUANTUM: int = Field(default=2, gt=0)  # round robin, when -q is omitted
    STARVATION_FACTOR: float = Field(default=STARVATION_FACTOR, gt=0)

    # ── Logging ─────────────────────────────────────────────────
    LOG_LEVEL: str = "WARNING"

    model_config = {"env_prefix": "SCHEDULER_SIM_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
