"""Configuration management for the toolkit runtime."""
from __future__ import annotations

import os
from dataclasses import dataclass

from syzygy.state.manager import DEFAULT_PREFIX


@dataclass(frozen=True)
class StateConfig:
    """Which state backend the runtime wires into example agents."""

    backend: str = "memory"
    path: str = "syzygy_state.db"
    prefix: str = DEFAULT_PREFIX


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    state: StateConfig = StateConfig()
    log_level: str = "INFO"
    log_format: str = "console"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        backend = os.getenv("SYZYGY_STATE_BACKEND", "memory").lower()
        if backend not in {"memory", "sqlite"}:
            raise ValueError(f"Unsupported state backend: {backend}")

        return cls(
            state=StateConfig(
                backend=backend,
                path=os.getenv("SYZYGY_STATE_PATH", "syzygy_state.db"),
                prefix=os.getenv("SYZYGY_STATE_PREFIX", DEFAULT_PREFIX),
            ),
            log_level=os.getenv("SYZYGY_LOG_LEVEL", "INFO"),
            log_format=os.getenv("SYZYGY_LOG_FORMAT", "console"),
            environment=os.getenv("ENVIRONMENT", "development"),
        )


# Global config instance
config = Config.from_env()
