# src/vector_kit/config.py

import os
from dataclasses import dataclass
from typing import Any, Literal, cast

Backend = Literal["memory", "sqlite"]

ENV_PREFIX = "VECTOR_KIT_"


@dataclass(frozen=True)
class VectorKitConfig:
    """Configuration for the store and the HTTP service.

    Immutable. Use `from_env` to fill unset fields from VECTOR_KIT_* variables.
    """

    backend: Backend = "sqlite"
    db_path: str = "VectorDB.db"  # ignored by the memory backend
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        *,
        backend: Backend | None = None,
        db_path: str | None = None,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> "VectorKitConfig":
        """Build a config where explicit arguments win over the environment,
        and the environment wins over the defaults."""
        defaults = cls()
        resolved_backend = _get_param_value(backend, "BACKEND", defaults.backend)
        if resolved_backend not in ("memory", "sqlite"):
            raise ValueError(f"Unknown persistence backend: {resolved_backend}")
        return cls(
            backend=cast(Backend, resolved_backend),
            db_path=_get_param_value(db_path, "DB_PATH", defaults.db_path),
            host=_get_param_value(host, "HOST", defaults.host),
            port=int(_get_param_value(port, "PORT", defaults.port)),
            log_level=_get_param_value(log_level, "LOG_LEVEL", defaults.log_level).upper(),
        )


def _get_param_value(passed_value: Any, name: str, default: Any) -> Any:
    if passed_value is not None:
        return passed_value
    env_value = os.environ.get(ENV_PREFIX + name)
    if env_value is not None:
        return env_value
    return default
