from pathlib import Path
from unittest.mock import patch

import pytest

from vector_kit.config import VectorKitConfig
from vector_kit.vectorstores import InMemoryBackend, SQLiteBackend, create_backend


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BACKEND", "DB_PATH", "HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(f"VECTOR_KIT_{name}", raising=False)

    config = VectorKitConfig.from_env()

    assert config == VectorKitConfig()
    assert config.backend == "sqlite"
    assert config.db_path == "VectorDB.db"


def test_environment_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VECTOR_KIT_BACKEND", "memory")
    monkeypatch.setenv("VECTOR_KIT_PORT", "9001")
    monkeypatch.setenv("VECTOR_KIT_LOG_LEVEL", "debug")

    config = VectorKitConfig.from_env()

    assert config.backend == "memory"
    assert config.port == 9001
    assert config.log_level == "DEBUG"


def test_explicit_values_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VECTOR_KIT_DB_PATH", "/tmp/from-env.db")
    config = VectorKitConfig.from_env(db_path="explicit.db")
    assert config.db_path == "explicit.db"


def test_unknown_backend_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VECTOR_KIT_BACKEND", "redis")
    with pytest.raises(ValueError, match="Unknown persistence backend"):
        VectorKitConfig.from_env()


def test_config_is_immutable() -> None:
    config = VectorKitConfig()
    with pytest.raises(AttributeError):
        config.port = 1  # type: ignore[misc]


def test_create_backend_memory() -> None:
    assert isinstance(create_backend(VectorKitConfig(backend="memory")), InMemoryBackend)


def test_create_backend_sqlite(tmp_path: Path) -> None:
    backend = create_backend(
        VectorKitConfig(backend="sqlite", db_path=str(tmp_path / "v.db"))
    )
    assert isinstance(backend, SQLiteBackend)
    backend.close()


def test_create_backend_unknown() -> None:
    config = VectorKitConfig(backend="redis")  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="Unknown persistence backend: redis"):
        create_backend(config)


def test_main_runs_uvicorn_with_config(monkeypatch: pytest.MonkeyPatch) -> None:
    from vector_kit import __main__ as entrypoint

    monkeypatch.setenv("VECTOR_KIT_BACKEND", "memory")
    monkeypatch.setenv("VECTOR_KIT_PORT", "8123")
    monkeypatch.delenv("VECTOR_KIT_HOST", raising=False)

    with patch.object(entrypoint.uvicorn, "run") as run:
        entrypoint.main()

    run.assert_called_once()
    assert run.call_args.kwargs["port"] == 8123
    assert run.call_args.kwargs["host"] == "127.0.0.1"
