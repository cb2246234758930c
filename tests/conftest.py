"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import patch

import pytest

from taskdesk.models import Task
from taskdesk.models.storage_strategy import StorageStrategyContext, create_storage_strategy
from taskdesk.services.task_service import TaskService

_STORAGE_ENV_VARS = ("TASKDESK_STORAGE_TYPE", "STORAGE_TYPE", "TASKDESK_DATA_DIR", "DATA_DIR")


# ---------------------------------------------------------------------------
# Process-wide isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_app_dirs(tmp_path, monkeypatch):
    """Point platform dirs at *tmp_path* and reset cached singletons.

    Config, data and log files land in tmp_path only, storage environment
    variables are cleared, and the lru_caches around the config service and
    storage context are emptied before and after each test.
    """
    import taskdesk.utils.logger as logger_mod
    from taskdesk.services.config_service import get_config_service
    from taskdesk.services.storage_router import get_storage_context

    for var in _STORAGE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    logger_mod._logger = None
    get_config_service.cache_clear()
    get_storage_context.cache_clear()

    with (
        patch("taskdesk.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")),
        patch(
            "taskdesk.services.config_service.user_config_dir",
            return_value=str(tmp_path / "config"),
        ),
        patch(
            "taskdesk.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ),
    ):
        yield tmp_path

    if get_storage_context.cache_info().currsize:
        get_storage_context().close()
    get_storage_context.cache_clear()
    get_config_service.cache_clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Storage and service fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(params=["file", "database"])
def storage(request, tmp_path):
    """StorageStrategyContext for each backend, rooted in tmp_path."""
    context = StorageStrategyContext(
        create_storage_strategy(request.param, tmp_path / "store")
    )
    yield context
    context.close()


@pytest.fixture()
def service(storage):
    """TaskService over each backend."""
    return TaskService(storage)


@pytest.fixture()
def make_task():
    """Factory building Task objects with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Task:
        counter["n"] += 1
        data = {
            "id": f"{counter['n']:08d}-0000-4000-8000-000000000000",
            "title": f"Task {counter['n']}",
            "created_at": datetime(2025, 1, 1, 12, 0, tzinfo=UTC),
        }
        data.update(overrides)
        return Task(**data)

    return _make
