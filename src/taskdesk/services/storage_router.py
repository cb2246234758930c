"""Storage backend selection.

get_storage_context() reads the storage settings once per process and builds
the matching StorageStrategyContext.

Usage Pattern:
    from taskdesk.services.storage_router import get_storage_context

    storage = get_storage_context()
    collection = await storage.load_tasks()
"""

from __future__ import annotations

from functools import lru_cache

from taskdesk.models.storage_strategy import (
    StorageStrategyContext,
    create_storage_strategy,
)
from taskdesk.services.config_service import get_config_service
from taskdesk.utils.logger import get_logger


@lru_cache(maxsize=1)
def get_storage_context() -> StorageStrategyContext:
    """Get a cached StorageStrategyContext using ConfigService.

    Returns:
        StorageStrategyContext for the configured backend
    """
    config_svc = get_config_service()
    settings = config_svc.storage_settings()
    data_dir = config_svc.resolve_data_dir()

    strategy = create_storage_strategy(settings.type, data_dir)
    get_logger("storage").info(
        "Using %s storage at %s (configured type: %r)",
        strategy.storage_type,
        strategy.location,
        settings.type,
    )
    return StorageStrategyContext(strategy)
