"""UUID utility functions for taskdesk.

Provides UUID generation, short UUID display, and prefix resolution.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskdesk.models import Task


def generate_uuid() -> str:
    """Generate a new UUID4 as string.

    Returns:
        UUID string (e.g., "123e4567-e89b-42d3-a456-426614174000")
    """
    return str(uuid.uuid4())


def shorten_uuid(uuid_str: str, length: int = 8) -> str:
    """Get shortened version of UUID.

    Args:
        uuid_str: Full UUID string
        length: Number of characters to return (default 8)

    Returns:
        First N characters of UUID
    """
    return uuid_str[:length]


def match_prefix(tasks: Sequence[Task], prefix: str) -> list[int]:
    """Find the positions of all tasks whose ID starts with ``prefix``.

    The match is a plain, case-sensitive prefix comparison. Positions are
    returned in collection order, so the first entry is the task an
    ambiguous prefix resolves to.

    Args:
        tasks: Task collection in storage order
        prefix: ID prefix supplied by the caller

    Returns:
        Indexes into ``tasks`` of every matching task
    """
    return [index for index, task in enumerate(tasks) if task.id.startswith(prefix)]
