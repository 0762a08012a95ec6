"""
Best-effort deletion of staged uploads.

Cleanup runs as its own task under a fixed timeout and is shielded from
the caller: if the import is cancelled while a delete is in flight the
delete still finishes (or times out) on its own. Failures are logged and
never raised, since the error that triggered cleanup is the one that
matters to the caller.
"""

import asyncio
import logging
from typing import Iterable, List, Set

from mdimport.environments.base import ObjectStore


logger = logging.getLogger("mdimport.images.cleanup")

# Strong references to in-flight cleanup tasks until they finish
_background_cleanups: Set["asyncio.Task[None]"] = set()


async def _delete_all(store: ObjectStore, object_ids: List[str], timeout: float) -> None:
    async def _run() -> None:
        for object_id in object_ids:
            try:
                await store.delete(object_id)
                logger.debug(f"Deleted staged object: {object_id}")
            except Exception as e:
                logger.warning(
                    f"Failed to delete staged object {object_id}: {e}",
                    extra={"object_id": object_id},
                )

    try:
        await asyncio.wait_for(_run(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(
            f"Cleanup of {len(object_ids)} staged object(s) timed out after {timeout}s",
            extra={"object_ids": object_ids},
        )


async def cleanup_objects_best_effort(
    store: ObjectStore,
    object_ids: Iterable[str],
    timeout: float,
) -> None:
    """
    Delete every object in object_ids within one shared timeout budget.

    Blank IDs are ignored. Cancelling the awaiting coroutine does not
    cancel the deletes; CancelledError is still re-raised to the caller.
    """
    ids = [object_id for object_id in object_ids if object_id and object_id.strip()]
    if not ids:
        return

    task = asyncio.ensure_future(_delete_all(store, ids, timeout))
    _background_cleanups.add(task)
    task.add_done_callback(_background_cleanups.discard)

    await asyncio.shield(task)


async def delete_object_best_effort(store: ObjectStore, object_id: str, timeout: float) -> None:
    """Compensating delete for a single upload."""
    await cleanup_objects_best_effort(store, [object_id], timeout)
