"""Single-use undo actions attached to toasts"""

import logging
import uuid
from typing import Awaitable, Callable

from ..core.errors import UndoExpired
from ..models.toast import Toast

logger = logging.getLogger(__name__)

UndoAction = Callable[[], Awaitable[Toast]]


class UndoRegistry:
    """Holds pending undo actions by id.

    Running an undo issues a new mutation; it is not a local rollback. An id
    is consumed once its action succeeds, and the toast produced by an undo
    carries no action of its own.
    """

    def __init__(self, max_pending: int = 500):
        self.max_pending = max_pending
        self._actions: dict[str, UndoAction] = {}

    def register(self, action: UndoAction) -> str:
        if len(self._actions) >= self.max_pending:
            # dicts keep insertion order; drop the oldest
            oldest = next(iter(self._actions))
            del self._actions[oldest]
        undo_id = uuid.uuid4().hex
        self._actions[undo_id] = action
        return undo_id

    async def run(self, undo_id: str) -> Toast:
        action = self._actions.pop(undo_id, None)
        if action is None:
            raise UndoExpired(f"Undo {undo_id} is no longer available")
        logger.info(f"Running undo {undo_id}")
        try:
            return await action()
        except Exception:
            # Failed undo can be retried
            self._actions[undo_id] = action
            raise

    def __contains__(self, undo_id: str) -> bool:
        return undo_id in self._actions

    def __len__(self) -> int:
        return len(self._actions)
