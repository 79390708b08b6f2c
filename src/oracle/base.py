"""Oracle port consumed by the game state machine."""
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from src.game.models import QA, OracleStep


class OracleUnavailableError(Exception):
    """The Oracle could not produce a step (timeout, quota, bad reply)."""


class Oracle(Protocol):
    """Decides the next question or a final guess from the history."""

    async def next_step(self, history: Sequence["QA"], remaining: int) -> "OracleStep":
        """Return a ``Question`` or a ``Guess``.

        Args:
            history: Every answered question, in the order asked.
            remaining: Questions left in the session's budget.

        Raises:
            OracleUnavailableError: If no step could be produced.
        """
        ...
