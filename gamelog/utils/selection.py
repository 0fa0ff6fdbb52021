# gamelog/utils/selection.py

"""Index cursor for keyboard navigation through dropdown lists.

Used by the catalog search dropdown and the store suggestion dropdown.
The cursor knows nothing about the items; it tracks an index and calls
back with it when the current item is chosen.
"""

from __future__ import annotations

from typing import Callable

__all__ = ["NO_SELECTION", "SelectionCursor"]

NO_SELECTION = -1


class SelectionCursor:
    """Circular selection over ``item_count`` items.

    States are "no selection" (index -1) and "selected" (0 <= index <
    item_count). A new cursor, or one whose items were replaced, starts
    with no selection.

    Attributes:
        on_select: Called with the current index by ``select_current``.
    """

    def __init__(self, item_count: int = 0, on_select: Callable[[int], None] | None = None) -> None:
        self._item_count = max(item_count, 0)
        self._index = NO_SELECTION
        self.on_select = on_select

    @property
    def index(self) -> int:
        return self._index

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def has_selection(self) -> bool:
        return self._index != NO_SELECTION

    def reset(self, item_count: int) -> None:
        """Replaces the item list size and clears the selection."""
        self._item_count = max(item_count, 0)
        self._index = NO_SELECTION

    def move(self, direction: int) -> int:
        """Moves the selection by ``direction`` (usually +1 or -1), wrapping.

        Moving down from "no selection" lands on the first item, moving
        up lands on the last.

        Args:
            direction: Step to move.

        Returns:
            The new index (still -1 if there are no items).
        """
        if self._item_count == 0:
            return self._index

        index = self._index + direction
        if index >= self._item_count:
            index = 0
        elif index < 0:
            index = self._item_count - 1
        self._index = index
        return index

    def select_first(self) -> None:
        if self._item_count > 0:
            self._index = NO_SELECTION
            self.move(1)

    def select_current(self) -> bool:
        """Invokes ``on_select`` for the current index.

        Returns:
            False (and does nothing) when there is no selection.
        """
        if not self.has_selection:
            return False
        if self.on_select is not None:
            self.on_select(self._index)
        return True

    def clear(self) -> None:
        self._index = NO_SELECTION
