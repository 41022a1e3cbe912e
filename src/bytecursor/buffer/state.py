"""Region and cursor bookkeeping for cursor buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class RegionState:
    """Owned byte region plus the write/read cursor.

    ``0 <= cursor <= length`` holds after every assignment: both
    ``replace_region`` and ``set_cursor`` clamp in the same step. A state with
    no region reports length 0 and keeps the cursor at 0.
    """

    data: Optional[bytearray] = None
    cursor: int = 0

    @property
    def length(self) -> int:
        return 0 if self.data is None else len(self.data)

    @property
    def available(self) -> int:
        return self.length - self.cursor

    @property
    def is_set(self) -> bool:
        return self.data is not None

    def set_cursor(self, position: int) -> int:
        self.cursor = min(max(int(position), 0), self.length)
        return self.cursor

    def replace_region(
        self, data: Optional[bytearray], *, cursor: Optional[int] = None
    ) -> None:
        """Swap the region; keep the old cursor unless ``cursor`` is given."""

        self.data = data
        self.set_cursor(self.cursor if cursor is None else cursor)

    def view(self) -> bytes:
        return b"" if self.data is None else bytes(self.data)
