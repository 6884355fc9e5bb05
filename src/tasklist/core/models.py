"""Task record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Task:
    """A persisted task.

    Attributes:
        id: Store-assigned identity, immutable once assigned.
        title: Free text.  Emptiness is not checked at this layer.
        completed: Always ``False`` at creation; nothing in tasklist toggles it.
    """

    id: int
    title: str
    completed: bool = False

    @classmethod
    def from_row(cls, row: Any) -> Task:
        """Build from a ``sqlite3.Row``, a mapping, or an ``(id, title, completed)`` tuple."""
        if hasattr(row, "keys"):
            d = dict(row)
            return cls(id=int(d["id"]), title=d["title"], completed=bool(d["completed"]))
        return cls(id=int(row[0]), title=row[1], completed=bool(row[2]))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "completed": self.completed}
