"""Filterable, navigable selection state for the node picker.

``NodeSelection`` owns the full record list, the filter text, the indices
of the records that pass the filter and the selected position within those
indices.  All operations are synchronous in-place transitions.

Index space is storage order: ``move_up`` increases ``selection`` and
``move_down`` decreases it.  Mapping that onto screen rows (the list is
drawn bottom-up) is the renderer's job.
"""

from __future__ import annotations

from typing import Sequence

from tssh.nodes.types import NodeRecord

PAGE_SIZE = 10


class NodeSelection:
    """Selection state over an immutable list of nodes.

    Invariants, after every operation:

    * ``filtered_indices`` holds the indices ``i`` whose
      ``records[i].name`` contains ``filter_text`` case-insensitively, in
      record order (all indices when the filter is empty).
    * ``0 <= selection < len(filtered_indices)`` when there are matches,
      and ``selection == 0`` when there are none.
    """

    def __init__(self, records: Sequence[NodeRecord]) -> None:
        self._records: tuple[NodeRecord, ...] = tuple(records)
        self._filter_text = ""
        self._filtered_indices: list[int] = list(range(len(self._records)))
        self._selection = 0

    # -- read-only views ----------------------------------------------------

    @property
    def records(self) -> tuple[NodeRecord, ...]:
        return self._records

    @property
    def filter_text(self) -> str:
        return self._filter_text

    @property
    def filtered_indices(self) -> tuple[int, ...]:
        return tuple(self._filtered_indices)

    @property
    def selection(self) -> int:
        return self._selection

    @property
    def filtered_count(self) -> int:
        return len(self._filtered_indices)

    def filtered_records(self) -> list[NodeRecord]:
        return [self._records[i] for i in self._filtered_indices]

    # -- filter -------------------------------------------------------------

    def push_char(self, ch: str) -> None:
        self._set_filter_text(self._filter_text + ch)

    def pop_char(self) -> None:
        self._set_filter_text(self._filter_text[:-1])

    def clear_filter(self) -> None:
        self._set_filter_text("")

    def set_filter(self, text: str) -> None:
        self._set_filter_text(text)

    def _set_filter_text(self, text: str) -> None:
        self._filter_text = text
        self._apply_filter()

    def _apply_filter(self) -> None:
        if not self._filter_text:
            self._filtered_indices = list(range(len(self._records)))
        else:
            needle = self._filter_text.lower()
            self._filtered_indices = [
                i
                for i, record in enumerate(self._records)
                if needle in record.name.lower()
            ]

        # Clamp downward only
        if not self._filtered_indices:
            self._selection = 0
        elif self._selection >= len(self._filtered_indices):
            self._selection = len(self._filtered_indices) - 1

    # -- navigation ---------------------------------------------------------

    def move_up(self) -> None:
        if not self._filtered_indices:
            return
        if self._selection + 1 < len(self._filtered_indices):
            self._selection += 1

    def move_down(self) -> None:
        if not self._filtered_indices:
            return
        if self._selection > 0:
            self._selection -= 1

    def page_up(self, page_size: int = PAGE_SIZE) -> None:
        if not self._filtered_indices:
            return
        self._selection = min(self._selection + page_size, len(self._filtered_indices) - 1)

    def page_down(self, page_size: int = PAGE_SIZE) -> None:
        if not self._filtered_indices:
            return
        self._selection = max(self._selection - page_size, 0)

    def move_to_start(self) -> None:
        if self._filtered_indices:
            self._selection = 0

    def move_to_end(self) -> None:
        if self._filtered_indices:
            self._selection = len(self._filtered_indices) - 1

    # -- selection ----------------------------------------------------------

    def current(self) -> NodeRecord | None:
        """Return the selected record, or ``None`` when nothing matches."""
        if not self._filtered_indices:
            return None
        return self._records[self._filtered_indices[self._selection]]

    def select_name(self, name: str) -> bool:
        """Select the record whose name equals *name* exactly.

        Only meaningful before the first filter keystroke: the position is
        looked up in the unfiltered list.  Returns ``False`` (and leaves the
        selection alone) when no record has that name or a filter is active.
        """
        if self._filter_text:
            return False
        for index, record in enumerate(self._records):
            if record.name == name:
                self._selection = index
                return True
        return False
