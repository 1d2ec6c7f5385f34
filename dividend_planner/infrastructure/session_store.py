"""
In-memory session draft store.

One slot per client session holding the in-progress goal and asset rows.
Every change replaces the whole SessionDraft value.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable, Optional

from dividend_planner.domain.models import AssetEntry, DraftRowNotFoundError, SessionDraft


EDITABLE_FIELDS = ("identifier", "payout_per_unit", "price_per_unit")


class SessionDraftStore:
    def __init__(self):
        self._drafts: Dict[str, SessionDraft] = {}
        self._last_row_id: Dict[str, int] = {}

    def get(self, session_id: str) -> SessionDraft:
        return self._drafts.get(session_id, SessionDraft())

    def set_goal(self, session_id: str, goal: str) -> SessionDraft:
        draft = replace(self.get(session_id), goal=goal or "")
        return self._put(session_id, draft)

    def add_row(self, session_id: str) -> AssetEntry:
        """Append an empty row with a fresh id."""
        row = AssetEntry(row_id=self._next_row_id(session_id))
        draft = self.get(session_id)
        self._put(session_id, replace(draft, rows=draft.rows + (row,)))
        return row

    def update_row(self, session_id: str, row_id: int, /, **fields) -> AssetEntry:
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")

        draft = self.get(session_id)
        index = self._index_of(draft, row_id)
        updated = replace(draft.rows[index], **fields)
        rows = draft.rows[:index] + (updated,) + draft.rows[index + 1:]
        self._put(session_id, replace(draft, rows=rows))
        return updated

    def apply_price(self, session_id: str, row_id: int, price: Decimal) -> Optional[AssetEntry]:
        """
        Overwrite only the price of a row.

        Returns None when the row was removed while the lookup was in flight.
        """
        try:
            return self.update_row(session_id, row_id, price_per_unit=str(price))
        except DraftRowNotFoundError:
            return None

    def remove_row(self, session_id: str, row_id: int) -> SessionDraft:
        draft = self.get(session_id)
        index = self._index_of(draft, row_id)
        rows = draft.rows[:index] + draft.rows[index + 1:]
        if not rows:
            # Last row gone: prune the whole slot
            self.clear(session_id)
            return SessionDraft()
        return self._put(session_id, replace(draft, rows=rows))

    def replace(self, session_id: str, goal: str, rows: Iterable[AssetEntry]) -> SessionDraft:
        """Replace the draft wholesale, assigning fresh row ids."""
        numbered = tuple(
            replace(row, row_id=self._next_row_id(session_id)) for row in rows
        )
        return self._put(session_id, SessionDraft(goal=goal or "", rows=numbered))

    def clear(self, session_id: str) -> None:
        self._drafts.pop(session_id, None)
        self._last_row_id.pop(session_id, None)

    def _put(self, session_id: str, draft: SessionDraft) -> SessionDraft:
        if draft.is_empty:
            self.clear(session_id)
        else:
            self._drafts[session_id] = draft
        return draft

    def _next_row_id(self, session_id: str) -> int:
        next_id = self._last_row_id.get(session_id, 0) + 1
        self._last_row_id[session_id] = next_id
        return next_id

    @staticmethod
    def _index_of(draft: SessionDraft, row_id: int) -> int:
        for index, row in enumerate(draft.rows):
            if row.row_id == row_id:
                return index
        raise DraftRowNotFoundError(row_id)
