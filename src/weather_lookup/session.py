"""Incremental location search state machine.

One ``LocationSearchSession`` owns the query text, the candidates from the
latest geocoding response and the highlighted row. Every input event maps to
one transition method; the session never performs I/O itself. Candidate
requests are tagged with a monotonic generation so a response that arrives
after a newer query has been typed is discarded instead of overwriting it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from .models import Candidate, CandidateId, SelectedLocation

SearchState = Literal["idle", "searching", "listing", "selected"]
NavigateDirection = Literal["down", "up"]

NO_HIGHLIGHT = -1


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """A candidates lookup the caller should issue for ``query``."""

    generation: int
    query: str


class LocationSearchSession:
    """Explicit state machine behind the search dropdown."""

    def __init__(self, *, min_query_length: int = 2, visible_rows: int = 5) -> None:
        if min_query_length < 1:
            raise ValueError("min_query_length must be >= 1")
        if visible_rows <= 0:
            raise ValueError("visible_rows must be > 0")
        self.min_query_length = min_query_length
        self.visible_rows = visible_rows
        self.state: SearchState = "idle"
        self.query = ""
        self.candidates: tuple[Candidate, ...] = ()
        self.highlighted_index = NO_HIGHLIGHT
        self.scroll_offset = 0
        self.list_visible = False
        self.generation = 0
        self.refocus_requested = False

    # ── query / response events ───────────────────────────────────────────────

    def on_query_changed(self, text: str) -> SearchRequest | None:
        """Record new input text; return the lookup to issue, if any."""
        self.query = text
        self.refocus_requested = False
        self._replace_candidates(())
        self.list_visible = False
        if len(text) < self.min_query_length:
            self.state = "idle"
            return None
        self.generation += 1
        self.state = "searching"
        return SearchRequest(generation=self.generation, query=text)

    def on_candidates_received(
        self, generation: int, candidates: Iterable[Candidate]
    ) -> bool:
        """Apply a geocoding response. Returns False when it was stale."""
        if not self._is_current(generation):
            return False
        self._replace_candidates(tuple(candidates))
        self.state = "listing"
        self.list_visible = bool(self.candidates)
        return True

    def on_search_failed(self, generation: int) -> bool:
        """Show the same empty, hidden list an empty response would."""
        return self.on_candidates_received(generation, ())

    # ── keyboard / mouse events ───────────────────────────────────────────────

    def on_navigate(self, direction: NavigateDirection) -> bool:
        """Move the highlight one row. Returns whether it moved."""
        if self.state != "listing" or not self.candidates:
            return False
        if direction == "down":
            if self.highlighted_index >= len(self.candidates) - 1:
                return False
            self.highlighted_index += 1
        elif direction == "up":
            if self.highlighted_index <= 0:
                return False
            self.highlighted_index -= 1
        else:
            raise ValueError(f"Unknown navigation direction: {direction!r}")
        self._scroll_into_view()
        return True

    def on_confirm(self) -> SelectedLocation | None:
        highlighted = self.highlighted_candidate
        if highlighted is None:
            return None
        return self.on_select(highlighted)

    def on_click(self, candidate_id: CandidateId) -> SelectedLocation | None:
        for candidate in self.candidates:
            if candidate.id == candidate_id:
                return self.on_select(candidate)
        return None

    def on_select(self, candidate: Candidate) -> SelectedLocation:
        """Emit the chosen location and reset for the next search."""
        self.state = "selected"
        selection = SelectedLocation.from_candidate(candidate)
        self.reset()
        self.refocus_requested = True
        return selection

    def on_dismiss(self) -> None:
        """Hide the list; query and candidates are kept."""
        self.list_visible = False

    def on_reveal(self) -> bool:
        """Show a previously dismissed list again."""
        if self.state == "listing" and self.candidates:
            self.list_visible = True
        return self.list_visible

    def reset(self) -> None:
        self.state = "idle"
        self.query = ""
        self._replace_candidates(())
        self.list_visible = False

    # ── derived views ─────────────────────────────────────────────────────────

    @property
    def highlighted_candidate(self) -> Candidate | None:
        if self.highlighted_index == NO_HIGHLIGHT:
            return None
        return self.candidates[self.highlighted_index]

    @property
    def visible_candidates(self) -> tuple[Candidate, ...]:
        end = self.scroll_offset + self.visible_rows
        return self.candidates[self.scroll_offset:end]

    # ── internals ─────────────────────────────────────────────────────────────

    def _is_current(self, generation: int) -> bool:
        return self.state == "searching" and generation == self.generation

    def _replace_candidates(self, candidates: tuple[Candidate, ...]) -> None:
        self.candidates = candidates
        self.highlighted_index = NO_HIGHLIGHT
        self.scroll_offset = 0

    def _scroll_into_view(self) -> None:
        index = self.highlighted_index
        if index < self.scroll_offset:
            self.scroll_offset = index
        elif index >= self.scroll_offset + self.visible_rows:
            self.scroll_offset = index - self.visible_rows + 1
