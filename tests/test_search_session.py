"""Tests for the location search state machine."""

from __future__ import annotations

from typing import Any

import pytest

from weather_lookup.models import Candidate, CandidateId
from weather_lookup.session import NO_HIGHLIGHT, LocationSearchSession


def _make_candidate(index: int, **overrides: Any) -> Candidate:
    fields: dict[str, Any] = {
        "id": CandidateId(str(index)),
        "city_name": f"City {index}",
        "region": f"Region {index}",
        "latitude": 10.0 + index,
        "longitude": 20.0 + index,
    }
    fields.update(overrides)
    return Candidate(**fields)


def _listing_session(count: int, **kwargs: Any) -> LocationSearchSession:
    session = LocationSearchSession(**kwargs)
    request = session.on_query_changed("Par")
    assert request is not None
    session.on_candidates_received(
        request.generation, [_make_candidate(i) for i in range(1, count + 1)]
    )
    return session


def test_single_character_query_stays_idle_without_request() -> None:
    session = LocationSearchSession()
    assert session.on_query_changed("a") is None
    assert session.state == "idle"
    assert session.candidates == ()
    assert session.generation == 0


def test_two_character_query_issues_request() -> None:
    session = LocationSearchSession()
    request = session.on_query_changed("ab")
    assert request is not None
    assert request.query == "ab"
    assert request.generation == 1
    assert session.state == "searching"


def test_shrinking_query_below_threshold_clears_candidates() -> None:
    session = _listing_session(3)
    assert session.on_query_changed("P") is None
    assert session.state == "idle"
    assert session.candidates == ()
    assert session.highlighted_index == NO_HIGHLIGHT
    assert session.list_visible is False


def test_candidates_received_enter_listing_without_highlight() -> None:
    session = _listing_session(3)
    assert session.state == "listing"
    assert len(session.candidates) == 3
    assert session.highlighted_index == NO_HIGHLIGHT
    assert session.list_visible is True


def test_empty_response_hides_list() -> None:
    session = _listing_session(0)
    assert session.state == "listing"
    assert session.candidates == ()
    assert session.list_visible is False


def test_stale_generation_is_discarded() -> None:
    session = LocationSearchSession()
    first = session.on_query_changed("Pa")
    second = session.on_query_changed("Par")
    assert first is not None and second is not None

    assert session.on_candidates_received(second.generation, [_make_candidate(1)]) is True
    assert session.on_candidates_received(first.generation, [_make_candidate(9)]) is False
    assert [c.city_name for c in session.candidates] == ["City 1"]


def test_late_response_after_reset_is_discarded() -> None:
    session = LocationSearchSession()
    request = session.on_query_changed("Par")
    assert request is not None
    session.on_query_changed("")
    assert session.on_candidates_received(request.generation, [_make_candidate(1)]) is False
    assert session.state == "idle"
    assert session.candidates == ()


def test_new_response_replaces_rather_than_merges() -> None:
    session = _listing_session(3)
    session.on_navigate("down")
    request = session.on_query_changed("Pari")
    assert request is not None
    session.on_candidates_received(request.generation, [_make_candidate(7)])
    assert [c.city_name for c in session.candidates] == ["City 7"]
    assert session.highlighted_index == NO_HIGHLIGHT


def test_navigate_down_stops_at_last_row() -> None:
    session = _listing_session(5)
    for _ in range(5):
        session.on_navigate("down")
    assert session.highlighted_index == 4
    assert session.on_navigate("down") is False
    assert session.highlighted_index == 4


def test_navigate_up_stops_at_first_row() -> None:
    session = _listing_session(5)
    session.on_navigate("down")
    assert session.highlighted_index == 0
    assert session.on_navigate("up") is False
    assert session.highlighted_index == 0


def test_navigate_up_without_highlight_is_noop() -> None:
    session = _listing_session(5)
    assert session.on_navigate("up") is False
    assert session.highlighted_index == NO_HIGHLIGHT


def test_navigate_outside_listing_is_noop() -> None:
    session = LocationSearchSession()
    session.on_query_changed("Par")
    assert session.on_navigate("down") is False
    assert session.highlighted_index == NO_HIGHLIGHT


def test_navigate_rejects_unknown_direction() -> None:
    session = _listing_session(2)
    with pytest.raises(ValueError, match="Unknown navigation direction"):
        session.on_navigate("left")  # type: ignore[arg-type]


def test_scroll_follows_highlight_nearest() -> None:
    session = _listing_session(10, visible_rows=3)
    for _ in range(4):
        session.on_navigate("down")
    assert session.highlighted_index == 3
    assert session.scroll_offset == 1
    assert [c.city_name for c in session.visible_candidates] == ["City 2", "City 3", "City 4"]

    for _ in range(3):
        session.on_navigate("up")
    assert session.highlighted_index == 0
    assert session.scroll_offset == 0


def test_confirm_without_highlight_returns_none() -> None:
    session = _listing_session(3)
    assert session.on_confirm() is None
    assert session.state == "listing"
    assert len(session.candidates) == 3


def test_confirm_selects_highlighted_and_resets() -> None:
    session = _listing_session(3)
    session.on_navigate("down")
    session.on_navigate("down")
    selection = session.on_confirm()
    assert selection is not None
    assert selection.city_name == "City 2"
    assert (selection.latitude, selection.longitude) == (12.0, 22.0)
    assert session.state == "idle"
    assert session.query == ""
    assert session.candidates == ()
    assert session.highlighted_index == NO_HIGHLIGHT
    assert session.refocus_requested is True


@pytest.mark.parametrize("moves", [0, 1, 3])
def test_select_always_resets_to_idle(moves: int) -> None:
    session = _listing_session(4)
    for _ in range(moves):
        session.on_navigate("down")
    session.on_select(session.candidates[2])
    assert session.state == "idle"
    assert session.query == ""
    assert session.candidates == ()


def test_click_uses_candidate_id_value_equality() -> None:
    session = _listing_session(3)
    selection = session.on_click(CandidateId("3"))
    assert selection is not None
    assert selection.city_name == "City 3"


def test_click_unknown_id_is_noop() -> None:
    session = _listing_session(3)
    assert session.on_click(CandidateId("99")) is None
    assert session.state == "listing"
    assert len(session.candidates) == 3


def test_dismiss_hides_but_preserves_state() -> None:
    session = _listing_session(3)
    session.on_navigate("down")
    session.on_dismiss()
    assert session.list_visible is False
    assert session.query == "Par"
    assert len(session.candidates) == 3
    assert session.highlighted_index == 0

    assert session.on_reveal() is True
    assert session.list_visible is True


def test_reveal_with_no_candidates_stays_hidden() -> None:
    session = _listing_session(0)
    assert session.on_reveal() is False


def test_search_failure_presents_empty_list() -> None:
    session = LocationSearchSession()
    request = session.on_query_changed("Par")
    assert request is not None
    assert session.on_search_failed(request.generation) is True
    assert session.state == "listing"
    assert session.candidates == ()
    assert session.list_visible is False


def test_custom_min_query_length() -> None:
    session = LocationSearchSession(min_query_length=3)
    assert session.on_query_changed("ab") is None
    assert session.on_query_changed("abc") is not None


@pytest.mark.parametrize(
    "kwargs",
    [{"min_query_length": 0}, {"visible_rows": 0}],
)
def test_invalid_session_parameters_raise(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        LocationSearchSession(**kwargs)
