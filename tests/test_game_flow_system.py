import pytest

from slotbingo.components.column import Column
from slotbingo.components.game_state import GamePhase
from slotbingo.components.notification import NotificationKind
from slotbingo.components.rules import BingoRules
from slotbingo.components.selection_mode import ManualSelectionMode
from slotbingo.components.slot_result import Symbol
from slotbingo.errors import InvariantViolation
from slotbingo.events.bus import (
    EVENT_BLACKOUT,
    EVENT_GAME_OVER,
    EVENT_GAME_PHASE_CHANGED,
    EVENT_LINES_COMPLETED,
    EVENT_NOTIFICATION,
    EVENT_SELECTION_RESOLVED,
    EVENT_SPIN_STARTED,
    EventBus,
)
from slotbingo.outcomes import Rejected, RejectionReason
from tests.helpers import MISS, make_card, make_engine

ALL_CELLS = [(r, c) for r in range(5) for c in range(5)]
ROW0 = [(0, c) for c in range(5)]


def test_completing_row_zero_scores_line_and_matches():
    engine = make_engine([[3, 22, 38, 55, 70]])
    outcome = engine.request_spin()

    assert outcome.ok
    state = outcome.state
    assert state.completed_lines == 1
    assert state.winning_cells == frozenset(ROW0)
    assert state.matches == 5
    assert state.score == 1000 + 500
    assert state.spins == 1
    assert state.phase is GamePhase.IDLE
    kinds = [event.kind for event in outcome.events]
    assert kinds.count(NotificationKind.MATCH) == 5
    assert kinds[-1] is NotificationKind.LINES_COMPLETED


def test_spin_counter_increments_on_a_miss():
    engine = make_engine()
    outcome = engine.request_spin()
    assert outcome.state.spins == 1
    assert outcome.state.score == 0
    assert outcome.state.spins_remaining == 11
    assert [result.value for result in outcome.results] == list(MISS)


def test_twelfth_spin_ends_the_game_and_thirteenth_is_rejected():
    bus = EventBus()
    over = []
    bus.subscribe(EVENT_GAME_OVER, lambda sender, **payload: over.append(payload))
    engine = make_engine(event_bus=bus)

    for _ in range(11):
        assert engine.request_spin().state.phase is GamePhase.IDLE
    last = engine.request_spin()
    assert last.state.phase is GamePhase.GAME_OVER
    assert last.state.spins == 12
    assert last.events[-1].kind is NotificationKind.GAME_OVER
    assert len(over) == 1

    before = engine.get_state()
    rejected = engine.request_spin()
    assert rejected == Rejected(RejectionReason.NO_SPINS_REMAINING)
    assert rejected.message == "no spins remaining"
    assert engine.get_state() == before
    assert engine.game_flow_system.generator.calls == 12


def test_max_spins_comes_from_rules():
    engine = make_engine(rules=BingoRules(max_spins=3))
    for _ in range(3):
        engine.request_spin()
    assert engine.get_state().phase is GamePhase.GAME_OVER
    assert engine.get_state().max_spins == 3
    assert isinstance(engine.request_spin(), Rejected)


def test_bullseye_on_column_i_scopes_the_manual_pick():
    engine = make_engine([[15, Symbol.BULLSEYE, 45, 60, 75]])
    outcome = engine.request_spin()
    assert outcome.state.phase is GamePhase.AWAITING_MANUAL_SELECTION
    assert outcome.state.selection == ManualSelectionMode.for_column(Column.I)
    assert outcome.state.score == 0

    wrong = engine.click_cell(0, 0)
    assert wrong == Rejected(RejectionReason.WRONG_COLUMN)
    assert engine.get_state() == outcome.state

    picked = engine.click_cell(0, 1)
    assert picked.ok
    assert picked.position == (0, 1)
    assert picked.state.card[0][1].marked
    assert picked.state.score == 100
    assert picked.state.matches == 1
    assert not picked.state.selection.active
    assert picked.state.phase is GamePhase.IDLE
    assert picked.events[0].kind is NotificationKind.MANUAL_MARK
    assert picked.events[0].message == "Marked I22! +100 points"


def test_gold_bullseye_allows_any_unmarked_cell():
    engine = make_engine([[15, 30, 45, Symbol.GOLD_BULLSEYE, 75]])
    before = engine.request_spin().state
    assert engine.click_cell(2, 2) == Rejected(RejectionReason.CELL_ALREADY_MARKED)
    assert engine.get_state() == before
    assert engine.click_cell(4, 0).ok


def test_click_without_pending_selection_is_rejected():
    engine = make_engine()
    assert engine.click_cell(0, 0) == Rejected(RejectionReason.NO_SELECTION_PENDING)
    engine.request_spin()
    assert engine.click_cell(0, 0) == Rejected(RejectionReason.NO_SELECTION_PENDING)


def test_click_outside_card_is_rejected():
    engine = make_engine([[Symbol.GOLD_BULLSEYE, 30, 45, 60, 75]])
    before = engine.request_spin().state
    assert engine.click_cell(5, 0) == Rejected(RejectionReason.INVALID_CELL)
    assert engine.click_cell(0, -1) == Rejected(RejectionReason.INVALID_CELL)
    assert engine.get_state() == before
    assert engine.get_state().selection.active


def test_spin_is_rejected_while_a_pick_is_pending():
    engine = make_engine([[Symbol.BULLSEYE, 30, 45, 60, 75]])
    engine.request_spin()
    assert engine.request_spin() == Rejected(RejectionReason.SELECTION_PENDING)
    assert engine.get_state().spins == 1
    engine.click_cell(1, 0)
    assert engine.request_spin().ok


def test_bullseye_with_no_open_cell_in_column_is_void():
    column_b = [(r, 0) for r in range(5)]
    engine = make_engine([[Symbol.BULLSEYE, 30, 45, 60, 75]], card=make_card(marked=column_b))
    outcome = engine.request_spin()
    assert not outcome.state.selection.active
    assert outcome.state.phase is GamePhase.IDLE


def test_bullseye_on_final_spin_survives_game_over():
    engine = make_engine([MISS] * 11 + [[15, 30, Symbol.BULLSEYE, 60, 75]])
    for _ in range(12):
        outcome = engine.request_spin()
    assert outcome.state.phase is GamePhase.GAME_OVER
    assert outcome.state.selection.active

    assert engine.request_spin() == Rejected(RejectionReason.NO_SPINS_REMAINING)
    picked = engine.click_cell(0, 2)
    assert picked.ok
    assert picked.state.phase is GamePhase.GAME_OVER
    assert picked.state.score == 100
    assert not any(event.kind is NotificationKind.GAME_OVER for event in picked.events)


def test_manual_pick_can_complete_a_line():
    engine = make_engine(
        [[3, Symbol.BULLSEYE, 38, 55, 70]],
    )
    engine.request_spin()
    picked = engine.click_cell(0, 1)
    assert picked.state.completed_lines == 1
    assert picked.state.score == 4 * 100 + 100 + 1000


def test_blackout_bonus_is_awarded_once():
    bus = EventBus()
    blackouts = []
    bus.subscribe(EVENT_BLACKOUT, lambda sender, **payload: blackouts.append(payload["bonus"]))
    remaining = [cell for cell in ALL_CELLS if cell not in ROW0]
    engine = make_engine([[3, 22, 38, 55, 70]], card=make_card(marked=remaining), event_bus=bus)

    outcome = engine.request_spin()
    assert outcome.state.full_card_bonus_awarded
    assert outcome.state.completed_lines == 12
    assert outcome.state.score == 12 * 1000 + 5 * 100 + 5000
    assert blackouts == [5000]

    again = engine.request_spin()
    assert again.state.score == outcome.state.score
    assert blackouts == [5000]


def test_new_game_resets_everything():
    engine = make_engine([[3, 22, 38, 55, Symbol.GOLD_BULLSEYE]])
    engine.request_spin()
    assert engine.get_state().score > 0

    fresh = engine.new_game()
    assert fresh.score == 0
    assert fresh.spins == 0
    assert fresh.matches == 0
    assert fresh.completed_lines == 0
    assert fresh.winning_cells == frozenset()
    assert not fresh.full_card_bonus_awarded
    assert not fresh.selection.active
    assert fresh.phase is GamePhase.IDLE
    assert sum(cell.marked for row in fresh.card for cell in row) == 1


def test_phase_changes_are_emitted():
    bus = EventBus()
    phases = []
    bus.subscribe(EVENT_GAME_PHASE_CHANGED, lambda sender, **payload: phases.append(payload["new_phase"]))
    engine = make_engine([[Symbol.BULLSEYE, 30, 45, 60, 75]], event_bus=bus)
    engine.request_spin()
    engine.click_cell(0, 0)
    assert phases == [
        GamePhase.SPIN_IN_FLIGHT,
        GamePhase.AWAITING_MANUAL_SELECTION,
        GamePhase.IDLE,
    ]


def test_requests_during_a_spin_are_rejected():
    bus = EventBus()
    engine = make_engine([[Symbol.GOLD_BULLSEYE, 30, 45, 60, 75]], event_bus=bus)
    nested = []

    def on_spin_started(sender, **payload):
        nested.append(engine.request_spin())
        nested.append(engine.click_cell(0, 0))

    bus.subscribe(EVENT_SPIN_STARTED, on_spin_started)
    outcome = engine.request_spin()

    assert nested == [
        Rejected(RejectionReason.SPIN_IN_FLIGHT),
        Rejected(RejectionReason.NO_SELECTION_PENDING),
    ]
    assert outcome.state.spins == 1


def test_requests_from_phase_listeners_are_rejected_until_the_spin_returns():
    bus = EventBus()
    engine = make_engine([[Symbol.GOLD_BULLSEYE, 30, 45, 60, 75]], event_bus=bus)
    nested = []

    def on_phase(sender, **payload):
        if payload["new_phase"] is GamePhase.AWAITING_MANUAL_SELECTION:
            nested.append(engine.click_cell(0, 0))

    bus.subscribe(EVENT_GAME_PHASE_CHANGED, on_phase)
    outcome = engine.request_spin()
    assert nested == [Rejected(RejectionReason.NO_SELECTION_PENDING)]
    assert not outcome.state.card[0][0].marked
    assert engine.click_cell(0, 0).ok


def test_new_game_during_a_spin_is_an_invariant_violation():
    bus = EventBus()
    engine = make_engine(event_bus=bus)
    bus.subscribe(EVENT_SPIN_STARTED, lambda sender, **payload: engine.new_game())
    with pytest.raises(InvariantViolation):
        engine.request_spin()


def test_notifications_are_published_on_the_bus():
    bus = EventBus()
    seen = []
    lines = []
    bus.subscribe(EVENT_NOTIFICATION, lambda sender, **payload: seen.append(payload["event"]))
    bus.subscribe(EVENT_LINES_COMPLETED, lambda sender, **payload: lines.append(payload["newly_completed"]))
    engine = make_engine([[3, 22, 38, 55, 70]], event_bus=bus)
    outcome = engine.request_spin()
    assert tuple(seen[-len(outcome.events):]) == outcome.events
    assert lines == [1]


def _bullseye_prompts(events):
    return [event for event in events if event.kind is NotificationKind.BULLSEYE]


def test_void_bullseye_sends_no_prompt():
    column_b = [(r, 0) for r in range(5)]
    engine = make_engine([[Symbol.BULLSEYE, 30, 45, 60, 75]], card=make_card(marked=column_b))
    outcome = engine.request_spin()
    assert not outcome.state.selection.active
    assert _bullseye_prompts(outcome.events) == []


def test_only_the_surviving_bullseye_is_announced():
    engine = make_engine([[Symbol.BULLSEYE, 30, 45, 60, Symbol.BULLSEYE]])
    outcome = engine.request_spin()
    assert outcome.state.selection == ManualSelectionMode.for_column(Column.O)
    prompts = _bullseye_prompts(outcome.events)
    assert len(prompts) == 1
    assert prompts[0].params == {"column": "O"}
    assert prompts[0].message == "BULLSEYE! Mark any number in column O! 🎯"


def test_gold_bullseye_prompt_has_no_column():
    engine = make_engine([[Symbol.BULLSEYE, 30, Symbol.GOLD_BULLSEYE, 60, 75]])
    prompts = _bullseye_prompts(engine.request_spin().events)
    assert [prompt.params for prompt in prompts] == [{"column": None}]


def test_click_from_a_listener_during_a_click_is_rejected():
    bus = EventBus()
    engine = make_engine([[Symbol.GOLD_BULLSEYE, 30, 45, 60, 75]], event_bus=bus)
    engine.request_spin()
    nested = []
    bus.subscribe(EVENT_SELECTION_RESOLVED, lambda sender, **payload: nested.append(engine.click_cell(1, 0)))

    picked = engine.click_cell(0, 0)

    assert picked.ok
    assert nested == [Rejected(RejectionReason.NO_SELECTION_PENDING)]
    assert not picked.state.card[1][0].marked
    assert picked.state.matches == 1
