"""State machine coordinating spins, manual picks and new games."""
from __future__ import annotations

import logging
from typing import List, Tuple

from esper import World

from slotbingo.components.game_state import GamePhase
from slotbingo.components.notification import NotificationEvent, NotificationKind
from slotbingo.components.selection_mode import ManualSelectionMode
from slotbingo.errors import InvariantViolation
from slotbingo.events.bus import (
    EVENT_BLACKOUT,
    EVENT_CLICK_REJECTED,
    EVENT_GAME_OVER,
    EVENT_LINES_COMPLETED,
    EVENT_NEW_GAME,
    EVENT_NOTIFICATION,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_RESOLVED,
    EVENT_SELECTION_STARTED,
    EVENT_SPIN_REJECTED,
    EVENT_SPIN_RESOLVED,
    EVENT_SPIN_STARTED,
    EventBus,
)
from slotbingo.outcomes import ClickOutcome, Rejected, RejectionReason, SpinOutcome
from slotbingo.systems.card_ops import in_bounds, selectable_cells
from slotbingo.systems.card_system import CardSystem
from slotbingo.systems.spin_resolver import resolve_spin
from slotbingo.systems.symbol_generator import SymbolGenerator
from slotbingo.systems.win_detector import detect_wins
from slotbingo.utils.game_state import build_snapshot, get_game_state, get_rules, set_game_phase
from slotbingo.utils.snapshot import GameSnapshot

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Applies spin and click transitions to the singleton GameState.

    Every transition runs to completion before returning; requests that arrive
    from event subscribers while a spin is resolving are rejected.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        card_system: CardSystem,
        *,
        generator: SymbolGenerator | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.card_system = card_system
        self.generator = generator or SymbolGenerator(getattr(world, "random", None))
        self._events: List[NotificationEvent] = []
        self._resolving = False

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def new_game(self) -> GameSnapshot:
        if self._resolving:
            raise InvariantViolation("new game requested while an action is resolving")
        state = get_game_state(self.world)
        state.reset()
        self.card_system.new_card()
        set_game_phase(self.world, self.event_bus, GamePhase.IDLE)
        rules = get_rules(self.world)
        logger.info("New game started (max_spins=%d)", rules.max_spins)
        self.event_bus.emit(EVENT_NEW_GAME, max_spins=rules.max_spins)
        self.event_bus.emit(EVENT_NOTIFICATION, event=NotificationEvent(NotificationKind.NEW_CARD))
        return build_snapshot(self.world)

    def request_spin(self) -> SpinOutcome | Rejected:
        state = get_game_state(self.world)
        rules = get_rules(self.world)
        reason = self._spin_rejection(state.phase, state.spins, rules.max_spins)
        if reason is not None:
            logger.debug("Spin rejected: %s", reason.value)
            self.event_bus.emit(EVENT_SPIN_REJECTED, reason=reason)
            return Rejected(reason)

        self._resolving = True
        self._events = []
        try:
            set_game_phase(self.world, self.event_bus, GamePhase.SPIN_IN_FLIGHT)
            self.event_bus.emit(EVENT_SPIN_STARTED, spin=state.spins + 1)

            if state.spins >= rules.max_spins:
                raise InvariantViolation(f"spin counter would exceed {rules.max_spins}")
            results = self.generator.spin()
            resolution = resolve_spin(self.card_system.snapshot(), results, rules)
            self.card_system.mark(list(resolution.marked), source="spin")

            state.spins += 1
            state.matches += resolution.new_matches
            self._add_score(resolution.score_delta, reason="spin")
            for event in resolution.events:
                self._publish(event)
            logger.debug(
                "Spin %d resolved: %s -> %d matches, +%d",
                state.spins,
                [result.label for result in results],
                resolution.new_matches,
                resolution.score_delta,
            )
            self.event_bus.emit(
                EVENT_SPIN_RESOLVED,
                results=results,
                new_matches=resolution.new_matches,
                score_delta=resolution.score_delta,
            )

            self._check_wins()
            if resolution.triggered_mode is not None:
                self._start_selection(resolution.triggered_mode)
            self._settle_phase()
            return SpinOutcome(results=results, state=build_snapshot(self.world), events=self._drain())
        finally:
            self._resolving = False

    def click_cell(self, row: int, col: int) -> ClickOutcome | Rejected:
        state = get_game_state(self.world)
        reason = self._click_rejection(row, col)
        if reason is not None:
            logger.debug("Click on (%s,%s) rejected: %s", row, col, reason.value)
            self.event_bus.emit(EVENT_CLICK_REJECTED, row=row, col=col, reason=reason)
            return Rejected(reason)

        self._resolving = True
        self._events = []
        try:
            rules = get_rules(self.world)
            self.card_system.mark([(row, col)], source="manual")
            cell = self.card_system.snapshot()[row][col]
            state.matches += 1
            self._add_score(rules.manual_mark_points, reason="manual")
            self._notify(
                NotificationKind.MANUAL_MARK,
                row=row,
                col=col,
                label=f"{cell.column.value}{cell.number}",
                points=rules.manual_mark_points,
            )
            state.selection = ManualSelectionMode.inactive()
            self.event_bus.emit(EVENT_SELECTION_RESOLVED, row=row, col=col)
            self._check_wins()
            self._settle_phase()
            return ClickOutcome(position=(row, col), state=build_snapshot(self.world), events=self._drain())
        finally:
            self._resolving = False

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _spin_rejection(self, phase: GamePhase, spins: int, max_spins: int) -> RejectionReason | None:
        if self._resolving or phase is GamePhase.SPIN_IN_FLIGHT:
            return RejectionReason.SPIN_IN_FLIGHT
        if phase is GamePhase.GAME_OVER or spins >= max_spins:
            return RejectionReason.NO_SPINS_REMAINING
        if phase is GamePhase.AWAITING_MANUAL_SELECTION:
            return RejectionReason.SELECTION_PENDING
        return None

    def _click_rejection(self, row: int, col: int) -> RejectionReason | None:
        state = get_game_state(self.world)
        if self._resolving or state.phase is GamePhase.SPIN_IN_FLIGHT or not state.selection.active:
            return RejectionReason.NO_SELECTION_PENDING
        if not in_bounds(row, col):
            return RejectionReason.INVALID_CELL
        cell = self.card_system.snapshot()[row][col]
        if cell.marked:
            return RejectionReason.CELL_ALREADY_MARKED
        if not state.selection.allows(cell.column):
            return RejectionReason.WRONG_COLUMN
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_wins(self) -> None:
        state = get_game_state(self.world)
        rules = get_rules(self.world)
        report = detect_wins(self.card_system.snapshot(), state.completed_lines)
        state.winning_cells = set(report.winning_cells)
        state.completed_lines = report.completed_lines
        if report.newly_completed > 0:
            self._add_score(report.newly_completed * rules.line_points, reason="lines")
            self._notify(
                NotificationKind.LINES_COMPLETED,
                count=report.newly_completed,
                total=report.completed_lines,
                lines=report.lines,
            )
            self.event_bus.emit(
                EVENT_LINES_COMPLETED,
                newly_completed=report.newly_completed,
                completed_lines=report.completed_lines,
                winning_cells=report.winning_cells,
            )
        if report.blackout and not state.full_card_bonus_awarded:
            state.full_card_bonus_awarded = True
            self._add_score(rules.full_card_points, reason="blackout")
            self._notify(NotificationKind.BLACKOUT, bonus=rules.full_card_points)
            self.event_bus.emit(EVENT_BLACKOUT, bonus=rules.full_card_points)

    def _start_selection(self, mode: ManualSelectionMode) -> None:
        state = get_game_state(self.world)
        if state.selection.active:
            raise InvariantViolation("a manual selection is already pending")
        if not selectable_cells(self.card_system.snapshot(), mode):
            logger.debug("Bullseye void: no unmarked cell allowed by %s", mode)
            return
        state.selection = mode
        self._notify(NotificationKind.BULLSEYE, column=mode.column.value if mode.column else None)
        self.event_bus.emit(EVENT_SELECTION_STARTED, mode=mode)

    def _settle_phase(self) -> None:
        state = get_game_state(self.world)
        rules = get_rules(self.world)
        if state.spins >= rules.max_spins:
            if state.phase is not GamePhase.GAME_OVER:
                set_game_phase(self.world, self.event_bus, GamePhase.GAME_OVER)
                logger.info("Game over: score=%d lines=%d matches=%d", state.score, state.completed_lines, state.matches)
                self._notify(NotificationKind.GAME_OVER, score=state.score)
                self.event_bus.emit(
                    EVENT_GAME_OVER,
                    score=state.score,
                    completed_lines=state.completed_lines,
                    matches=state.matches,
                )
        elif state.selection.active:
            set_game_phase(self.world, self.event_bus, GamePhase.AWAITING_MANUAL_SELECTION)
        else:
            set_game_phase(self.world, self.event_bus, GamePhase.IDLE)

    def _add_score(self, delta: int, *, reason: str) -> None:
        if delta < 0:
            raise InvariantViolation(f"negative score delta {delta} ({reason})")
        if delta == 0:
            return
        state = get_game_state(self.world)
        state.score += delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=delta, reason=reason)

    def _notify(self, kind: NotificationKind, **params) -> None:
        self._publish(NotificationEvent(kind, params))

    def _publish(self, event: NotificationEvent) -> None:
        self._events.append(event)
        self.event_bus.emit(EVENT_NOTIFICATION, event=event)

    def _drain(self) -> Tuple[NotificationEvent, ...]:
        events = tuple(self._events)
        self._events = []
        return events
