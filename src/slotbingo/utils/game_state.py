from __future__ import annotations

from esper import World

from slotbingo.components.game_state import GamePhase, GameState
from slotbingo.components.rules import BingoRules
from slotbingo.events.bus import EVENT_GAME_PHASE_CHANGED, EventBus
from slotbingo.systems.card_ops import read_card
from slotbingo.utils.snapshot import GameSnapshot


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState not registered")


def get_rules(world: World) -> BingoRules:
    for _, rules in world.get_component(BingoRules):
        return rules
    raise RuntimeError("BingoRules not registered")


def set_game_phase(world: World, event_bus: EventBus, phase: GamePhase) -> None:
    """Update the game phase and emit a change event when it differs."""
    state = get_game_state(world)
    previous = state.phase
    if previous == phase:
        return
    state.phase = phase
    event_bus.emit(EVENT_GAME_PHASE_CHANGED, previous_phase=previous, new_phase=phase)


def build_snapshot(world: World) -> GameSnapshot:
    state = get_game_state(world)
    return GameSnapshot(
        card=read_card(world),
        phase=state.phase,
        score=state.score,
        spins=state.spins,
        max_spins=get_rules(world).max_spins,
        matches=state.matches,
        completed_lines=state.completed_lines,
        winning_cells=frozenset(state.winning_cells),
        full_card_bonus_awarded=state.full_card_bonus_awarded,
        selection=state.selection,
    )
