from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps lambdas and bound methods of unreferenced systems alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_NEW_GAME = "new_game"                            # payload: max_spins=int
EVENT_GAME_PHASE_CHANGED = "game_phase_changed"        # payload: previous_phase=GamePhase|None, new_phase=GamePhase
EVENT_GAME_OVER = "game_over"                          # payload: score=int, completed_lines=int, matches=int


# ============================================================================
# CARD
# ============================================================================
EVENT_CARD_GENERATED = "card_generated"    # payload: numbers=list[list[int]]
EVENT_CELL_MARKED = "cell_marked"          # payload: row=int, col=int, number=int, source=str


# ============================================================================
# SLOT MACHINE
# ============================================================================
EVENT_SPIN_STARTED = "spin_started"        # payload: spin=int (1-based number of the spin in flight)
EVENT_SPIN_RESOLVED = "spin_resolved"      # payload: results=tuple[SlotResult,...], new_matches=int, score_delta=int
EVENT_SPIN_REJECTED = "spin_rejected"      # payload: reason=RejectionReason


# ============================================================================
# MANUAL SELECTION
# ============================================================================
EVENT_SELECTION_STARTED = "selection_started"      # payload: mode=ManualSelectionMode
EVENT_SELECTION_RESOLVED = "selection_resolved"    # payload: row=int, col=int
EVENT_CLICK_REJECTED = "click_rejected"            # payload: row=int, col=int, reason=RejectionReason


# ============================================================================
# SCORING & WINS
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, delta=int, reason=str
EVENT_LINES_COMPLETED = "lines_completed"  # payload: newly_completed=int, completed_lines=int, winning_cells=frozenset
EVENT_BLACKOUT = "blackout"                # payload: bonus=int


# ============================================================================
# PRESENTATION
# ============================================================================
EVENT_NOTIFICATION = "notification"        # payload: event=NotificationEvent
