# app/services/trip_lifecycle.py
"""
Trip stage state machine.

  DRAFT ──dispatch──▶ DISPATCHED ──start──▶ IN_PROGRESS ──complete──▶ COMPLETED
    │                     │
    └──────cancel─────────┴──────────────▶ CANCELLED

COMPLETED and CANCELLED are terminal. With the remote backend the stored
procedures enforce this; the local SQL backend calls advance() itself.
"""

from app.exceptions import RemoteOperationError
from app.schemas.enums import TripStage

TRANSITIONS: dict[TripStage, frozenset[TripStage]] = {
    TripStage.DRAFT: frozenset({TripStage.DISPATCHED, TripStage.CANCELLED}),
    TripStage.DISPATCHED: frozenset({TripStage.IN_PROGRESS, TripStage.CANCELLED}),
    TripStage.IN_PROGRESS: frozenset({TripStage.COMPLETED}),
    TripStage.COMPLETED: frozenset(),
    TripStage.CANCELLED: frozenset(),
}

# action name → target stage
ACTIONS: dict[str, TripStage] = {
    "dispatch": TripStage.DISPATCHED,
    "start": TripStage.IN_PROGRESS,
    "complete": TripStage.COMPLETED,
    "cancel": TripStage.CANCELLED,
}


class IllegalTransitionError(RemoteOperationError):
    def __init__(self, action: str, current: TripStage):
        super().__init__(f"Cannot {action} trip in stage {current.value}")
        self.action = action
        self.current = current


def can_transition(current: TripStage, target: TripStage) -> bool:
    return target in TRANSITIONS[current]


def is_terminal(stage: TripStage) -> bool:
    return not TRANSITIONS[stage]


def advance(current: TripStage, action: str) -> TripStage:
    """Stage reached by applying `action` to `current`, or IllegalTransitionError."""
    target = ACTIONS[action]
    if not can_transition(current, target):
        raise IllegalTransitionError(action, current)
    return target
