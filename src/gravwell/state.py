"""
Game state machine.

    Idle --START--> Running --DESTROYED--> Exploding --EXPLOSION_DONE--> Running
                       |                                                (new round)
                       +--VICTORY--> Won

RESET is accepted from every state and starts a fresh round. Any trigger
that does not apply to the current state leaves the state unchanged.
"""

from enum import Enum


class GameState(Enum):
    IDLE = 'idle'           # round generated, waiting for start
    RUNNING = 'running'     # physics active
    EXPLODING = 'exploding' # physics frozen, explosion timer pending
    WON = 'won'             # physics frozen, target reached


class Trigger(Enum):
    START = 'start'
    DESTROYED = 'destroyed'
    VICTORY = 'victory'
    EXPLOSION_DONE = 'explosion_done'
    RESET = 'reset'


_TRANSITIONS = {
    (GameState.IDLE, Trigger.START): GameState.RUNNING,
    (GameState.RUNNING, Trigger.DESTROYED): GameState.EXPLODING,
    (GameState.RUNNING, Trigger.VICTORY): GameState.WON,
    (GameState.EXPLODING, Trigger.EXPLOSION_DONE): GameState.RUNNING,
}


def transition(state: GameState, trigger: Trigger, autostart: bool = True) -> GameState:
    """
    Next state for ``trigger`` in ``state``; a no-op when not applicable.

    ``RESET`` goes to RUNNING, or IDLE when ``autostart`` is False.
    """
    if trigger is Trigger.RESET:
        return GameState.RUNNING if autostart else GameState.IDLE
    return _TRANSITIONS.get((state, trigger), state)


def physics_active(state: GameState) -> bool:
    return state is GameState.RUNNING
