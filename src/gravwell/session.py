"""
GameSession class definition

The session is the single owner of all mutable game state: the current
World, the GameState and its entry time, the pending timers, the event log,
the HUD message and the optional flight log. A presentation layer holds a
session handle, calls :meth:`GameSession.tick` once per display refresh and
draws from the session's read-only views.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .collision import Contact
from .config import config
from .defaults import ARCADE_PHYSICS, DEFAULT_SIZES
from .events import Event, EventLog, EventType
from .flight_log import FlightLog
from .generator import generate_world
from .params import PhysicsParams, SizeParams
from .physics import IDLE, ControlIntent, step
from .state import GameState, Trigger, physics_active, transition
from .timers import Scheduler, TimerHandle
from .utils import validation_error
from .world import Hud, World

logger = logging.getLogger(__name__)

MESSAGES = {
    EventType.FUEL_DEPLETED: "Fuel depleted!",
    EventType.COLLISION: "Collision! Trajectory reversed, speed reduced.",
    EventType.DESTROYED: "Catastrophic impact! Rocket destroyed.",
    EventType.VICTORY: "Target reached!",
}


@dataclass(frozen=True)
class TickResult:
    """
    What one tick produced.

    Attributes
    ----------
    state : GameState
        State after the tick
    events : list of Event
        Events logged during the tick, including timer-driven round resets
    hud : Hud
        Speed, distance to the end planet and fuel after the tick
    """
    state: GameState
    events: List[Event]
    hud: Hud


class GameSession:
    """
    Frame-driven game session.

    Parameters
    ----------
    planet_count : int, optional
        Difficulty level, planets per round (default: config.DEFAULT_PLANET_COUNT)
    arena_width, arena_height : float, optional
        Arena extents (default 800 x 600)
    physics : PhysicsParams, optional
        Default: ARCADE_PHYSICS
    sizes : SizeParams, optional
        Default: DEFAULT_SIZES
    seed : int, optional
        Seed for world generation and spawn bearings
    clock : callable, optional
        Monotonic time source in seconds, used when ``now`` is omitted
        (default: time.monotonic)
    record : bool, optional
        Keep a FlightLog of every physics step (default False)

    Notes
    -----
    - The session starts in IDLE with a world already generated.
    - Physics runs only in RUNNING. EXPLODING schedules an automatic new
      round after ``config.EXPLOSION_DURATION``; WON waits for
      :meth:`reset_round` or :meth:`advance_level`.
    - Every timer is tied to the round that created it and is cancelled when
      a new round begins.
    """

    # ========== CONSTRUCTION ==========
    def __init__(
        self,
        planet_count: Optional[int] = None,
        arena_width: float = 800.0,
        arena_height: float = 600.0,
        physics: Optional[PhysicsParams] = None,
        sizes: Optional[SizeParams] = None,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        record: bool = False,
    ):
        if arena_width <= 0 or arena_height <= 0:
            raise ValueError(
                f"Arena extents must be positive, got {arena_width} x {arena_height}"
            )
        self._physics = physics if physics is not None else ARCADE_PHYSICS
        self._sizes = sizes if sizes is not None else DEFAULT_SIZES
        self._arena = (float(arena_width), float(arena_height))
        self._rng = np.random.default_rng(seed)
        self._clock = clock
        self._scheduler = Scheduler()
        self._events = EventLog()
        self._flight_log = FlightLog() if record else None

        if planet_count is None:
            planet_count = config.DEFAULT_PLANET_COUNT
        self._level = self._validate_level(planet_count)

        now = self._clock()
        self._round_id = 1
        self._state = GameState.IDLE
        self._state_since = now
        self._last_tick: Optional[float] = None
        self._message: Optional[str] = None
        self._message_timer: Optional[TimerHandle] = None
        self._world = self._generate()
        self._events.emit(now, EventType.ROUND_STARTED, self._round_id,
                          {"planet_count": self._level})

    # ========== PROPERTY ACCESS ==========
    @property
    def world(self) -> World:
        return self._world

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def state_since(self) -> float:
        """Clock reading when the current state was entered [s]."""
        return self._state_since

    @property
    def round_id(self) -> int:
        return self._round_id

    @property
    def planet_count(self) -> int:
        """Current difficulty level."""
        return self._level

    @property
    def physics(self) -> PhysicsParams:
        return self._physics

    @property
    def sizes(self) -> SizeParams:
        return self._sizes

    @property
    def arena(self):
        return self._arena

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def flight_log(self) -> Optional[FlightLog]:
        return self._flight_log

    @property
    def message(self) -> Optional[str]:
        """Current HUD message, or None once it has been cleared."""
        return self._message

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    # ========== DERIVED VALUES ==========
    def hud(self) -> Hud:
        return self._world.hud()

    def events_since(self, last_event_id: int) -> List[Event]:
        return self._events.since(last_event_id)

    def explosion_progress(self, now: Optional[float] = None) -> Optional[float]:
        """
        Fraction of the explosion animation elapsed, in [0, 1].

        Returns None outside the EXPLODING state.
        """
        if self._state is not GameState.EXPLODING:
            return None
        now = self._clock() if now is None else now
        duration = config.EXPLOSION_DURATION
        if duration <= 0:
            return 1.0
        return min(max((now - self._state_since) / duration, 0.0), 1.0)

    # ========== CONTROL ==========
    def start(self, now: Optional[float] = None) -> GameState:
        """Leave IDLE and begin integrating; a no-op in any other state."""
        now = self._clock() if now is None else now
        if self._set_state(transition(self._state, Trigger.START), now):
            self._last_tick = now
        return self._state

    def tick(self, intent: ControlIntent = IDLE,
             now: Optional[float] = None) -> TickResult:
        """
        Advance the session to time ``now``.

        Due timers fire first (which may begin a new round); then, if the
        session is RUNNING, exactly one physics step of ``now - last tick``
        seconds runs with ``intent``.

        Parameters
        ----------
        intent : ControlIntent, optional
            Controls held this frame (default: nothing held)
        now : float, optional
            Current time [s] (default: the session clock)

        Returns
        -------
        TickResult
            State, events logged during this tick and HUD values

        Raises
        ------
        ValueError
            If ``now`` is earlier than the previous tick (strict validation)
        """
        now = self._clock() if now is None else float(now)
        if self._last_tick is not None and now < self._last_tick:
            validation_error(
                f"Clock went backwards: {now} < previous tick {self._last_tick}"
            )
            logger.warning("Stale clock reading %.6f; using previous tick %.6f",
                           now, self._last_tick)
            now = self._last_tick
        first_id = self._events.last_id

        self._scheduler.run_due(now)

        if physics_active(self._state):
            dt = now - self._last_tick if self._last_tick is not None else 0.0
            result = step(self._world, intent, dt, self._physics)
            if self._flight_log is not None:
                self._flight_log.record(now, self._world.rocket, self._state.value)
            for event_type in result.events:
                self._handle(event_type, result.contact, now)

        self._last_tick = now
        return TickResult(self._state, self._events.since(first_id), self.hud())

    def advance(self, intent: ControlIntent = IDLE, dt: float = 1 / 60) -> TickResult:
        """Tick ``dt`` seconds after the previous tick (fixed-step driving)."""
        if self._last_tick is None:
            self._last_tick = self._state_since
        return self.tick(intent, now=self._last_tick + dt)

    def reset_round(self, level: Optional[int] = None, start: bool = True,
                    now: Optional[float] = None) -> World:
        """
        Discard the current round and generate a new one.

        Parameters
        ----------
        level : int, optional
            New planet count (default: keep the current difficulty)
        start : bool, optional
            Enter RUNNING immediately (default) or wait in IDLE

        Returns
        -------
        World
            The freshly generated world
        """
        now = self._clock() if now is None else now
        if level is not None:
            self._level = self._validate_level(level)
        self._begin_round(Trigger.RESET, now, autostart=start)
        return self._world

    def load_world(self, world: World, start: bool = True,
                   now: Optional[float] = None) -> World:
        """
        Begin a new round on a prepared world instead of a generated one.

        The world's planet count becomes the difficulty level for later
        automatic resets. The session's own physics constants still drive
        stepping.
        """
        if world.rocket is None:
            raise ValueError("World has no rocket; call world.spawn_rocket() first")
        now = self._clock() if now is None else now
        self._level = self._validate_level(len(world.planets))
        self._begin_round(Trigger.RESET, now, autostart=start, world=world)
        return self._world

    def set_planet_count(self, planet_count: int, now: Optional[float] = None) -> World:
        """Change difficulty and start a new round."""
        return self.reset_round(level=planet_count, now=now)

    def advance_level(self, now: Optional[float] = None) -> World:
        """One more planet (up to config.MAX_PLANET_COUNT) and a new round."""
        level = min(self._level + 1, config.MAX_PLANET_COUNT)
        return self.reset_round(level=level, now=now)

    # ========== INTERNALS ==========
    def _validate_level(self, level) -> int:
        level = int(level)
        if not config.MIN_PLANET_COUNT <= level <= config.MAX_PLANET_COUNT:
            validation_error(
                f"planet_count must be in [{config.MIN_PLANET_COUNT}, "
                f"{config.MAX_PLANET_COUNT}], got {level}"
            )
            level = min(max(level, config.MIN_PLANET_COUNT), config.MAX_PLANET_COUNT)
        return level

    def _generate(self) -> World:
        width, height = self._arena
        return generate_world(self._level, width, height, self._sizes,
                              self._physics, self._rng)

    def _set_state(self, new_state: GameState, now: float) -> bool:
        if new_state is self._state:
            return False
        logger.debug("Round %d: %s -> %s", self._round_id,
                     self._state.value, new_state.value)
        self._state = new_state
        self._state_since = now
        return True

    def _begin_round(self, trigger: Trigger, now: float, autostart: bool = True,
                     world: Optional[World] = None) -> None:
        cancelled = self._scheduler.cancel_round(self._round_id)
        if cancelled:
            logger.debug("Cancelled %d timer(s) from round %d", cancelled, self._round_id)
        self._message = None
        self._message_timer = None

        self._round_id += 1
        self._world = world if world is not None else self._generate()
        if self._flight_log is not None:
            self._flight_log.clear()

        new_state = transition(self._state, trigger, autostart)
        if not self._set_state(new_state, now):
            self._state_since = now
        self._last_tick = now
        self._events.emit(now, EventType.ROUND_STARTED, self._round_id,
                          {"planet_count": self._level, "trigger": trigger.value})
        logger.info("Round %d started with %d planets (%s)",
                    self._round_id, self._level, trigger.value)

    def _on_explosion_done(self, now: float) -> None:
        if self._state is not GameState.EXPLODING:
            return
        self._begin_round(Trigger.EXPLOSION_DONE, now)

    def _show_message(self, text: str, now: float) -> None:
        if self._message_timer is not None:
            self._message_timer.cancel()
        self._message = text
        self._message_timer = self._scheduler.schedule(
            now + config.MESSAGE_DURATION, self._clear_message,
            round_id=self._round_id, name="message")

    def _clear_message(self, now: float) -> None:
        self._message = None
        self._message_timer = None

    def _handle(self, event_type: EventType, contact: Optional[Contact],
                now: float) -> None:
        data = {}
        if contact is not None and event_type in (EventType.COLLISION, EventType.DESTROYED):
            data = {
                "planet_index": contact.index,
                "impact_force": contact.impact_force,
                "normal": contact.normal.to_tuple(),
                "speed_before": contact.speed_before,
                "speed_after": contact.speed_after,
            }
        elif event_type is EventType.FUEL_DEPLETED:
            data = {"fuel": self._world.rocket.fuel}
        self._events.emit(now, event_type, self._round_id, data)
        self._show_message(MESSAGES[event_type], now)

        if event_type is EventType.DESTROYED:
            self._set_state(transition(self._state, Trigger.DESTROYED), now)
            self._scheduler.schedule(now + config.EXPLOSION_DURATION,
                                     self._on_explosion_done,
                                     round_id=self._round_id, name="explosion")
            logger.info("Round %d: rocket destroyed (impact force %.1f)",
                        self._round_id, contact.impact_force if contact else math.nan)
        elif event_type is EventType.VICTORY:
            self._set_state(transition(self._state, Trigger.VICTORY), now)
            logger.info("Round %d: target reached with %.2f fuel left",
                        self._round_id, self._world.rocket.fuel)
