"""
Per-frame physics integration
=============================

One call to :func:`step` advances a world by one frame, always in this order:

1. gravity from every planet on the rocket
2. control forces, turning and fuel consumption
3. acceleration, radial clamp, kinematic position/velocity update, angle
4. toroidal wrap at the arena edges
5. collision resolution or victory detection

The rocket is the only thing mutated. Given the same world, intent sequence
and frame times, the result is fully deterministic.

Examples
--------
>>> from gravwell import ControlIntent, step
>>> result = step(world, ControlIntent(thrust_forward=True), 1 / 60)
>>> result.events
()
"""

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Iterable, Tuple

from .body import Planet, Rocket
from .collision import CollisionOutcome, Contact, check_collisions
from .config import config
from .events import EventType
from .params import PhysicsParams
from .utils import validation_error
from .vector import Vector2


# ========== CONTROL INPUT ==========

ACTIONS = ('forward', 'backward', 'left', 'right')


@dataclass(frozen=True)
class ControlIntent:
    """
    Device-independent control flags for one frame.

    Attributes
    ----------
    thrust_forward, thrust_backward : bool
        Main engine along / against the heading
    turn_left, turn_right : bool
        Rotation; left wins when both are held
    """
    thrust_forward: bool = False
    thrust_backward: bool = False
    turn_left: bool = False
    turn_right: bool = False

    @classmethod
    def from_keys(cls, pressed: Iterable[str],
                  bindings: Optional[Mapping[str, str]] = None) -> "ControlIntent":
        """
        Build an intent from the names of currently pressed keys.

        Parameters
        ----------
        pressed : iterable of str
            Key names currently held down
        bindings : mapping, optional
            Action name ('forward', 'backward', 'left', 'right') to key name.
            Default: ``gravwell.defaults.DEFAULT_KEY_BINDINGS``
        """
        if bindings is None:
            from .defaults import DEFAULT_KEY_BINDINGS
            bindings = DEFAULT_KEY_BINDINGS
        for action in bindings:
            if action not in ACTIONS:
                validation_error(
                    f"Unknown action '{action}'. Valid options: {ACTIONS}"
                )
        pressed = set(pressed)
        held = {action: bindings.get(action) in pressed for action in ACTIONS}
        return cls(
            thrust_forward=held['forward'],
            thrust_backward=held['backward'],
            turn_left=held['left'],
            turn_right=held['right'],
        )

    @property
    def any(self) -> bool:
        return (self.thrust_forward or self.thrust_backward or
                self.turn_left or self.turn_right)


IDLE = ControlIntent()


# ========== FORCE ACCUMULATION ==========

def gravity_force(position: Vector2, planets: Iterable[Planet],
                  params: PhysicsParams) -> Vector2:
    """
    Resultant gravitational force on the rocket.

    Each planet pulls with ``G * rocket_mass * planet_mass / d^2`` toward its
    centre. Planets closer than ``sqrt(config.GRAVITY_EPSILON_SQ)`` are
    skipped to avoid the singularity.
    """
    fx = fy = 0.0
    for planet in planets:
        dx = planet.position.x - position.x
        dy = planet.position.y - position.y
        dist_sq = dx * dx + dy * dy
        if dist_sq <= config.GRAVITY_EPSILON_SQ:
            continue
        magnitude = params.G * params.rocket_mass * planet.mass / dist_sq
        dist = math.sqrt(dist_sq)
        fx += magnitude * dx / dist
        fy += magnitude * dy / dist
    return Vector2(fx, fy)


def apply_controls(rocket: Rocket, intent: ControlIntent, params: PhysicsParams,
                   dt: float) -> Tuple[Vector2, bool]:
    """
    Engine force, turning and fuel burn for one frame.

    Sets ``rocket.angular_velocity`` and lowers ``rocket.fuel`` (clamped at
    zero). With an empty tank nothing fires and the rocket stops turning.

    Returns
    -------
    tuple
        (engine force, fuel_depleted). ``fuel_depleted`` is True on every
        frame that starts with an empty tank.
    """
    force = Vector2.zero()
    if rocket.fuel > 0:
        heading = rocket.heading
        if intent.thrust_forward:
            force = force + heading.scale(params.thrust)
            rocket.fuel -= params.fuel_consumption_thrust * dt
        if intent.thrust_backward:
            force = force + heading.scale(-params.thrust)
            rocket.fuel -= params.fuel_consumption_thrust * dt
        if intent.turn_left:
            rocket.angular_velocity = -params.torque
            rocket.fuel -= params.fuel_consumption_turn * dt
        elif intent.turn_right:
            rocket.angular_velocity = params.torque
            rocket.fuel -= params.fuel_consumption_turn * dt
        else:
            rocket.angular_velocity = 0.0
        depleted = False
    else:
        rocket.angular_velocity = 0.0
        depleted = True

    if rocket.fuel < 0:
        rocket.fuel = 0.0
    return force, depleted


# ========== INTEGRATION ==========

def _nearest_planet(position: Vector2, planets: Iterable[Planet]):
    """Planet with the smallest surface distance, and that distance to its centre."""
    nearest = None
    nearest_gap = math.inf
    nearest_dist = math.inf
    for planet in planets:
        dist = position.distance_to(planet.position)
        gap = dist - planet.radius
        if gap < nearest_gap:
            nearest, nearest_gap, nearest_dist = planet, gap, dist
    return nearest, nearest_dist


def _without_inward(v: Vector2, normal: Vector2) -> Vector2:
    """Drop the component of ``v`` pointing against ``normal``."""
    radial = v.dot(normal)
    if radial < 0:
        return v - normal.scale(radial)
    return v


def integrate(rocket: Rocket, force: Vector2, params: PhysicsParams, dt: float,
              planets: Iterable[Planet] = ()) -> None:
    """
    Advance rocket kinematics by ``dt`` under a constant force.

    Uses ``x += v*dt + a*dt^2/2`` and ``v += a*dt``. If the rocket already
    overlaps its nearest planet, the inward radial parts of acceleration and
    velocity are removed first so it cannot sink further. The angle advances
    by one per-frame ``angular_velocity`` increment (not scaled by dt).
    """
    acceleration = force.divide(params.rocket_mass)
    velocity = rocket.velocity

    planet, dist = _nearest_planet(rocket.position, planets)
    if planet is not None and dist < planet.radius + params.rocket_radius:
        normal = (rocket.position - planet.position).normalized()
        acceleration = _without_inward(acceleration, normal)
        velocity = _without_inward(velocity, normal)

    rocket.acceleration = acceleration
    rocket.position = (rocket.position
                       + velocity.scale(dt)
                       + acceleration.scale(0.5 * dt * dt))
    rocket.velocity = velocity + acceleration.scale(dt)
    rocket.angle += rocket.angular_velocity


def wrap_position(position: Vector2, width: float, height: float) -> Vector2:
    """Teleport a coordinate that left [0, extent] to the opposite edge."""
    x, y = position.x, position.y
    if x < 0:
        x = width
    elif x > width:
        x = 0.0
    if y < 0:
        y = height
    elif y > height:
        y = 0.0
    if x == position.x and y == position.y:
        return position
    return Vector2(x, y)


# ========== FRAME STEP ==========

@dataclass(frozen=True)
class StepResult:
    """
    Outcome of one physics frame.

    Attributes
    ----------
    world : World
        The stepped world (same object that was passed in)
    events : tuple of EventType
        FUEL_DEPLETED, COLLISION, DESTROYED and/or VICTORY, in emission order
    outcome : CollisionOutcome
        Result of the collision/victory check
    contact : Contact, optional
        Details of the collision, if any
    """
    world: object
    events: Tuple[EventType, ...]
    outcome: CollisionOutcome
    contact: Optional[Contact] = None


_OUTCOME_EVENTS = {
    CollisionOutcome.BOUNCE: EventType.COLLISION,
    CollisionOutcome.DESTROYED: EventType.DESTROYED,
    CollisionOutcome.VICTORY: EventType.VICTORY,
}


def step(world, intent: ControlIntent, dt: float,
         physics: Optional[PhysicsParams] = None) -> StepResult:
    """
    Advance the world by one frame.

    Parameters
    ----------
    world : World
        World to advance; its rocket is modified in place
    intent : ControlIntent
        Control flags held during this frame
    dt : float
        Frame duration [s], non-negative
    physics : PhysicsParams, optional
        Default: ``world.physics``

    Returns
    -------
    StepResult
        Events emitted and the collision outcome

    Raises
    ------
    ValueError
        If dt is negative or not finite (strict validation)
    """
    dt = float(dt)
    if not math.isfinite(dt) or dt < 0:
        validation_error(f"dt must be a non-negative finite number, got {dt}")
        dt = 0.0
    params = physics if physics is not None else world.physics
    rocket = world.rocket
    events = []

    force = gravity_force(rocket.position, world.planets, params)
    engine, depleted = apply_controls(rocket, intent, params, dt)
    if depleted:
        events.append(EventType.FUEL_DEPLETED)

    integrate(rocket, force + engine, params, dt, world.planets)
    rocket.position = wrap_position(rocket.position, world.arena_width,
                                    world.arena_height)

    result = check_collisions(world, params)
    if result.outcome in _OUTCOME_EVENTS:
        events.append(_OUTCOME_EVENTS[result.outcome])

    return StepResult(world, tuple(events), result.outcome, result.contact)
