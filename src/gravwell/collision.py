"""
Collision detection and resolution.

Contact is circle overlap between the rocket (radius ``rocket_radius``) and a
planet. Impact force is ``|velocity| * rocket_mass``; above
``collision_threshold`` the rocket is destroyed, otherwise it bounces: the
velocity component along the collision normal is reflected, both components
are damped by ``(1 - friction)`` and the rocket is pushed out of the planet.

Only the first overlapping planet in iteration order is handled per frame.
The victory check runs only on frames without any contact.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .body import Planet, Rocket
from .config import config
from .params import PhysicsParams
from .vector import Vector2


class CollisionOutcome(Enum):
    NONE = 'none'
    BOUNCE = 'bounce'
    DESTROYED = 'destroyed'
    VICTORY = 'victory'


@dataclass(frozen=True)
class Contact:
    """
    Rocket-planet overlap found during a frame.

    Attributes
    ----------
    index : int
        Position of the planet in ``world.planets``
    planet : Planet
        The planet touched
    distance : float
        Centre-to-centre distance at detection
    normal : Vector2
        Unit vector from the planet centre toward the rocket centre
    impact_force : float
        ``|velocity| * rocket_mass`` at detection
    speed_before : float
        Rocket speed before resolution
    speed_after : float
        Rocket speed after resolution (equal to speed_before if destroyed)
    """
    index: int
    planet: Planet
    distance: float
    normal: Vector2
    impact_force: float
    speed_before: float
    speed_after: float


@dataclass(frozen=True)
class CollisionResult:
    outcome: CollisionOutcome
    contact: Optional[Contact] = None


def find_contact(rocket: Rocket, planets, rocket_radius: float):
    """
    First planet, in iteration order, overlapping the rocket.

    Returns
    -------
    tuple or None
        (index, planet, distance) or None when nothing overlaps
    """
    for index, planet in enumerate(planets):
        distance = rocket.position.distance_to(planet.position)
        if distance < rocket_radius + planet.radius:
            return index, planet, distance
    return None


def resolve_bounce(rocket: Rocket, planet: Planet, distance: float,
                   params: PhysicsParams) -> Vector2:
    """
    Reflect, damp and de-penetrate the rocket after a soft collision.

    The rocket is modified in place.

    Returns
    -------
    Vector2
        The collision normal used
    """
    normal = (rocket.position - planet.position).normalized()
    parallel = rocket.velocity.projection_onto(normal)
    orthogonal = rocket.velocity - parallel
    rocket.velocity = (orthogonal - parallel).scale(1 - params.friction)

    overlap = params.rocket_radius + planet.radius - distance
    rocket.position = rocket.position + normal.scale(overlap)
    return normal


def reached_target(rocket: Rocket, end: Planet, rocket_radius: float) -> bool:
    distance = rocket.position.distance_to(end.position)
    return distance < rocket_radius + end.radius + config.VICTORY_EPSILON


def check_collisions(world, params: Optional[PhysicsParams] = None) -> CollisionResult:
    """
    Detect and resolve this frame's collision, or detect arrival.

    Parameters
    ----------
    world : World
        World whose rocket is checked (and possibly modified)
    params : PhysicsParams, optional
        Default: ``world.physics``

    Returns
    -------
    CollisionResult
        DESTROYED if the impact exceeded the threshold (rocket untouched),
        BOUNCE if a soft collision was resolved, VICTORY if the rocket is
        within reach of the end planet, NONE otherwise.
    """
    params = params if params is not None else world.physics
    rocket = world.rocket

    found = find_contact(rocket, world.planets, params.rocket_radius)
    if found is not None:
        index, planet, distance = found
        speed_before = rocket.speed
        impact_force = speed_before * params.rocket_mass

        # strictly greater: a hit exactly at the threshold still bounces
        if impact_force > params.collision_threshold:
            normal = (rocket.position - planet.position).normalized()
            contact = Contact(index, planet, distance, normal, impact_force,
                              speed_before, speed_before)
            return CollisionResult(CollisionOutcome.DESTROYED, contact)

        normal = resolve_bounce(rocket, planet, distance, params)
        contact = Contact(index, planet, distance, normal, impact_force,
                          speed_before, rocket.speed)
        return CollisionResult(CollisionOutcome.BOUNCE, contact)

    if reached_target(rocket, world.end, params.rocket_radius):
        return CollisionResult(CollisionOutcome.VICTORY)

    return CollisionResult(CollisionOutcome.NONE)
