"""
World class definition

A World is one round's worth of state: the generated planets, the start and
end references, the rocket and the arena extents. It is created by
:func:`gravwell.generator.generate_world`, mutated only through its rocket by
:func:`gravwell.physics.step`, and discarded when the round resets.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .body import Planet, PlanetRole, Rocket
from .config import config
from .params import PhysicsParams
from .vector import Vector2


@dataclass(frozen=True)
class Hud:
    """Derived read-outs for the presentation layer."""
    speed: float
    distance_to_end: float
    fuel: float


class World:
    """
    Planets, rocket and arena for a single round.

    Parameters
    ----------
    planets : sequence of Planet
        All planets in generation order; iteration order is collision priority
    start : Planet
        The planet the rocket spawns on (must be an element of ``planets``)
    end : Planet
        The target planet (must be an element of ``planets``)
    rocket : Rocket
        Rocket state
    arena_width, arena_height : float
        Arena extents; positions wrap toroidally on [0, extent]
    physics : PhysicsParams
        Constants governing this round
    """

    def __init__(
        self,
        planets: Sequence[Planet],
        start: Planet,
        end: Planet,
        rocket: Rocket,
        arena_width: float,
        arena_height: float,
        physics: PhysicsParams,
    ):
        planets = tuple(planets)
        if len(planets) < 2:
            raise ValueError(f"A world needs at least 2 planets, got {len(planets)}")
        if not any(p is start for p in planets):
            raise ValueError("start planet must be one of the world's planets")
        if not any(p is end for p in planets):
            raise ValueError("end planet must be one of the world's planets")
        if start is end:
            raise ValueError("start and end must be different planets")
        if arena_width <= 0 or arena_height <= 0:
            raise ValueError(
                f"Arena extents must be positive, got {arena_width} x {arena_height}"
            )

        self._planets = planets
        self._start = start
        self._end = end
        self._arena_width = float(arena_width)
        self._arena_height = float(arena_height)
        self._physics = physics
        self.rocket = rocket

    # ========== PROPERTY ACCESS ==========
    @property
    def planets(self) -> Tuple[Planet, ...]:
        return self._planets

    @property
    def start(self) -> Planet:
        return self._start

    @property
    def end(self) -> Planet:
        return self._end

    @property
    def arena_width(self) -> float:
        return self._arena_width

    @property
    def arena_height(self) -> float:
        return self._arena_height

    @property
    def arena_area(self) -> float:
        return self._arena_width * self._arena_height

    @property
    def physics(self) -> PhysicsParams:
        return self._physics

    @property
    def obstacles(self) -> Tuple[Planet, ...]:
        return tuple(p for p in self._planets if p.role == PlanetRole.OBSTACLE)

    # ========== DERIVED VALUES ==========
    def distance_to_end(self) -> float:
        """Centre-to-centre distance between the rocket and the end planet."""
        return self.rocket.position.distance_to(self._end.position)

    def contains(self, point: Vector2) -> bool:
        """True if ``point`` lies inside the arena, edges included."""
        return (0.0 <= point.x <= self._arena_width
                and 0.0 <= point.y <= self._arena_height)

    def occupied_area(self) -> float:
        return sum(p.area for p in self._planets)

    def hud(self) -> Hud:
        return Hud(
            speed=self.rocket.speed,
            distance_to_end=self.distance_to_end(),
            fuel=self.rocket.fuel,
        )

    # ========== ROCKET PLACEMENT ==========
    def spawn_rocket(self, rng: Optional[np.random.Generator] = None,
                     angle: Optional[float] = None) -> Rocket:
        """
        Place a fresh rocket on the start planet's surface.

        The rocket sits ``config.SPAWN_MARGIN`` beyond contact distance at a
        uniformly random bearing, at rest, nose pointing away from the planet,
        with a full tank.

        A bearing that would put the rocket outside the arena is
        replaced by the bearing towards the arena centre, so the first frame
        never wraps it to the opposite edge.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Source of the random bearing (default: fresh unseeded generator)
        angle : float, optional
            Fixed bearing [rad], overrides ``rng``

        Returns
        -------
        Rocket
            The new rocket, also stored on the world
        """
        if angle is None:
            rng = rng if rng is not None else np.random.default_rng()
            angle = float(rng.uniform(0.0, 2 * math.pi))
        distance = self._start.radius + self._physics.rocket_radius + config.SPAWN_MARGIN
        if not self.contains(self._start.position + Vector2.from_angle(angle, distance)):
            to_center = Vector2(self._arena_width / 2, self._arena_height / 2) - self._start.position
            angle = math.atan2(to_center.y, to_center.x)
        position = self._start.position + Vector2.from_angle(angle, distance)
        self.rocket = Rocket(
            position=position,
            angle=angle + math.pi / 2,
            angular_velocity=0.0,
            fuel=self._physics.max_fuel,
        )
        return self.rocket

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        return (f"World({len(self._planets)} planets, "
                f"arena={self._arena_width:g}x{self._arena_height:g}, "
                f"rocket={self.rocket!r})")
