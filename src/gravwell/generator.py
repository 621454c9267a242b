"""
Procedural world generation
===========================

Places N non-overlapping circular planets in a rectangular arena, labels the
mutually farthest pair as start and end, and spawns the rocket on the start
planet.

Placement is rejection sampling with an explicit budget. When a planet cannot
be placed within ``config.MAX_PLACEMENT_ATTEMPTS`` samples, the required
spacing is relaxed by ``config.SPACING_RELAX_FACTOR`` and drops to zero halfway
through ``config.MAX_RELAXATION_ROUNDS``; the remaining rounds shrink the
planet's radius by ``config.RADIUS_SHRINK_FACTOR``. When the budget runs out
the candidate with the largest clearance seen is used, with its radius cut
back so it only touches its nearest neighbour. Generation therefore always
terminates, and every relaxation is reported with a ``UserWarning``.

Examples
--------
>>> import numpy as np
>>> from gravwell import generate_world, DEFAULT_SIZES
>>> world = generate_world(4, 800, 600, DEFAULT_SIZES, rng=np.random.default_rng(7))
>>> len(world.planets)
4
"""

import logging
import math
import warnings
from typing import List, Optional, Tuple

import numpy as np

from .body import Planet, PlanetRole
from .config import config
from .params import PhysicsParams, SizeParams
from .utils import validation_error
from .vector import Vector2
from .world import World

logger = logging.getLogger(__name__)


def clamp_max_radius(planet_count: int, arena_width: float, arena_height: float,
                     sizes: SizeParams) -> Tuple[float, float]:
    """
    Radius bounds that keep total planet area under the configured cap.

    ``max_radius`` is lowered to ``sqrt(max_area_fraction * area / (n * pi))``
    so that n planets of that radius cover at most the allowed fraction of
    the arena. ``min_radius`` follows it down if needed.

    Returns
    -------
    tuple of float
        (min_radius, max_radius)
    """
    area = arena_width * arena_height
    cap = math.sqrt(sizes.max_area_fraction * area / (planet_count * math.pi))
    max_radius = min(sizes.max_radius, cap)
    min_radius = min(sizes.min_radius, max_radius)
    return min_radius, max_radius


def _clearances(candidates: np.ndarray, radius: float,
                centers: np.ndarray, radii: np.ndarray) -> np.ndarray:
    """Smallest surface gap from each candidate to any placed planet."""
    if len(centers) == 0:
        return np.full(len(candidates), np.inf)
    diff = candidates[:, None, :] - centers[None, :, :]
    dist = np.hypot(diff[..., 0], diff[..., 1])
    gaps = dist - radius - radii[None, :]
    return gaps.min(axis=1)


def place_planets(
    planet_count: int,
    arena_width: float,
    arena_height: float,
    sizes: SizeParams,
    density: float,
    rng: np.random.Generator,
) -> List[Planet]:
    """
    Place ``planet_count`` planets by budgeted rejection sampling.

    Parameters
    ----------
    planet_count : int
        Number of planets
    arena_width, arena_height : float
        Arena extents
    sizes : SizeParams
        Radius bounds, spacing and area cap
    density : float
        Planet density, mass = density * radius^2
    rng : numpy.random.Generator
        Random stream; the only source of nondeterminism

    Returns
    -------
    list of Planet
        Planets in placement order, all with role OBSTACLE
    """
    min_radius, max_radius = clamp_max_radius(planet_count, arena_width,
                                              arena_height, sizes)
    attempts = max(int(config.MAX_PLACEMENT_ATTEMPTS), 1)
    rounds = max(int(config.MAX_RELAXATION_ROUNDS), 0)
    # spacing reaches zero halfway through the budget, radius shrinks after
    spacing_rounds = rounds // 2

    centers = np.empty((0, 2))
    radii = np.empty(0)
    planets: List[Planet] = []

    for index in range(planet_count):
        radius = float(rng.uniform(min_radius, max_radius))
        # a planet must fit inside the arena at all
        radius = min(radius, arena_width / 2, arena_height / 2)
        spacing = sizes.min_spacing
        best_position = None
        best_clearance = -np.inf

        for relax_round in range(rounds + 1):
            xs = rng.uniform(radius, arena_width - radius, size=attempts)
            ys = rng.uniform(radius, arena_height - radius, size=attempts)
            candidates = np.column_stack((xs, ys))
            clearances = _clearances(candidates, radius, centers, radii)

            accepted = np.flatnonzero(clearances >= spacing)
            if len(accepted) > 0:
                chosen = candidates[accepted[0]]
                break

            k = int(np.argmax(clearances))
            if clearances[k] > best_clearance:
                best_clearance = float(clearances[k])
                best_position = candidates[k]

            if relax_round == rounds:
                chosen = best_position
                if best_clearance < 0 and radius + best_clearance > 0:
                    # shrink until the planet just touches its nearest neighbour
                    radius += best_clearance
                    best_clearance = 0.0
                message = (
                    f"Planet {index} could not be placed after {rounds} "
                    f"relaxation rounds; using best candidate with radius "
                    f"{radius:.2f} and clearance {best_clearance:.2f}"
                )
                logger.warning(message)
                warnings.warn(message, UserWarning, stacklevel=2)
                break

            # relax spacing first, then shrink the planet
            if spacing > 0.0:
                spacing *= config.SPACING_RELAX_FACTOR
                if relax_round + 1 >= spacing_rounds:
                    spacing = 0.0
                what = f"spacing relaxed to {spacing:.2f}"
            else:
                radius *= config.RADIUS_SHRINK_FACTOR
                best_position = None
                best_clearance = -np.inf
                what = f"radius shrunk to {radius:.2f}"
            message = (f"Planet {index}: no position found in {attempts} attempts, "
                       f"{what}")
            logger.warning(message)
            warnings.warn(message, UserWarning, stacklevel=2)

        planet = Planet.from_density(Vector2(chosen[0], chosen[1]), radius, density)
        planets.append(planet)
        centers = np.vstack((centers, chosen))
        radii = np.append(radii, radius)

    return planets


def farthest_pair(planets) -> Tuple[int, int]:
    """
    Indices (i, j), i < j, of the two planets whose centres are farthest apart.

    Ties resolve to the first pair in row-major scan order.
    """
    n = len(planets)
    if n < 2:
        raise ValueError(f"Need at least 2 planets, got {n}")
    centers = np.array([p.position.to_tuple() for p in planets])
    diff = centers[:, None, :] - centers[None, :, :]
    dist = np.hypot(diff[..., 0], diff[..., 1])
    upper = np.triu(np.ones((n, n), dtype=bool), k=1)
    masked = np.where(upper, dist, -1.0)
    # argmax returns the first maximum in row-major order
    i, j = divmod(int(np.argmax(masked)), n)
    return i, j


def generate_world(
    planet_count: int,
    arena_width: float,
    arena_height: float,
    sizes: Optional[SizeParams] = None,
    physics: Optional[PhysicsParams] = None,
    rng: Optional[np.random.Generator] = None,
) -> World:
    """
    Generate a new round: planets, start/end selection and rocket spawn.

    Parameters
    ----------
    planet_count : int
        Number of planets, at least ``config.MIN_PLANET_COUNT``
    arena_width, arena_height : float
        Arena extents
    sizes : SizeParams, optional
        Default: ``gravwell.defaults.DEFAULT_SIZES``
    physics : PhysicsParams, optional
        Default: ``gravwell.defaults.ARCADE_PHYSICS``
    rng : numpy.random.Generator, optional
        Random stream (default: fresh unseeded generator)

    Returns
    -------
    World
        New world with the rocket placed on the start planet

    Raises
    ------
    ValueError
        If planet_count or arena extents are invalid (strict validation)
    """
    from .defaults import ARCADE_PHYSICS, DEFAULT_SIZES
    sizes = sizes if sizes is not None else DEFAULT_SIZES
    physics = physics if physics is not None else ARCADE_PHYSICS
    rng = rng if rng is not None else np.random.default_rng()

    if arena_width <= 0 or arena_height <= 0:
        raise ValueError(
            f"Arena extents must be positive, got {arena_width} x {arena_height}"
        )
    planet_count = int(planet_count)
    if planet_count < config.MIN_PLANET_COUNT:
        validation_error(
            f"planet_count must be at least {config.MIN_PLANET_COUNT}, "
            f"got {planet_count}"
        )
        planet_count = config.MIN_PLANET_COUNT

    planets = place_planets(planet_count, arena_width, arena_height, sizes,
                            physics.planet_density, rng)
    i, j = farthest_pair(planets)
    planets[i] = planets[i].with_role(PlanetRole.START)
    planets[j] = planets[j].with_role(PlanetRole.END)

    world = World(planets, planets[i], planets[j], rocket=None,
                  arena_width=arena_width, arena_height=arena_height,
                  physics=physics)
    world.spawn_rocket(rng)
    logger.debug("Generated world with %d planets (start=%d, end=%d)",
                 planet_count, i, j)
    return world
