"""
Default Parameters and Session Configurations
=============================================

Preset PhysicsParams and SizeParams, the default key bindings, and factory
functions for commonly-used game sessions. The factories create sessions on
demand; nothing is generated at import time.

Examples
--------
>>> from gravwell import arcade_session, classic_session
>>> session = arcade_session(seed=42)      # reference rules, 2 planets
>>> relaxed = classic_session(planet_count=5)  # bounces only, big tank
"""
import math

from .params import PhysicsParams, SizeParams

"""
Predefined physics presets
Engine units: pixels, seconds, engine-scaled masses
"""
# Reference rules: destructible rocket, friction-damped bounces, small tank
ARCADE_PHYSICS = PhysicsParams(
    G=6.6743e-11 * 1e12,
    rocket_mass=1.0,
    thrust=500.0,
    torque=0.05,
    planet_density=10.0,
    rocket_radius=10.0,
    max_fuel=10.0,
    fuel_consumption_thrust=0.5,
    fuel_consumption_turn=0.1,
    friction=0.3,
    collision_threshold=200.0,
)

# Forgiving rules: collisions never destroy, bounces halve the speed
CLASSIC_PHYSICS = ARCADE_PHYSICS.with_changes(
    max_fuel=500.0,
    friction=0.5,
    collision_threshold=math.inf,
)

"""
Predefined planet size rules
"""
DEFAULT_SIZES = SizeParams(
    min_radius=20.0,
    max_radius=80.0,
    min_spacing=150.0,
    max_area_fraction=0.5,
)

# Smaller, tighter planets for small arenas
COMPACT_SIZES = SizeParams(
    min_radius=10.0,
    max_radius=40.0,
    min_spacing=60.0,
    max_area_fraction=0.3,
)

"""
Default action -> key name mapping
"""
DEFAULT_KEY_BINDINGS = {
    'forward': 'ArrowUp',
    'backward': 'ArrowDown',
    'left': 'ArrowLeft',
    'right': 'ArrowRight',
}

DEFAULT_ARENA = (800.0, 600.0)


def arcade_session(planet_count=None, arena=DEFAULT_ARENA, seed=None, **kwargs):
    """
    Create a session with the reference arcade rules.

    Parameters
    ----------
    planet_count : int, optional
        Planets per round (default: config.DEFAULT_PLANET_COUNT)
    arena : tuple of float, optional
        (width, height), default 800 x 600
    seed : int, optional
        Seed for the session's random stream
    **kwargs
        Forwarded to GameSession (clock, record, sizes...)

    Returns
    -------
    GameSession
        Idle session with a generated world
    """
    from .session import GameSession
    return GameSession(planet_count=planet_count, arena_width=arena[0],
                       arena_height=arena[1], physics=ARCADE_PHYSICS,
                       seed=seed, **kwargs)


def classic_session(planet_count=None, arena=DEFAULT_ARENA, seed=None, **kwargs):
    """
    Create a session where collisions only bounce.

    Uses CLASSIC_PHYSICS: 500 units of fuel, friction 0.5, no destruction.

    Returns
    -------
    GameSession
        Idle session with a generated world
    """
    from .session import GameSession
    return GameSession(planet_count=planet_count, arena_width=arena[0],
                       arena_height=arena[1], physics=CLASSIC_PHYSICS,
                       seed=seed, **kwargs)
