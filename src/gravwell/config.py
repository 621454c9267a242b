"""
Global Configuration for Gravwell Package
=========================================

This module provides package-wide configuration settings that users can modify
to control numerical tolerances, validation behavior, round timing, world
generation retry budgets and default plotting options.

Domain constants (gravitational scale, thrust, fuel, friction...) are *not*
stored here; they travel explicitly with each world as
:class:`gravwell.params.PhysicsParams` and :class:`gravwell.params.SizeParams`.

Examples
--------
View current configuration:

>>> import gravwell
>>> print(gravwell.config)

Modify settings:

>>> gravwell.config.EXPLOSION_DURATION = 3.0  # Longer explosion animation
>>> gravwell.config.MAX_PLANET_COUNT = 12

Reset to defaults:

>>> gravwell.config.reset()

Temporarily modify settings:

>>> with gravwell.temp_config(STRICT_VALIDATION=False):
...     # Invalid inputs warn instead of raising inside this block
...     session.tick(intent, now=earlier_time)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager
import math


@dataclass
class GravwellConfig:
    """
    Global configuration for Gravwell package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for Vector2 equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for Vector2 equality comparisons.
        Default: 1e-12
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings and a sanitized
        value is used instead.
        Default: True
    GRAVITY_EPSILON_SQ : float
        Squared rocket-planet distance below which a planet exerts no force.
        Guards the 1/r^2 singularity at a planet's centre.
        Default: 10.0
    VICTORY_EPSILON : float
        Extra distance beyond contact within which the end planet counts
        as reached.
        Default: 0.1
    EXPLOSION_DURATION : float
        Seconds between a destructive impact and the automatic round reset.
        Default: 2.0
    MESSAGE_DURATION : float
        Seconds a HUD message stays visible before it is cleared.
        Default: 3.0
    SPAWN_MARGIN : float
        Gap between the start planet's surface and the rocket's edge at spawn.
        Default: 5.0
    MAX_PLACEMENT_ATTEMPTS : int
        Position samples tried for one planet before the spacing is relaxed.
        Default: 500
    MAX_RELAXATION_ROUNDS : int
        Relaxation rounds before a planet is placed at the best candidate
        seen. The first half relax the spacing down to zero, the rest
        shrink the radius.
        Default: 12
    SPACING_RELAX_FACTOR : float
        Multiplier applied to the spacing at each relaxation round.
        Default: 0.5
    RADIUS_SHRINK_FACTOR : float
        Multiplier applied to the radius once spacing is exhausted.
        Default: 0.85
    MAX_EVENT_HISTORY : int
        Events a session keeps for incremental reads; older ones are dropped.
        Default: 1000
    MIN_PLANET_COUNT, MAX_PLANET_COUNT, DEFAULT_PLANET_COUNT : int
        Bounds and default for the difficulty level (planets per round).
        Defaults: 2, 10, 2
    DEFAULT_PLOT_POINTS : int
        Maximum number of flight log samples drawn by plotting helpers.
        Default: 2000
    DEFAULT_PATH_COLOR : str
        Default color for flight paths in plots.
        Default: 'white'
    DEFAULT_BACKGROUND_COLOR : str
        Default plot background.
        Default: '#0b1020'
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-12

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Physics guards
    GRAVITY_EPSILON_SQ: float = 10.0
    VICTORY_EPSILON: float = 0.1

    # Round timing [s]
    EXPLOSION_DURATION: float = 2.0
    MESSAGE_DURATION: float = 3.0

    # Spawning and generation
    SPAWN_MARGIN: float = 5.0
    MAX_PLACEMENT_ATTEMPTS: int = 500
    MAX_RELAXATION_ROUNDS: int = 12
    SPACING_RELAX_FACTOR: float = 0.5
    RADIUS_SHRINK_FACTOR: float = 0.85

    # Event history
    MAX_EVENT_HISTORY: int = 1000

    # Difficulty
    MIN_PLANET_COUNT: int = 2
    MAX_PLANET_COUNT: int = 10
    DEFAULT_PLANET_COUNT: int = 2

    # Plotting defaults
    DEFAULT_PLOT_POINTS: int = 2000
    DEFAULT_PATH_COLOR: str = 'white'
    DEFAULT_BACKGROUND_COLOR: str = '#0b1020'

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Compute hash rounding decimals from equality tolerance.

        The hash rounding must be coarse enough that if two values
        are equal (within EQUALITY_ATOL), they hash to the same value.

        Formula: HASH_DECIMALS = -floor(log10(ATOL)) - 2

        Returns
        -------
        int
            Number of decimal places for hash rounding
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import gravwell
        >>> gravwell.config.EXPLOSION_DURATION = 5.0  # Modify
        >>> gravwell.config.reset()  # Back to defaults
        >>> gravwell.config.EXPLOSION_DURATION
        2.0
        """
        defaults = GravwellConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["GravwellConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    HASH_DECIMALS = {self.HASH_DECIMALS}")
        lines.append("  Physics Guards:")
        lines.append(f"    GRAVITY_EPSILON_SQ = {self.GRAVITY_EPSILON_SQ}")
        lines.append(f"    VICTORY_EPSILON = {self.VICTORY_EPSILON}")
        lines.append("  Timing:")
        lines.append(f"    EXPLOSION_DURATION = {self.EXPLOSION_DURATION}")
        lines.append(f"    MESSAGE_DURATION = {self.MESSAGE_DURATION}")
        lines.append("  Generation:")
        lines.append(f"    SPAWN_MARGIN = {self.SPAWN_MARGIN}")
        lines.append(f"    MAX_PLACEMENT_ATTEMPTS = {self.MAX_PLACEMENT_ATTEMPTS}")
        lines.append(f"    MAX_RELAXATION_ROUNDS = {self.MAX_RELAXATION_ROUNDS}")
        lines.append(f"    SPACING_RELAX_FACTOR = {self.SPACING_RELAX_FACTOR}")
        lines.append(f"    RADIUS_SHRINK_FACTOR = {self.RADIUS_SHRINK_FACTOR}")
        lines.append("  Events:")
        lines.append(f"    MAX_EVENT_HISTORY = {self.MAX_EVENT_HISTORY}")
        lines.append("  Difficulty:")
        lines.append(f"    MIN_PLANET_COUNT = {self.MIN_PLANET_COUNT}")
        lines.append(f"    MAX_PLANET_COUNT = {self.MAX_PLANET_COUNT}")
        lines.append(f"    DEFAULT_PLANET_COUNT = {self.DEFAULT_PLANET_COUNT}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_PLOT_POINTS = {self.DEFAULT_PLOT_POINTS}")
        lines.append(f"    DEFAULT_PATH_COLOR = '{self.DEFAULT_PATH_COLOR}'")
        lines.append(f"    DEFAULT_BACKGROUND_COLOR = '{self.DEFAULT_BACKGROUND_COLOR}'")
        return "\n".join(lines)


# Global configuration instance
config = GravwellConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import gravwell
    >>> with gravwell.temp_config(EXPLOSION_DURATION=0.5):
    ...     session.tick(intent)  # explosions reset after half a second
    >>> # Original config restored here
    >>> gravwell.config.EXPLOSION_DURATION
    2.0

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"GravwellConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
