"""
Core dataclasses for simulation parameters.

This module defines immutable dataclasses for the physical constants that
drive a round and for the size/spacing rules used when generating planets.
All values are in engine units (pixels, seconds, engine-scaled mass), not SI.
"""
import math
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PhysicsParams:
    """
    Immutable physical constants for one game configuration.

    Attributes
    ----------
    G : float
        Gravitational constant, engine-scaled
    rocket_mass : float
        Rocket mass
    thrust : float
        Force applied by the main engine in either direction
    torque : float
        Angular increment per frame while a turn intent is held [rad]
    planet_density : float
        Planet mass per unit squared radius (mass = density * radius^2)
    rocket_radius : float
        Rocket collision radius
    max_fuel : float
        Fuel capacity, the fuel level at spawn
    fuel_consumption_thrust : float
        Fuel burned per second per active thrust intent
    fuel_consumption_turn : float
        Fuel burned per second while turning
    friction : float
        Velocity damping applied on a soft bounce, in [0, 1)
    collision_threshold : float
        Impact force (|v| * rocket_mass) above which a collision destroys
        the rocket. ``math.inf`` disables destruction.
    """
    G: float
    rocket_mass: float
    thrust: float
    torque: float
    planet_density: float
    rocket_radius: float
    max_fuel: float
    fuel_consumption_thrust: float
    fuel_consumption_turn: float
    friction: float
    collision_threshold: float

    def __post_init__(self):
        #Validate parameters
        if self.G < 0:
            raise ValueError(f"Gravitational constant must be non-negative, got {self.G}")
        if self.rocket_mass <= 0:
            raise ValueError(f"Rocket mass must be positive, got {self.rocket_mass}")
        if self.thrust < 0:
            raise ValueError(f"Thrust must be non-negative, got {self.thrust}")
        if self.torque < 0:
            raise ValueError(f"Torque must be non-negative, got {self.torque}")
        if self.planet_density <= 0:
            raise ValueError(f"Planet density must be positive, got {self.planet_density}")
        if self.rocket_radius <= 0:
            raise ValueError(f"Rocket radius must be positive, got {self.rocket_radius}")
        if self.max_fuel < 0:
            raise ValueError(f"Fuel capacity must be non-negative, got {self.max_fuel}")
        if self.fuel_consumption_thrust < 0 or self.fuel_consumption_turn < 0:
            raise ValueError("Fuel consumption rates must be non-negative")
        if not 0 <= self.friction < 1:
            raise ValueError(f"Friction must be in [0, 1), got {self.friction}")
        if not self.collision_threshold > 0:
            raise ValueError(
                f"Collision threshold must be positive, got {self.collision_threshold}"
            )

    @property
    def destructible(self) -> bool:
        """False when no impact can ever destroy the rocket."""
        return math.isfinite(self.collision_threshold)

    def with_changes(self, **changes) -> "PhysicsParams":
        """Return a copy with some constants replaced (validated again)."""
        return replace(self, **changes)


@dataclass(frozen=True)
class SizeParams:
    """
    Immutable planet size and spacing rules for world generation.

    Attributes
    ----------
    min_radius : float
        Smallest planet radius
    max_radius : float
        Largest planet radius, before the area cap is applied
    min_spacing : float
        Minimum surface-to-surface gap between any two planets
    max_area_fraction : float
        Upper bound on the fraction of arena area covered by planets
    """
    min_radius: float
    max_radius: float
    min_spacing: float
    max_area_fraction: float

    def __post_init__(self):
        """Validate parameters."""
        if self.min_radius <= 0:
            raise ValueError(f"Minimum radius must be positive, got {self.min_radius}")
        if self.max_radius < self.min_radius:
            raise ValueError(
                f"Maximum radius ({self.max_radius}) must be >= "
                f"minimum radius ({self.min_radius})"
            )
        if self.min_spacing < 0:
            raise ValueError(f"Minimum spacing must be non-negative, got {self.min_spacing}")
        if not 0 < self.max_area_fraction <= 1:
            raise ValueError(
                f"Area fraction must be in (0, 1], got {self.max_area_fraction}"
            )

    def with_changes(self, **changes) -> "SizeParams":
        return replace(self, **changes)
