"""
Bodies that take part in the simulation: planets and the rocket.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .vector import Vector2


# define an enumerated list of planet roles
class PlanetRole(Enum):
    START = 'start'         # rocket spawns on this planet
    END = 'end'             # target planet
    OBSTACLE = 'obstacle'   # plain attractor


ROLE_COLORS = {
    PlanetRole.START: '#fff73b',
    PlanetRole.END: '#e74a4a',
    PlanetRole.OBSTACLE: '#4a8fe7',
}


@dataclass(frozen=True)
class Planet:
    """
    Immutable circular gravity source.

    Attributes
    ----------
    position : Vector2
        Centre of the planet
    radius : float
        Planet radius, strictly positive
    mass : float
        Planet mass (density * radius^2 for generated planets)
    role : PlanetRole
        Start, end or plain obstacle
    color : str, optional
        Opaque display color; defaults to the role's color
    """
    position: Vector2
    radius: float
    mass: float
    role: PlanetRole = PlanetRole.OBSTACLE
    color: Optional[str] = None

    def __post_init__(self):
        #Validate parameters
        if not self.radius > 0:
            raise ValueError(f"Planet radius must be positive, got {self.radius}")
        if self.mass < 0:
            raise ValueError(f"Planet mass must be non-negative, got {self.mass}")
        if self.color is None:
            object.__setattr__(self, 'color', ROLE_COLORS[self.role])

    @classmethod
    def from_density(cls, position: Vector2, radius: float, density: float,
                     role: PlanetRole = PlanetRole.OBSTACLE) -> "Planet":
        """Create a planet whose mass is ``density * radius**2``."""
        return cls(position=position, radius=radius,
                   mass=density * radius * radius, role=role)

    @property
    def area(self) -> float:
        return math.pi * self.radius * self.radius

    def with_role(self, role: PlanetRole) -> "Planet":
        """Copy carrying a new role and that role's default color."""
        return Planet(self.position, self.radius, self.mass, role)


class Rocket:
    """
    Mutable state of the controllable body.

    Only the integrator, the collision resolver and the spawn logic write
    to a Rocket; everything else should treat it as read-only.

    Parameters
    ----------
    position : Vector2
        Centre of the rocket
    velocity : Vector2, optional
        Default: zero
    angle : float, optional
        Orientation [rad]. The engine pushes along (cos(angle - pi/2),
        sin(angle - pi/2)), so angle 0 points the nose toward -y.
    angular_velocity : float, optional
        Per-frame angle increment [rad]
    fuel : float, optional
        Remaining fuel, never negative
    """

    def __init__(
        self,
        position: Vector2,
        velocity: Optional[Vector2] = None,
        angle: float = 0.0,
        angular_velocity: float = 0.0,
        fuel: float = 0.0,
    ):
        if fuel < 0:
            raise ValueError(f"Fuel must be non-negative, got {fuel}")
        self.position = position
        self.velocity = velocity if velocity is not None else Vector2.zero()
        self.acceleration = Vector2.zero()
        self.angle = float(angle)
        self.angular_velocity = float(angular_velocity)
        self.fuel = float(fuel)

    @property
    def heading(self) -> Vector2:
        """Unit thrust axis for the current angle."""
        return Vector2.from_angle(self.angle - math.pi / 2)

    @property
    def speed(self) -> float:
        return self.velocity.magnitude()

    def copy(self) -> "Rocket":
        other = Rocket(self.position, self.velocity, self.angle,
                       self.angular_velocity, self.fuel)
        other.acceleration = self.acceleration
        return other

    def __repr__(self) -> str:
        return (f"Rocket(position=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"speed={self.speed:.2f}, angle={self.angle:.3f}, "
                f"fuel={self.fuel:.2f})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Rocket):
            return NotImplemented
        return (
            self.position == other.position and
            self.velocity == other.velocity and
            self.acceleration == other.acceleration and
            self.angle == other.angle and
            self.angular_velocity == other.angular_velocity and
            self.fuel == other.fuel
        )

    __hash__ = None
