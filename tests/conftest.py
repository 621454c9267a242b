"""Shared fixtures for the gravwell test suite."""

import pytest
from gravwell import (
    ARCADE_PHYSICS, Planet, PlanetRole, Rocket, Vector2, World, config
)


class FakeClock:
    """Manually advanced time source for sessions."""

    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t

    def advance(self, dt):
        self.t += dt
        return self.t


@pytest.fixture(autouse=True)
def restore_config():
    """Undo any global config changes a test makes."""
    yield
    config.reset()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def build_world():
    """Factory for hand-placed worlds: planet i=start, planet j=end."""
    def _build(planets, rocket, physics=ARCADE_PHYSICS, arena=(800.0, 600.0),
               start=0, end=1):
        planets = list(planets)
        planets[start] = planets[start].with_role(PlanetRole.START)
        planets[end] = planets[end].with_role(PlanetRole.END)
        return World(planets, planets[start], planets[end], rocket,
                     arena[0], arena[1], physics)
    return _build


@pytest.fixture
def two_planets():
    """A big planet mid-arena and a small far-away one."""
    return [
        Planet(Vector2(400, 300), 50.0, 25000.0),
        Planet(Vector2(100, 100), 20.0, 4000.0),
    ]


def make_rocket(x, y, vx=0.0, vy=0.0, angle=0.0, fuel=10.0, angular_velocity=0.0):
    return Rocket(Vector2(x, y), Vector2(vx, vy), angle=angle,
                  angular_velocity=angular_velocity, fuel=fuel)


@pytest.fixture
def rocket_at():
    return make_rocket
