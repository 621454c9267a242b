"""
Test suite for per-frame physics.

Tests cover:
- Control intents and key mapping
- Gravity accumulation and the near-centre guard
- Engine force, turning and fuel accounting
- Kinematic integration and the radial clamp
- Arena wrap
- Full frame steps: determinism, scenarios and validation
"""

import math

import pytest
from gravwell import (
    ARCADE_PHYSICS, IDLE, ControlIntent, EventType, Planet, Vector2, step,
    temp_config
)
from gravwell.collision import CollisionOutcome
from gravwell.physics import (
    apply_controls, gravity_force, integrate, wrap_position
)

FORWARD = ControlIntent(thrust_forward=True)


class TestControlIntent:
    """Device-independent control flags."""

    def test_idle(self):
        assert not IDLE.any
        assert FORWARD.any

    def test_from_keys_default_bindings(self):
        intent = ControlIntent.from_keys({'ArrowUp', 'ArrowLeft', 'Space'})
        assert intent == ControlIntent(thrust_forward=True, turn_left=True)

    def test_from_keys_custom_bindings(self):
        bindings = {'forward': 'w', 'backward': 's', 'left': 'a', 'right': 'd'}
        intent = ControlIntent.from_keys(['d', 's'], bindings)
        assert intent == ControlIntent(thrust_backward=True, turn_right=True)

    def test_from_keys_unknown_action(self):
        with pytest.raises(ValueError, match="Unknown action"):
            ControlIntent.from_keys([], {'jump': 'Space'})


class TestGravity:
    """gravity_force."""

    def test_magnitude_and_direction(self):
        """G * m * M / d^2 toward the planet."""
        params = ARCADE_PHYSICS.with_changes(G=1.0)
        planets = [Planet(Vector2(100, 0), 10.0, 1000.0)]
        f = gravity_force(Vector2(0, 0), planets, params)
        assert f.x == pytest.approx(0.1)
        assert f.y == pytest.approx(0.0)

    def test_superposition(self):
        """Equal planets on opposite sides cancel."""
        planets = [Planet(Vector2(-50, 0), 10.0, 500.0),
                   Planet(Vector2(50, 0), 10.0, 500.0)]
        f = gravity_force(Vector2(0, 0), planets, ARCADE_PHYSICS)
        assert f.magnitude() == pytest.approx(0.0, abs=1e-9)

    def test_near_centre_skipped(self):
        """Planets within the epsilon distance exert no force."""
        planets = [Planet(Vector2(1, 1), 10.0, 1e6)]
        assert gravity_force(Vector2(0, 0), planets, ARCADE_PHYSICS) == Vector2.zero()

    def test_zero_G(self):
        params = ARCADE_PHYSICS.with_changes(G=0.0)
        planets = [Planet(Vector2(100, 0), 10.0, 1000.0)]
        assert gravity_force(Vector2(0, 0), planets, params) == Vector2.zero()


class TestControls:
    """apply_controls: thrust, turning, fuel."""

    def test_forward_thrust_along_heading(self, rocket_at):
        rocket = rocket_at(0, 0, angle=0.0, fuel=10.0)
        force, depleted = apply_controls(rocket, FORWARD, ARCADE_PHYSICS, 0.1)
        assert force.x == pytest.approx(0.0, abs=1e-9)
        assert force.y == pytest.approx(-500.0)
        assert rocket.fuel == pytest.approx(10.0 - 0.5 * 0.1)
        assert not depleted

    def test_backward_thrust(self, rocket_at):
        rocket = rocket_at(0, 0, angle=math.pi / 2, fuel=10.0)
        force, _ = apply_controls(rocket, ControlIntent(thrust_backward=True),
                                  ARCADE_PHYSICS, 0.1)
        assert force.x == pytest.approx(-500.0)

    def test_forward_and_backward_cancel(self, rocket_at):
        """Both engines cancel but both burn fuel."""
        rocket = rocket_at(0, 0, fuel=10.0)
        intent = ControlIntent(thrust_forward=True, thrust_backward=True)
        force, _ = apply_controls(rocket, intent, ARCADE_PHYSICS, 1.0)
        assert force.magnitude() == pytest.approx(0.0, abs=1e-9)
        assert rocket.fuel == pytest.approx(9.0)

    def test_turn_left_and_right(self, rocket_at):
        rocket = rocket_at(0, 0, fuel=10.0)
        apply_controls(rocket, ControlIntent(turn_left=True), ARCADE_PHYSICS, 1.0)
        assert rocket.angular_velocity == -ARCADE_PHYSICS.torque
        assert rocket.fuel == pytest.approx(9.9)
        apply_controls(rocket, ControlIntent(turn_right=True), ARCADE_PHYSICS, 1.0)
        assert rocket.angular_velocity == ARCADE_PHYSICS.torque

    def test_left_wins_when_both_held(self, rocket_at):
        rocket = rocket_at(0, 0, fuel=10.0)
        apply_controls(rocket, ControlIntent(turn_left=True, turn_right=True),
                       ARCADE_PHYSICS, 1.0)
        assert rocket.angular_velocity == -ARCADE_PHYSICS.torque
        assert rocket.fuel == pytest.approx(9.9)

    def test_no_turn_stops_rotation(self, rocket_at):
        rocket = rocket_at(0, 0, fuel=10.0, angular_velocity=0.05)
        apply_controls(rocket, IDLE, ARCADE_PHYSICS, 1.0)
        assert rocket.angular_velocity == 0.0
        assert rocket.fuel == 10.0

    def test_fuel_never_negative(self, rocket_at):
        rocket = rocket_at(0, 0, fuel=0.01)
        apply_controls(rocket, FORWARD, ARCADE_PHYSICS, 1.0)
        assert rocket.fuel == 0.0

    def test_fuel_monotonic_under_thrust(self, rocket_at):
        """Fuel never increases while intents burn it."""
        rocket = rocket_at(0, 0, fuel=1.0)
        intent = ControlIntent(thrust_forward=True, turn_right=True)
        levels = [rocket.fuel]
        for _ in range(50):
            apply_controls(rocket, intent, ARCADE_PHYSICS, 1 / 30)
            levels.append(rocket.fuel)
        assert all(b <= a for a, b in zip(levels, levels[1:]))
        assert levels[-1] >= 0.0

    def test_empty_tank(self, rocket_at):
        """No thrust, no turning, depleted flag set."""
        rocket = rocket_at(0, 0, fuel=0.0, angular_velocity=0.05)
        force, depleted = apply_controls(
            rocket, ControlIntent(thrust_forward=True, turn_left=True),
            ARCADE_PHYSICS, 0.1)
        assert force == Vector2.zero()
        assert rocket.angular_velocity == 0.0
        assert depleted


class TestIntegrate:
    """Kinematic update."""

    def test_full_kinematics(self, rocket_at):
        """x += v*dt + a*dt^2/2 and v += a*dt."""
        rocket = rocket_at(0, 0, vx=1.0)
        integrate(rocket, Vector2(2, 0), ARCADE_PHYSICS, 0.5)
        assert rocket.position.x == pytest.approx(0.75)
        assert rocket.velocity.x == pytest.approx(2.0)
        assert rocket.acceleration == Vector2(2, 0)

    def test_mass_divides_force(self, rocket_at):
        params = ARCADE_PHYSICS.with_changes(rocket_mass=4.0)
        rocket = rocket_at(0, 0)
        integrate(rocket, Vector2(8, 0), params, 1.0)
        assert rocket.acceleration == Vector2(2, 0)

    def test_angle_not_scaled_by_dt(self, rocket_at):
        rocket = rocket_at(0, 0, angle=1.0, angular_velocity=0.05)
        integrate(rocket, Vector2.zero(), ARCADE_PHYSICS, 0.25)
        assert rocket.angle == pytest.approx(1.05)

    def test_radial_clamp_inside_planet(self, rocket_at):
        """Inward velocity and acceleration are removed while overlapping."""
        planet = Planet(Vector2(0, 0), 50.0, 1.0)
        rocket = rocket_at(55, 0, vx=-10.0, vy=3.0)
        integrate(rocket, Vector2(-5, 0), ARCADE_PHYSICS, 1.0, [planet])
        assert rocket.acceleration == Vector2(0, 0)
        assert rocket.velocity == Vector2(0, 3)
        assert rocket.position == Vector2(55, 3)

    def test_radial_clamp_keeps_outward_motion(self, rocket_at):
        planet = Planet(Vector2(0, 0), 50.0, 1.0)
        rocket = rocket_at(55, 0, vx=4.0)
        integrate(rocket, Vector2.zero(), ARCADE_PHYSICS, 1.0, [planet])
        assert rocket.velocity == Vector2(4, 0)

    def test_no_clamp_outside(self, rocket_at):
        planet = Planet(Vector2(0, 0), 50.0, 1.0)
        rocket = rocket_at(100, 0, vx=-10.0)
        integrate(rocket, Vector2.zero(), ARCADE_PHYSICS, 1.0, [planet])
        assert rocket.velocity == Vector2(-10, 0)


class TestWrap:
    """Toroidal arena edges."""

    @pytest.mark.parametrize("pos,expected", [
        ((-1, 50), (800, 50)),
        ((801, 50), (0, 50)),
        ((50, -0.5), (50, 600)),
        ((50, 600.5), (50, 0)),
        ((-1, 601), (800, 0)),
    ])
    def test_wrap(self, pos, expected):
        assert wrap_position(Vector2(*pos), 800, 600) == Vector2(*expected)

    def test_inside_unchanged(self):
        v = Vector2(0, 600)
        assert wrap_position(v, 800, 600) is v


class TestStep:
    """Full frames."""

    def test_stationary_without_gravity(self, build_world, two_planets, rocket_at):
        """At rest beside a planet with G = 0, nothing moves."""
        params = ARCADE_PHYSICS.with_changes(G=0.0)
        start = two_planets[0]
        x = start.position.x + start.radius + params.rocket_radius + 1
        world = build_world(two_planets, rocket_at(x, 300), physics=params)
        for _ in range(30):
            result = step(world, IDLE, 1 / 60)
            assert result.events == ()
        assert world.rocket.position == Vector2(x, 300)
        assert world.rocket.velocity == Vector2.zero()

    def test_gravity_pulls_toward_planet(self, build_world, two_planets, rocket_at):
        world = build_world(two_planets, rocket_at(520, 300))
        step(world, IDLE, 1 / 60)
        assert world.rocket.velocity.x < 0

    def test_empty_tank_moves_under_gravity_only(self, build_world, two_planets,
                                                 rocket_at):
        """Thrust intent with no fuel: gravity-only motion and a depletion event."""
        world = build_world(two_planets, rocket_at(520, 300, fuel=0.0,
                                                   angular_velocity=0.05))
        reference = build_world(two_planets, rocket_at(520, 300, fuel=0.0))
        result = step(world, FORWARD, 1 / 60)
        step(reference, IDLE, 1 / 60)
        assert EventType.FUEL_DEPLETED in result.events
        assert world.rocket.angular_velocity == 0.0
        assert world.rocket.position == reference.rocket.position
        assert world.rocket.velocity == reference.rocket.velocity

    def test_depletion_repeats_every_frame(self, build_world, two_planets, rocket_at):
        world = build_world(two_planets, rocket_at(520, 300, fuel=0.0))
        for _ in range(3):
            assert step(world, IDLE, 1 / 60).events == (EventType.FUEL_DEPLETED,)

    def test_deterministic(self, build_world, two_planets, rocket_at):
        """Same world, intents and dts give the same state."""
        intents = [FORWARD, ControlIntent(turn_left=True), IDLE,
                   ControlIntent(thrust_forward=True, turn_right=True)] * 10
        worlds = [build_world(two_planets, rocket_at(600, 450, vx=20, vy=-5))
                  for _ in range(2)]
        for world in worlds:
            for intent in intents:
                step(world, intent, 1 / 60)
        assert worlds[0].rocket == worlds[1].rocket

    def test_wraps_at_edge(self, build_world, two_planets, rocket_at):
        params = ARCADE_PHYSICS.with_changes(G=0.0)
        world = build_world(two_planets, rocket_at(799, 500, vx=120), physics=params)
        step(world, IDLE, 1 / 60)
        assert world.rocket.position.x == 0.0

    def test_destroyed_on_hard_impact(self, build_world, two_planets, rocket_at):
        """Velocity (100, 0) into a planet above the threshold destroys the rocket."""
        params = ARCADE_PHYSICS.with_changes(collision_threshold=50.0)
        world = build_world(two_planets, rocket_at(339, 300, vx=100.0), physics=params)
        result = step(world, IDLE, 1 / 60)
        assert result.outcome is CollisionOutcome.DESTROYED
        assert result.events == (EventType.DESTROYED,)
        assert result.contact.impact_force > 50.0

    def test_victory(self, build_world, two_planets, rocket_at):
        params = ARCADE_PHYSICS.with_changes(G=0.0)
        end = two_planets[1]
        x = end.position.x + end.radius + params.rocket_radius + 0.05
        world = build_world(two_planets, rocket_at(x, end.position.y), physics=params)
        result = step(world, IDLE, 1 / 60)
        assert result.outcome is CollisionOutcome.VICTORY
        assert result.events == (EventType.VICTORY,)

    def test_zero_dt(self, build_world, two_planets, rocket_at):
        world = build_world(two_planets, rocket_at(520, 300, vx=5))
        step(world, FORWARD, 0.0)
        assert world.rocket.position == Vector2(520, 300)
        assert world.rocket.fuel == ARCADE_PHYSICS.max_fuel

    def test_negative_dt_rejected(self, build_world, two_planets, rocket_at):
        world = build_world(two_planets, rocket_at(520, 300))
        with pytest.raises(ValueError, match="dt"):
            step(world, IDLE, -0.1)

    def test_negative_dt_non_strict(self, build_world, two_planets, rocket_at):
        """Non-strict validation treats a bad dt as zero."""
        world = build_world(two_planets, rocket_at(520, 300, vx=5))
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="dt"):
                step(world, IDLE, -0.1)
        assert world.rocket.position == Vector2(520, 300)
