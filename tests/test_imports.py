"""Smoke tests to verify package imports work."""

def test_package_imports():
    """Test that all main classes can be imported."""
    from gravwell import Vector2, World, GameSession, FlightLog
    assert Vector2 is not None
    assert World is not None
    assert GameSession is not None
    assert FlightLog is not None

def test_version_exists():
    """Test that version is defined."""
    import gravwell
    assert hasattr(gravwell, '__version__')
    assert gravwell.__version__ == "0.1.0"

def test_all_names_resolve():
    """Every name in __all__ is importable."""
    import gravwell
    for name in gravwell.__all__:
        assert hasattr(gravwell, name), name

def test_can_create_vector():
    """Test basic Vector2 creation."""
    from gravwell import Vec
    v = Vec(3, 4)
    assert v.magnitude() == 5.0

def test_can_generate_world():
    """Test basic world generation."""
    import numpy as np
    from gravwell import generate_world
    world = generate_world(2, 800, 600, rng=np.random.default_rng(0))
    assert len(world.planets) == 2

def test_can_create_session():
    """Test basic session creation."""
    from gravwell import arcade_session, GameState
    session = arcade_session(seed=1)
    assert session.state is GameState.IDLE
