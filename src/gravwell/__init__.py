"""
Gravwell: 2D Orbital Arcade Simulation Core

A Python package for a frame-driven rocket-and-planets game: procedural
world generation, Newtonian gravity with thrust and fuel, collision
resolution, and a timer-driven round lifecycle, all independent of any
rendering or input layer.
"""

# Configuration
from .config import config, temp_config

# Core value types
from .vector import Vector2, Vector2 as Vec
from .params import PhysicsParams, SizeParams
from .body import Planet, PlanetRole, Rocket
from .world import World, Hud

# Simulation
from .generator import generate_world, place_planets, farthest_pair
from .physics import ControlIntent, IDLE, step, StepResult
from .collision import CollisionOutcome, Contact, check_collisions
from .events import Event, EventLog, EventType
from .state import GameState, Trigger, transition
from .timers import Scheduler, TimerHandle
from .session import GameSession, TickResult
from .flight_log import FlightLog

# Presets and factories
from .defaults import (ARCADE_PHYSICS, CLASSIC_PHYSICS, DEFAULT_SIZES,
                       COMPACT_SIZES, DEFAULT_KEY_BINDINGS,
                       arcade_session, classic_session)

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from gravwell import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "Vector2",
    "PhysicsParams",
    "SizeParams",
    "Planet",
    "PlanetRole",
    "Rocket",
    "World",
    "Hud",
    "ControlIntent",
    "StepResult",
    "CollisionOutcome",
    "Contact",
    "Event",
    "EventLog",
    "EventType",
    "GameState",
    "Trigger",
    "Scheduler",
    "TimerHandle",
    "GameSession",
    "TickResult",
    "FlightLog",
    # Abbreviations
    "Vec",
    # Functions
    "generate_world",
    "place_planets",
    "farthest_pair",
    "step",
    "check_collisions",
    "transition",
    "arcade_session",
    "classic_session",
    # Constants
    "IDLE",
    "ARCADE_PHYSICS",
    "CLASSIC_PHYSICS",
    "DEFAULT_SIZES",
    "COMPACT_SIZES",
    "DEFAULT_KEY_BINDINGS",
]
