"""
Skirmish - a two-player tactical engine on a 7x7 grid.

Each side deploys a small army, secretly picks three support lines, then
the sides alternate turns moving, rotating and fighting until one army is
eliminated.

Quick Start:
    from skirmish import SkirmishEnv, create_default_scenario

    env = SkirmishEnv()
    state = env.reset(create_default_scenario(seed=42))
    # deploy, choose support lines, then play turns through env.move(),
    # env.rotate(), env.begin_attack()/resolve_attack() and env.end_turn()
"""

__version__ = "1.0.0"

# Main session interface
from .environment import ActionListReport, SkirmishEnv
from .state import GameState, serialize_for_side

# Scenario system
from .scenario import Scenario, create_default_scenario

# Core types available at package level
from .core import (
    Action,
    ActionType,
    Difficulty,
    Facing,
    IllegalOperation,
    Phase,
    RotateDir,
    Side,
    SupportAxis,
    TerminalState,
    UnitKind,
)

from .rendering import RenderStateBuilder

__all__ = [
    # Main interface
    "SkirmishEnv",
    "ActionListReport",
    "GameState",
    "serialize_for_side",

    # Scenario system
    "Scenario",
    "create_default_scenario",

    # Core types
    "Action",
    "ActionType",
    "Difficulty",
    "Facing",
    "IllegalOperation",
    "Phase",
    "RotateDir",
    "Side",
    "SupportAxis",
    "TerminalState",
    "UnitKind",

    # Rendering
    "RenderStateBuilder",
]
