import os
from typing import Annotated, List, Literal, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_ai import Agent

from agents.llm_agent.prompts.game_info import GAME_INFO

load_dotenv()

DEFAULT_MODEL = "openrouter:google/gemini-2.5-flash"


# --- Command definitions ---
class Coordinate(BaseModel):
    """A board tile, 1-based."""
    x: int = Field(ge=1, description="Column, 1 is the left edge")
    y: int = Field(ge=1, description="Row, 1 is the top edge")


class MoveCommand(BaseModel):
    """Move a unit to an orthogonally adjacent tile (or 2 tiles straight for cavalry)."""
    action_type: Literal["move"] = "move"
    unit_id: str = Field(description="ID of the unit to move")
    target: Coordinate = Field(description="Destination tile")


class RotateCommand(BaseModel):
    """Turn a unit to a new facing."""
    action_type: Literal["rotate"] = "rotate"
    unit_id: str = Field(description="ID of the unit to rotate")
    facing: Literal["NORTH", "EAST", "SOUTH", "WEST"] = Field(description="New facing")


class AttackCommand(BaseModel):
    """Attack the enemy unit standing on the target tile."""
    action_type: Literal["attack"] = "attack"
    unit_id: str = Field(description="ID of the attacking unit")
    target: Coordinate = Field(description="Tile of the enemy unit")


class EndTurnCommand(BaseModel):
    """Hand the turn to the opponent. Everything after it is ignored."""
    action_type: Literal["end_turn"] = "end_turn"


Command = Annotated[
    Union[MoveCommand, RotateCommand, AttackCommand, EndTurnCommand],
    Field(discriminator="action_type"),
]


class TurnOrders(BaseModel):
    """Complete turn plan, applied in order."""
    reasoning: str = Field(description="Short tactical rationale for this turn")
    actions: List[Command] = Field(description="Ordered commands, finishing with end_turn")


# --- System prompt ---
COMMANDER_SYSTEM_PROMPT = f"""
You command one side of a small tactical battle. Each turn you receive the board as JSON
(every unit with its position, facing and remaining move/attack budget, plus your own
support lines) and answer with an ordered list of commands for your units.

Commands are applied one by one. An illegal command is skipped and the rest still run,
so check budgets, facing and occupancy before issuing each one.

## GAME RULES
{GAME_INFO}
"""


def build_commander(model: str | None = None) -> Agent:
    """
    Create the pydantic_ai agent that writes turn orders.

    Args:
        model: Model identifier; defaults to $SKIRMISH_LLM_MODEL, then DEFAULT_MODEL.
    """
    return Agent(
        model or os.getenv("SKIRMISH_LLM_MODEL", DEFAULT_MODEL),
        output_type=TurnOrders,
        instructions=COMMANDER_SYSTEM_PROMPT,
        retries=3,
    )
