"""HTTP API entrypoint for driving the game from a web UI."""

from typing import Callable, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from game_runner import GameRunner
from infra.logger import get_logger
from skirmish import Scenario, create_default_scenario
from skirmish.core.errors import IllegalOperation, TerminalState
from skirmish.core.types import Difficulty, RotateDir, Side, SupportAxis

logger = get_logger(__name__)

app = FastAPI(title="Skirmish 7x7")
runner: GameRunner | None = None

# Allow the browser-based board (served from file:// or other origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class StartRequest(BaseModel):
    scenario: dict | None = None
    difficulty: Literal["random", "easy", "medium", "hard"] = "medium"
    seed: int | None = None
    agent_type: str = "greedy"


class TileRequest(BaseModel):
    x: int
    y: int


class SupportToggleRequest(BaseModel):
    axis: Literal["row", "col"]
    index: int


class SelectRequest(BaseModel):
    unit_id: str | None = None


class MoveRequest(BaseModel):
    unit_id: str
    x: int
    y: int


class RotateRequest(BaseModel):
    unit_id: str
    direction: Literal["left", "right"]


class AttackBeginRequest(BaseModel):
    attacker_id: str
    target_id: str


class AttackerRequest(BaseModel):
    attacker_id: str


class EndTurnRequest(BaseModel):
    play_computer: bool = Field(default=True, description="Run the computer turn right after")


def _require_runner() -> GameRunner:
    if runner is None:
        raise HTTPException(400, {"code": "NO_GAME", "message": "No active game"})
    return runner


def _apply(operation: Callable[[GameRunner], object]) -> dict:
    """Run an engine operation and return the player's snapshot."""
    active = _require_runner()
    try:
        operation(active)
    except TerminalState as exc:
        raise HTTPException(409, exc.to_dict()) from exc
    except IllegalOperation as exc:
        raise HTTPException(400, exc.to_dict()) from exc
    return active.snapshot()


@app.post("/start")
def start(request: StartRequest):
    global runner
    try:
        if request.scenario is not None:
            scenario = Scenario.from_dict(request.scenario)
        else:
            scenario = create_default_scenario(
                difficulty=Difficulty(request.difficulty),
                seed=request.seed,
                agent_type=request.agent_type,
            )
        runner = GameRunner(scenario)
    except IllegalOperation as exc:
        raise HTTPException(400, exc.to_dict()) from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(400, {"code": "BAD_SCENARIO", "message": str(exc)}) from exc
    logger.info("New game via API: %r", scenario)
    return runner.snapshot()


@app.post("/deploy")
def deploy(request: TileRequest):
    return _apply(lambda r: r.env.place_unit((request.x, request.y)))


@app.post("/support/toggle")
def toggle_support(request: SupportToggleRequest):
    return _apply(lambda r: r.env.toggle_support_line(SupportAxis(request.axis), request.index))


@app.post("/support/confirm")
def confirm_support():
    return _apply(lambda r: r.env.confirm_support_selection())


@app.post("/select")
def select(request: SelectRequest):
    return _apply(lambda r: r.env.select_unit(request.unit_id, Side.PLAYER))


@app.post("/move")
def move(request: MoveRequest):
    return _apply(lambda r: r.env.move(request.unit_id, request.x, request.y, Side.PLAYER))


@app.post("/rotate")
def rotate(request: RotateRequest):
    return _apply(lambda r: r.env.rotate(request.unit_id, RotateDir(request.direction), Side.PLAYER))


@app.post("/attack/begin")
def attack_begin(request: AttackBeginRequest):
    return _apply(lambda r: r.env.begin_attack(request.attacker_id, request.target_id, Side.PLAYER))


@app.post("/attack/add")
def attack_add(request: AttackerRequest):
    return _apply(lambda r: r.env.add_attacker(request.attacker_id, Side.PLAYER))


@app.post("/attack/remove")
def attack_remove(request: AttackerRequest):
    return _apply(lambda r: r.env.remove_attacker(request.attacker_id, Side.PLAYER))


@app.post("/attack/resolve")
def attack_resolve():
    return _apply(lambda r: r.env.resolve_attack(Side.PLAYER))


@app.post("/attack/cancel")
def attack_cancel():
    return _apply(lambda r: r.env.cancel_attack(Side.PLAYER))


@app.post("/end-turn")
def end_turn(request: EndTurnRequest | None = None):
    play_computer = request.play_computer if request is not None else True
    snapshot = _apply(lambda r: r.env.end_turn(Side.PLAYER))
    active = _require_runner()
    if play_computer and active.state.active_side is Side.COMPUTER:
        return active.play_computer_turn().to_dict()
    return {"state": snapshot, "done": active.done}


@app.post("/computer-turn")
def computer_turn():
    active = _require_runner()
    try:
        return active.play_computer_turn().to_dict()
    except TerminalState as exc:
        raise HTTPException(409, exc.to_dict()) from exc
    except IllegalOperation as exc:
        raise HTTPException(400, exc.to_dict()) from exc


@app.get("/state")
def state():
    return _require_runner().snapshot()


@app.get("/status")
def status():
    if runner is None:
        return {"active": False}
    return {
        "active": True,
        "turn": runner.turn,
        "phase": runner.state.phase.value,
        "done": runner.done,
    }
