"""FastAPI server exposing the spectator display plus guest and host actions."""

from __future__ import annotations

from threading import Thread
from typing import NoReturn

from fastapi import Depends, FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field, field_validator
import uvicorn

from gameshow_app.constants.about import APP_NAME, APP_VERSION
from gameshow_app.constants.gameshow_constants import DEFAULT_QUESTION_POINTS, RESET_CONFIRMATION_PROMPT
from gameshow_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from gameshow_app.core.gameshow_manager import GameshowManager
from gameshow_app.core.markdown_renderer import renderer
from gameshow_app.core.models import QuestionType
from gameshow_app.core.results import ErrorKind, OperationResult
from gameshow_app.core.sync_monitor import SyncMonitor

_STATUS_BY_ERROR = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NOT_CAPTAIN: 403,
    ErrorKind.NO_ACTIVE_ROUND: 409,
    ErrorKind.INVALID_INDEX: 422,
    ErrorKind.INVALID_ANSWER: 422,
}


class TeamPayload(BaseModel):
    """Payload schema for creating a team."""

    name: str = Field(min_length=1)
    captain_code: str = Field(min_length=1)


class MemberPayload(BaseModel):
    member_code: str = Field(min_length=1)


class AnswerPayload(BaseModel):
    """Payload schema for a captain's answer."""

    team_code: str
    guest_code: str
    answer: bool | int | str


class QuestionPayload(BaseModel):
    text: str = Field(min_length=1)
    type: QuestionType = QuestionType.TEXT
    image: str | None = None
    options: list[str] = Field(default_factory=list)
    correct_answer: str | None = None
    points: int = Field(default=DEFAULT_QUESTION_POINTS, gt=0)


class QuestionPatchPayload(BaseModel):
    """Partial question update; only ``image`` and ``correct_answer`` may be cleared."""

    text: str | None = Field(default=None, min_length=1)
    type: QuestionType | None = None
    image: str | None = None
    options: list[str] | None = None
    correct_answer: str | None = None
    points: int | None = Field(default=None, gt=0)

    @field_validator("text", "type", "options", "points")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("This field cannot be null.")
        return value


class PointsPayload(BaseModel):
    points: int


class ResetPayload(BaseModel):
    confirm: bool = False


def _raise_for_failure(result: OperationResult) -> NoReturn:
    status_code = _STATUS_BY_ERROR.get(result.error, 400)
    raise HTTPException(status_code=status_code, detail=result.reason)


def _get_manager_dependency(manager: GameshowManager):
    def dependency() -> GameshowManager:
        return manager

    return dependency


def create_api_app(manager: GameshowManager, monitor: SyncMonitor | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided gameshow manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    manager_dep = _get_manager_dependency(manager)

    # --- Spectator ---

    @app.get("/display")
    def get_display(manager: GameshowManager = Depends(manager_dep)) -> dict[str, object]:
        data = manager.get_gameshow_display_data()
        payload = jsonable_encoder(data)
        payload["question_html"] = (
            renderer.render_question(data.question) if data.question is not None else None
        )
        return payload

    @app.get("/stats")
    def get_stats(manager: GameshowManager = Depends(manager_dep)) -> dict[str, object]:
        return jsonable_encoder(manager.get_game_stats())

    @app.get("/leaderboard")
    def get_leaderboard(manager: GameshowManager = Depends(manager_dep)) -> list[dict[str, object]]:
        return jsonable_encoder(manager.get_leaderboard())

    @app.get("/sync")
    def get_sync_status() -> dict[str, object]:
        available = monitor.check_for_updates() if monitor is not None else False
        return {"update_available": available}

    @app.post("/sync")
    def sync_now(manager: GameshowManager = Depends(manager_dep)) -> dict[str, object]:
        if monitor is not None:
            monitor.sync()
        else:
            manager.reload()
        return {"update_available": False}

    # --- Guests ---

    @app.post("/teams", status_code=201)
    def create_team(
        payload: TeamPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        return jsonable_encoder(manager.create_team(payload.name.strip(), payload.captain_code))

    @app.get("/teams/{team_code}")
    def get_team(team_code: str, manager: GameshowManager = Depends(manager_dep)) -> dict[str, object]:
        team = manager.get_team_by_code(team_code)
        if team is None:
            raise HTTPException(status_code=404, detail="Team not found")
        return jsonable_encoder(team)

    @app.post("/teams/{team_code}/join")
    def join_team(
        team_code: str,
        payload: MemberPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        result = manager.join_team(team_code, payload.member_code)
        if not result.ok:
            _raise_for_failure(result)
        return jsonable_encoder(result.value)

    @app.post("/teams/{team_code}/captain")
    def set_captain(
        team_code: str,
        payload: MemberPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        if manager.get_team_by_code(team_code) is None:
            raise HTTPException(status_code=404, detail="Team not found")
        if not manager.set_captain(team_code, payload.member_code):
            raise HTTPException(status_code=409, detail="New captain must already be a team member")
        return jsonable_encoder(manager.get_team_by_code(team_code))

    @app.post("/answers", status_code=201)
    def submit_answer(
        payload: AnswerPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        result = manager.submit_answer(payload.team_code, payload.guest_code, payload.answer)
        if not result.ok:
            _raise_for_failure(result)
        return jsonable_encoder(result.value)

    # --- Host ---

    @app.post("/questions", status_code=201)
    def create_question(
        payload: QuestionPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            question = manager.create_question(
                payload.text,
                payload.type,
                image=payload.image,
                options=payload.options,
                correct_answer=payload.correct_answer,
                points=payload.points,
            )
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return jsonable_encoder(question)

    @app.patch("/questions/{question_id}")
    def update_question(
        question_id: str,
        payload: QuestionPatchPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            question = manager.update_question(question_id, **payload.model_dump(exclude_unset=True))
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        if question is None:
            raise HTTPException(status_code=404, detail="Question not found")
        return jsonable_encoder(question)

    @app.delete("/questions/{question_id}", status_code=204)
    def delete_question(question_id: str, manager: GameshowManager = Depends(manager_dep)) -> None:
        manager.delete_question(question_id)

    @app.post("/rounds/{index}/start")
    def start_round(index: int, manager: GameshowManager = Depends(manager_dep)) -> dict[str, object]:
        result = manager.start_question(index)
        if not result.ok:
            _raise_for_failure(result)
        return jsonable_encoder(result.value)

    @app.post("/rounds/end")
    def end_round(manager: GameshowManager = Depends(manager_dep)) -> dict[str, object]:
        manager.end_question()
        return {"game_active": manager.is_game_active()}

    @app.post("/teams/{team_code}/award")
    def award_points(
        team_code: str,
        payload: PointsPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        if not manager.award_points(team_code, payload.points):
            raise HTTPException(status_code=404, detail="Team not found")
        return jsonable_encoder(manager.get_team_by_code(team_code))

    @app.post("/teams/{team_code}/correct")
    def mark_correct(team_code: str, manager: GameshowManager = Depends(manager_dep)) -> dict[str, object]:
        if manager.get_current_question() is None:
            raise HTTPException(status_code=409, detail="No active question")
        if not manager.mark_answer_correct(team_code):
            raise HTTPException(status_code=404, detail="Team not found")
        return jsonable_encoder(manager.get_team_by_code(team_code))

    @app.post("/scores/reset")
    def reset_scores(manager: GameshowManager = Depends(manager_dep)) -> list[dict[str, object]]:
        manager.reset_scores()
        return jsonable_encoder(manager.get_leaderboard())

    @app.post("/reset")
    def reset_gameshow(
        payload: ResetPayload,
        manager: GameshowManager = Depends(manager_dep),
    ) -> dict[str, object]:
        if not manager.reset_gameshow(lambda: payload.confirm):
            raise HTTPException(status_code=409, detail=RESET_CONFIRMATION_PROMPT)
        return {"reset": True}

    return app


def start_api_server(
    manager: GameshowManager,
    monitor: SyncMonitor | None = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(manager, monitor)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="GameshowApiServer", daemon=True)
    thread.start()
    return thread
