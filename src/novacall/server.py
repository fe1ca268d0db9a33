import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from novacall.config import load_settings, validate_config
from novacall.context import default_context
from novacall.controller import CallController
from novacall.transcript import to_json_array

load_dotenv()

logger = logging.getLogger(__name__)


class UtteranceRequest(BaseModel):
    text: str


class ContextUpdate(BaseModel):
    phone_number: Optional[str] = None
    purpose: Optional[str] = None
    # Raw newline-delimited text or a list of lines
    talking_points: Optional[str | list[str]] = None
    handoff_conditions: Optional[str | list[str]] = None
    consent_to_summary: Optional[bool] = None


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_controller() -> CallController:
    settings = load_settings()
    context = default_context(
        principal_name=settings.principal_name,
        assistant_name=settings.assistant_name,
    )
    return CallController(context, id_factory=_new_id, clock=_utc_now)


def create_app(controller: Optional[CallController] = None) -> FastAPI:
    """HTTP control room for one simulated call.

    Handlers never fail on call sequencing: an operation that does not apply
    to the current state returns the unchanged snapshot and no new turns.

    Without an explicit controller, one is built from the environment on the
    first request, so importing this module never reads settings.
    """
    app = FastAPI(title="NovaCall Assistant")
    app.state.controller = controller

    def _controller() -> CallController:
        if app.state.controller is None:
            app.state.controller = build_controller()
        return app.state.controller

    def _respond(turns) -> dict:
        return {
            "turns": to_json_array(turns),
            "call": _controller().snapshot(),
        }

    @app.get("/health")
    async def health():
        return PlainTextResponse("ok")

    @app.get("/call")
    def get_call():
        return _controller().snapshot()

    @app.post("/call/start")
    def start_call():
        intro = _controller().start_call()
        return _respond([intro] if intro else [])

    @app.post("/call/utterance")
    def submit_utterance(body: UtteranceRequest):
        return _respond(_controller().submit_caller_utterance(body.text))

    @app.post("/call/silence")
    def silence():
        return _respond(_controller().trigger_silence_escalation())

    @app.post("/call/close")
    def close_call():
        return _respond(_controller().close_call())

    @app.post("/call/clarification-note")
    def clarification_note():
        return _respond(_controller().log_clarification_note())

    @app.post("/call/reset")
    def reset_call():
        _controller().reset_session()
        return _respond([])

    @app.get("/call/summary")
    def summary():
        return {"summary": _controller().generate_summary()}

    @app.get("/context")
    def get_context():
        return _controller().snapshot()["context"]

    @app.patch("/context")
    def update_context(body: ContextUpdate):
        changes = body.model_dump(exclude_none=True)
        _controller().update_context(**changes)
        return _controller().snapshot()

    return app


app = create_app()


def main():
    validate_config()
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting NovaCall on port %d", settings.port)
    uvicorn.run("novacall.server:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
