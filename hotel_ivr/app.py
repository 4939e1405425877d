"""FastAPI application — Twilio voice webhooks for the hotel reservation IVR.

Endpoints (main app):

  POST /answer             Incoming call: welcome prompt + gather
  POST /handle-inquiry     Availability / prices / booking question
  POST /handle-room-type   Follow-up to the availability answer
  POST /handle-booking     Room type the caller wants to book
  POST /confirm-booking    Yes/no on the offered room
  GET  /health             Health check

Endpoints (greeting app, deployed separately):

  POST /voice              Fixed one-sentence greeting, no gather

The call flow:
  1. Incoming call hits POST /answer
  2. Every reply is TwiML whose <Gather action="..."> names the next
     endpoint; Twilio posts the caller's SpeechResult there
  3. The dialogue ends with a reply that has no <Gather>
"""

from __future__ import annotations

# Load .env into os.environ early so Settings and any Twilio helper see it
from dotenv import load_dotenv
load_dotenv()

import argparse
import logging
import time

# Configure root logger early so all app loggers (hotel_ivr.router, etc.)
# have a handler and are visible when run via `uvicorn hotel_ivr.app:app`.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)-20s %(levelname)-7s %(message)s",
)

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from hotel_ivr.catalog import RoomCatalog
from hotel_ivr.config import Settings, settings
from hotel_ivr.provider import TwilioProvider
from hotel_ivr.router import DialogueRouter
from hotel_ivr.twiml import render_dialogue, render_say, twiml_response
from hotel_ivr.workflows.hotel_reservation import SIMPLE_GREETING, UNEXPECTED_ERROR_PROMPT
from hotel_ivr.workflows.loader import load_workflow_jsonl

log = logging.getLogger("hotel_ivr.app")

_START_TIME = time.time()


async def _speech_result(request: Request) -> str:
    """Caller's transcribed speech from the Twilio form post ('' if absent)."""
    form = await request.form()
    speech = form.get("SpeechResult") or ""
    log.info(
        "%s call_sid=%s caller said: %r",
        request.url.path,
        form.get("CallSid", "unknown"),
        speech,
    )
    return str(speech)


def create_app(config: Settings | None = None) -> FastAPI:
    """Create and configure the IVR application."""
    config = config or settings

    for warning in config.validate_startup():
        log.warning(warning)

    app = FastAPI(
        title="Hotel Reservation IVR",
        description="Twilio speech webhooks for room availability, prices and booking",
        version="0.1.0",
    )

    app.state.settings = config
    app.state.provider = TwilioProvider(config.twilio_account_sid, config.twilio_auth_token)
    app.state.router = DialogueRouter(
        RoomCatalog(config.rooms_csv_path),
        workflow=load_workflow_jsonl(config.workflow_path),
        language=config.speech_language,
        reservation_desk_number=config.reservation_desk_number,
    )

    def _reply(response) -> Response:
        return twiml_response(render_dialogue(response, voice=config.tts_voice))

    # ── Health check ───────────────────────────────────────────

    @app.get("/health")
    async def health() -> JSONResponse:
        uptime = round(time.time() - _START_TIME, 1)
        return JSONResponse({
            "status": "ok",
            "uptime": uptime,
            "provider_configured": app.state.provider.configured,
        })

    # ── Dialogue webhooks ──────────────────────────────────────

    @app.post("/answer")
    async def answer(request: Request) -> Response:
        """Incoming call — no input consulted."""
        return _reply(request.app.state.router.greet())

    @app.post("/handle-inquiry")
    async def handle_inquiry(request: Request) -> Response:
        speech = await _speech_result(request)
        return _reply(request.app.state.router.handle_inquiry(speech))

    @app.post("/handle-room-type")
    async def handle_room_type(request: Request) -> Response:
        speech = await _speech_result(request)
        return _reply(request.app.state.router.handle_room_type(speech))

    @app.post("/handle-booking")
    async def handle_booking(request: Request) -> Response:
        speech = await _speech_result(request)
        return _reply(request.app.state.router.handle_booking(speech))

    @app.post("/confirm-booking")
    async def confirm_booking(request: Request) -> Response:
        speech = await _speech_result(request)
        return _reply(request.app.state.router.confirm_booking(speech))

    # ── Catch-all ──────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> Response:
        """Any unhandled fault: apologise and end the call.

        Returned with 200 so Twilio still speaks the prompt.
        """
        log.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
        return twiml_response(render_say(UNEXPECTED_ERROR_PROMPT, voice=config.tts_voice))

    return app


def create_greeting_app() -> FastAPI:
    """Minimal single-turn deployment: greet the caller and hang up."""
    app = FastAPI(title="Hotel Reservation IVR (greeting)", version="0.1.0")

    @app.post("/voice")
    async def voice() -> Response:
        log.info("Greeting-only call answered")
        return twiml_response(render_say(SIMPLE_GREETING))

    return app


# ── Module-level app instances for uvicorn ──────────────────────

app = create_app()
greeting_app = create_greeting_app()


if __name__ == "__main__":
    import uvicorn

    parser = argparse.ArgumentParser(
        description="Run the hotel reservation IVR webhook server",
        prog="python -m hotel_ivr.app",
    )
    parser.add_argument(
        "--greeting",
        action="store_true",
        help="Serve only the one-sentence /voice greeting",
    )
    args = parser.parse_args()

    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["default"]["fmt"] = (
        "%(asctime)s %(name)-12s %(levelname)-8s %(message)s"
    )

    log.info("Server is running on port %d", settings.port)
    uvicorn.run(
        "hotel_ivr.app:greeting_app" if args.greeting else "hotel_ivr.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=log_config,
    )
