"""Application configuration via environment variables."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic_settings import BaseSettings

log = logging.getLogger("hotel_ivr.config")

_DEFAULT_WORKFLOW = Path(__file__).resolve().parent.parent / "data" / "workflows" / "hotel_reservation.jsonl"


class Settings(BaseSettings):
    # Twilio
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    # Dialogue
    rooms_csv_path: str = "hotel_rooms.csv"
    workflow_path: str = str(_DEFAULT_WORKFLOW)
    tts_voice: str = "Polly.Amy-Neural"
    speech_language: str = "en-US"
    reservation_desk_number: str = ""  # empty = no <Dial> after confirmation

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def validate_startup(self) -> list[str]:
        """Validate configuration at startup. Returns warnings, raises on errors."""
        warnings: list[str] = []
        _placeholders = {"AC...", "your_auth_token"}

        if not Path(self.workflow_path).is_file():
            raise ValueError(f"Workflow definition not found at {self.workflow_path}")

        if not self.twilio_account_sid or not self.twilio_auth_token:
            warnings.append(
                "TWILIO_ACCOUNT_SID / TWILIO_AUTH_TOKEN not set. "
                "Outbound provider calls are disabled."
            )
        elif (
            self.twilio_account_sid in _placeholders
            or self.twilio_auth_token in _placeholders
        ):
            warnings.append("Twilio credentials are placeholders — outbound calls won't work.")

        # Catalog is read per request, so a missing file only degrades the dialogue
        if not Path(self.rooms_csv_path).is_file():
            warnings.append(
                f"Room catalog {self.rooms_csv_path} not found. "
                "Availability and booking turns will apologise and hang up."
            )

        return warnings


settings = Settings()
