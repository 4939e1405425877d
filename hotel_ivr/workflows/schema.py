"""Pydantic models for the IVR dialogue workflow.

A workflow binds each dialogue stage to the webhook path the provider
must call for it, and maps ``(stage, intent)`` pairs to the next stage.
A ``None`` target ends the dialogue (no further gather).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DialogueStage(str, Enum):
    GREETING = "greeting"
    INQUIRY = "inquiry"
    ROOM_TYPE = "room_type"          # follow-up to the availability answer
    BOOKING_MATCH = "booking_match"
    CONFIRMATION = "confirmation"


class Intent(str, Enum):
    """Outcome of interpreting one caller turn."""

    WELCOME = "welcome"
    AVAILABILITY = "availability"
    PRICES = "prices"
    BOOK = "book"
    UNRECOGNIZED = "unrecognized"
    MATCHED = "matched"
    NO_MATCH = "no_match"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    FAILED = "failed"


class DialogueWorkflowDef(BaseModel):
    """A complete stage machine definition."""

    id: str
    initial_stage: DialogueStage = DialogueStage.GREETING
    endpoints: dict[DialogueStage, str] = {}
    transitions: dict[DialogueStage, dict[Intent, DialogueStage | None]] = {}

    def next_stage(self, stage: DialogueStage, intent: Intent) -> DialogueStage | None:
        """Return the stage reached from *stage* on *intent* (None = end)."""
        try:
            return self.transitions[stage][intent]
        except KeyError:
            raise ValueError(
                f"Workflow {self.id} has no transition for {stage.value} on {intent.value}"
            ) from None

    def endpoint_for(self, stage: DialogueStage) -> str:
        """Webhook path the provider must call to enter *stage*."""
        try:
            return self.endpoints[stage]
        except KeyError:
            raise ValueError(f"Workflow {self.id} has no endpoint for {stage.value}") from None
