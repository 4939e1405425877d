"""Hotel reservation dialogue: workflow definition, keywords and prompts.

The stage machine lives in data/workflows/hotel_reservation.jsonl.  This
module loads it and holds the spoken text for every stage.

  greeting ──welcome──▶ inquiry
  inquiry ──availability──▶ room_type
          ──prices / book──▶ booking_match
          ──unrecognized──▶ inquiry
  room_type ──yes / prices / book──▶ booking_match
  booking_match ──matched──▶ confirmation
                ──no_match──▶ booking_match
  confirmation ──declined──▶ inquiry
               ──confirmed──▶ (end, transfer)
  any ──failed──▶ (end, apology)
"""

from __future__ import annotations

from pathlib import Path

from hotel_ivr.workflows.loader import load_workflow_jsonl
from hotel_ivr.workflows.schema import DialogueWorkflowDef, Intent

_JSONL_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "workflows" / "hotel_reservation.jsonl"

WORKFLOW_DEF: DialogueWorkflowDef = load_workflow_jsonl(_JSONL_PATH)


# ── Keyword rules ─────────────────────────────────────────────────
#
# Checked in order against the lower-cased utterance; first hit wins.
# "show me available prices" is an availability question, not a price one.

INQUIRY_RULES: list[tuple[Intent, tuple[str, ...]]] = [
    (Intent.AVAILABILITY, ("available", "vacancy")),
    (Intent.PRICES, ("price", "cost")),
    (Intent.BOOK, ("book", "reserve")),
]

ROOM_TYPE_ACCEPT_KEYWORDS = ("yes",)
CONFIRM_KEYWORDS = ("yes", "confirm")


# ── Prompts ───────────────────────────────────────────────────────

WELCOME_PROMPT = (
    "Welcome to our Hotel Reservation System. "
    "You can ask about room availability, prices, or make a reservation. "
    "What would you like to know?"
)

AVAILABILITY_PROMPT = (
    "We have {count} rooms available. "
    "Would you like to hear about specific room types and their prices?"
)

PRICE_LIST_INTRO = "Here are our room types and prices per night: "
PRICE_LIST_ITEM = "{room_type} for ${price:.2f}. "
PRICE_LIST_OUTRO = "Would you like to make a reservation?"

BOOK_PROMPT = (
    "I can help you with a reservation. "
    "What type of room would you like to book?"
)

UNRECOGNIZED_PROMPT = (
    "I'm sorry, I didn't quite catch that. "
    "You can ask about room availability, prices, or make a reservation. "
    "What would you like to know?"
)

ROOM_FOUND_PROMPT = (
    "I found a {room_type} room with a {view_type} view "
    "for ${price:.2f} per night. "
    "Would you like to proceed with the booking?"
)

NO_ROOM_PROMPT = (
    "I'm sorry, I couldn't find an available room of that type. "
    "Would you like to hear about other room types we have available?"
)

TRANSFER_PROMPT = (
    "Great! To complete your booking, I'll transfer you to our reservation desk "
    "to collect your information and payment details. Please stay on the line."
)

DECLINED_PROMPT = "No problem. Would you like to hear about other room options?"

ERROR_PROMPT = "Sorry, we encountered an error. Please try again later."

UNEXPECTED_ERROR_PROMPT = "Sorry, we encountered an unexpected error. Please try again later."

SIMPLE_GREETING = "Hello! This is your bot speaking. How can I help you today?"
