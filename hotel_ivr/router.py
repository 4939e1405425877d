"""Dialogue router — interprets one caller turn and decides what to say next.

The router holds no per-call state.  Which stage a turn belongs to is
decided by the webhook the provider called, and the next stage is
communicated back as the ``action`` URL of the gather instruction::

    router = DialogueRouter(RoomCatalog("hotel_rooms.csv"))
    response = router.handle_inquiry("do you have rooms available")
    response.gather.action   # "/handle-room-type"

Catalog and classification failures in the inquiry, room-type and
booking stages end the call with a generic apology; details are logged
for operators and never spoken.
"""

from __future__ import annotations

import logging
from typing import Callable

from hotel_ivr.catalog import RoomCatalog
from hotel_ivr.models.response import DialogueResponse, GatherInstruction
from hotel_ivr.workflows import hotel_reservation as script
from hotel_ivr.workflows.schema import DialogueStage, DialogueWorkflowDef, Intent

log = logging.getLogger("hotel_ivr.router")


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(kw in text for kw in keywords)


def classify_inquiry(utterance: str) -> Intent:
    """Map an utterance to an inquiry intent; the first matching rule wins."""
    text = utterance.lower()
    for intent, keywords in script.INQUIRY_RULES:
        if _contains_any(text, keywords):
            return intent
    return Intent.UNRECOGNIZED


class DialogueRouter:
    """Stateless driver for the hotel reservation stage machine."""

    def __init__(
        self,
        catalog: RoomCatalog,
        workflow: DialogueWorkflowDef | None = None,
        language: str = "en-US",
        reservation_desk_number: str = "",
    ) -> None:
        self._catalog = catalog
        self._workflow = workflow or script.WORKFLOW_DEF
        self._language = language
        self._desk_number = reservation_desk_number

    @property
    def workflow(self) -> DialogueWorkflowDef:
        return self._workflow

    # ── Stage handlers ─────────────────────────────────────────

    def greet(self) -> DialogueResponse:
        return self._respond(DialogueStage.GREETING, Intent.WELCOME, script.WELCOME_PROMPT)

    def handle_inquiry(self, utterance: str) -> DialogueResponse:
        return self._guarded(DialogueStage.INQUIRY, utterance, self._inquiry)

    def handle_room_type(self, utterance: str) -> DialogueResponse:
        return self._guarded(DialogueStage.ROOM_TYPE, utterance, self._room_type)

    def handle_booking(self, utterance: str) -> DialogueResponse:
        return self._guarded(DialogueStage.BOOKING_MATCH, utterance, self._booking)

    def confirm_booking(self, utterance: str) -> DialogueResponse:
        stage = DialogueStage.CONFIRMATION
        if _contains_any(utterance.lower(), script.CONFIRM_KEYWORDS):
            log.info("Caller confirmed booking, transferring to reservation desk")
            response = self._respond(stage, Intent.CONFIRMED, script.TRANSFER_PROMPT)
            response.transfer_to = self._desk_number
            return response
        return self._respond(stage, Intent.DECLINED, script.DECLINED_PROMPT)

    def handle(self, stage: DialogueStage, utterance: str = "") -> DialogueResponse:
        """Dispatch a turn to the handler for *stage*."""
        handlers: dict[DialogueStage, Callable[[str], DialogueResponse]] = {
            DialogueStage.INQUIRY: self.handle_inquiry,
            DialogueStage.ROOM_TYPE: self.handle_room_type,
            DialogueStage.BOOKING_MATCH: self.handle_booking,
            DialogueStage.CONFIRMATION: self.confirm_booking,
        }
        if stage == DialogueStage.GREETING:
            return self.greet()
        return handlers[stage](utterance)

    # ── Turn logic ─────────────────────────────────────────────

    def _inquiry(self, stage: DialogueStage, text: str) -> DialogueResponse:
        intent = classify_inquiry(text)

        if intent == Intent.AVAILABILITY:
            count = len(self._catalog.list_available_rooms())
            prompt = script.AVAILABILITY_PROMPT.format(count=count)
        elif intent == Intent.PRICES:
            prompt = self._price_list()
        elif intent == Intent.BOOK:
            prompt = script.BOOK_PROMPT
        else:
            prompt = script.UNRECOGNIZED_PROMPT

        return self._respond(stage, intent, prompt)

    def _room_type(self, stage: DialogueStage, text: str) -> DialogueResponse:
        # "yes" answers "would you like to hear about room types and prices?"
        if _contains_any(text, script.ROOM_TYPE_ACCEPT_KEYWORDS):
            return self._respond(stage, Intent.PRICES, self._price_list())
        # Anything else is read as a fresh inquiry; unrecognized returns to the menu
        return self._inquiry(stage, text)

    def _booking(self, stage: DialogueStage, text: str) -> DialogueResponse:
        matches = [
            room for room in self._catalog.list_available_rooms()
            if text in room.room_type.lower()
        ]
        if not matches:
            return self._respond(stage, Intent.NO_MATCH, script.NO_ROOM_PROMPT)

        room = matches[0]
        log.info("Matched %r to room type %s (%d candidates)", text, room.room_type, len(matches))
        prompt = script.ROOM_FOUND_PROMPT.format(
            room_type=room.room_type,
            view_type=room.view_type,
            price=room.price_per_night,
        )
        return self._respond(stage, Intent.MATCHED, prompt)

    def _price_list(self) -> str:
        prices = self._catalog.list_room_type_prices()
        items = "".join(
            script.PRICE_LIST_ITEM.format(room_type=room_type, price=price)
            for room_type, price in prices.items()
        )
        return script.PRICE_LIST_INTRO + items + script.PRICE_LIST_OUTRO

    # ── Helpers ────────────────────────────────────────────────

    def _guarded(
        self,
        stage: DialogueStage,
        utterance: str,
        turn: Callable[[DialogueStage, str], DialogueResponse],
    ) -> DialogueResponse:
        """Run *turn*, converting any failure into the apology-and-hang-up response."""
        text = utterance.lower()
        try:
            return turn(stage, text)
        except Exception:
            log.error("Error handling %s turn (utterance=%r)", stage.value, utterance, exc_info=True)
            return self._respond(stage, Intent.FAILED, script.ERROR_PROMPT)

    def _respond(self, stage: DialogueStage, intent: Intent, prompt: str) -> DialogueResponse:
        next_stage = self._workflow.next_stage(stage, intent)
        gather = None
        if next_stage is not None:
            gather = GatherInstruction(
                action=self._workflow.endpoint_for(next_stage),
                language=self._language,
            )
        log.info(
            "Turn: stage=%s intent=%s next=%s",
            stage.value,
            intent.value,
            next_stage.value if next_stage else "end",
        )
        return DialogueResponse(stage=stage, prompt=prompt, next_stage=next_stage, gather=gather)
