"""Pydantic models describing what the provider should do next."""

from typing import Optional

from pydantic import BaseModel

from hotel_ivr.workflows.schema import DialogueStage


class GatherInstruction(BaseModel):
    """Ask the provider to collect speech and post it to ``action``."""

    action: str
    input: str = "speech"
    speech_timeout: str = "auto"
    language: str = "en-US"


class DialogueResponse(BaseModel):
    """Result of one dialogue turn.

    ``gather`` is None when the dialogue ends with this prompt.
    """

    stage: DialogueStage
    prompt: str
    next_stage: Optional[DialogueStage] = None
    gather: Optional[GatherInstruction] = None
    transfer_to: str = ""  # number to <Dial> after the prompt

    @property
    def ends_dialogue(self) -> bool:
        return self.gather is None
