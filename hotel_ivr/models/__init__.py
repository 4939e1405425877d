"""Data models for the IVR layer."""

from .response import DialogueResponse, GatherInstruction
from .room import RoomRecord

__all__ = ["DialogueResponse", "GatherInstruction", "RoomRecord"]
