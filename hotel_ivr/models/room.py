"""Pydantic model for one row of the room inventory CSV."""

from decimal import Decimal

from pydantic import BaseModel

AVAILABLE = "available"


class RoomRecord(BaseModel):
    room_type: str
    status: str  # "available" or anything else
    price_per_night: Decimal
    view_type: str

    @property
    def is_available(self) -> bool:
        return self.status == AVAILABLE
