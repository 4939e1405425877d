"""Room catalog — reads the hotel room inventory CSV on every query.

Nothing is cached: each call opens the file, parses every row and
filters in memory, so edits to the CSV are visible on the next turn.

Usage:
    python -m hotel_ivr.catalog hotel_rooms.csv
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from hotel_ivr.models.room import RoomRecord

log = logging.getLogger("hotel_ivr.catalog")

REQUIRED_COLUMNS = ("room_type", "status", "price_per_night", "view_type")


class CatalogReadError(Exception):
    """The room inventory file is missing, unreadable or malformed."""


class RoomCatalog:
    """Read-only views over a room inventory CSV."""

    def __init__(self, csv_path: str | Path) -> None:
        self._path = Path(csv_path)

    @property
    def path(self) -> Path:
        return self._path

    def load_rooms(self) -> list[RoomRecord]:
        """Parse every row of the CSV, preserving file order."""
        try:
            with open(self._path, newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
                if missing:
                    raise CatalogReadError(
                        f"{self._path}: missing column(s) {', '.join(missing)}"
                    )
                rooms = [
                    _row_to_room(row, line)
                    for line, row in enumerate(reader, start=2)
                ]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise CatalogReadError(f"Cannot read room catalog {self._path}: {exc}") from exc

        log.debug("Loaded %d rooms from %s", len(rooms), self._path)
        return rooms

    def list_available_rooms(self) -> list[RoomRecord]:
        """Rooms whose status is exactly "available", in file order."""
        return [room for room in self.load_rooms() if room.is_available]

    def list_room_type_prices(self) -> dict[str, Decimal]:
        """Map each room type to the price of its first row in the file.

        Later rows of the same type are ignored even if their price
        differs; the first-seen price is what callers hear.
        """
        prices: dict[str, Decimal] = {}
        for room in self.load_rooms():
            prices.setdefault(room.room_type, room.price_per_night)
        return prices


def _row_to_room(row: dict, line: int) -> RoomRecord:
    try:
        return RoomRecord(
            room_type=row.get("room_type") or "",
            status=row.get("status") or "",
            price_per_night=row.get("price_per_night") or "",
            view_type=row.get("view_type") or "",
        )
    except ValidationError as exc:
        raise CatalogReadError(f"Malformed room row at line {line}: {exc}") from exc


def main():
    parser = argparse.ArgumentParser(
        description="Show available rooms and room-type prices from a catalog CSV",
        prog="python -m hotel_ivr.catalog",
    )
    parser.add_argument(
        "csv_path",
        nargs="?",
        default="hotel_rooms.csv",
        help="Path to the room inventory CSV (default: hotel_rooms.csv)",
    )
    args = parser.parse_args()

    catalog = RoomCatalog(args.csv_path)
    try:
        available = catalog.list_available_rooms()
        prices = catalog.list_room_type_prices()
    except CatalogReadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    data = {
        "available": [room.model_dump(mode="json") for room in available],
        "prices": {room_type: f"{price:.2f}" for room_type, price in prices.items()},
    }
    json.dump(data, sys.stdout, indent=2)
    print(f"\n# {len(available)} rooms available", file=sys.stderr)


if __name__ == "__main__":
    main()
