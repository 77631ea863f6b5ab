"""Plate and identity document helpers."""

from __future__ import annotations

import string

from vehicle_ownership.constants import DOCUMENT_NUMBER_RE, PLATE_RE

__all__ = [
    "normalize_vehicle_plate",
    "format_vehicle_plate",
    "is_valid_plate",
    "is_valid_document_number",
]

# ASCII-only uppercasing; str.upper() can change length ("ß" -> "SS")
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def normalize_vehicle_plate(value: str) -> str:
    if not value:
        return ""
    return "".join(value.split()).translate(_ASCII_UPPER)


def format_vehicle_plate(value: str) -> str:
    """Display form of a plate, ``ABC 123`` for the usual six characters."""
    plate = normalize_vehicle_plate(value)
    if len(plate) == 6:
        return f"{plate[:3]} {plate[3:]}"
    return plate


def is_valid_plate(plate: str) -> bool:
    """Return True when ``plate`` is a Colombian plate, case-insensitive.

    The raw value is only uppercased: surrounding or inner whitespace makes it
    invalid, and so does any non-ASCII character.
    """
    if not isinstance(plate, str) or not plate or not plate.isascii():
        return False
    return PLATE_RE.fullmatch(plate.translate(_ASCII_UPPER)) is not None


def is_valid_document_number(document_number: str) -> bool:
    """Return True for 6 to 12 ASCII digits, taken as-is."""
    if not isinstance(document_number, str) or not document_number:
        return False
    return DOCUMENT_NUMBER_RE.fullmatch(document_number) is not None
