"""Encoded polyline decoding for route geometries."""

from __future__ import annotations

from core.exceptions import ValidationException


def decode_polyline(encoded: str, precision: int = 5) -> list[list[float]]:
    """Decode an encoded polyline into [lon, lat] coordinate pairs."""
    coords: list[list[float]] = []
    index = 0
    lat = 0
    lng = 0
    length = len(encoded or "")
    factor = float(10**precision)

    def next_value() -> int:
        nonlocal index
        shift = 0
        result = 0
        while True:
            if index >= length:
                msg = "Invalid polyline encoding"
                raise ValidationException(msg, {"precision": precision})
            byte = ord(encoded[index]) - 63
            index += 1
            result |= (byte & 0x1F) << shift
            shift += 5
            if byte < 0x20:
                break
        return ~(result >> 1) if (result & 1) else (result >> 1)

    while index < length:
        lat += next_value()
        lng += next_value()
        coords.append([lng / factor, lat / factor])

    return coords
