"""Sensor reading dataclass and JSON line parser.

The decoder emits one JSON object per line (``rtl_433 -F json``).
Only the fields below are recognized; everything else in the object
is ignored:

    model           str, required
    id              unsigned int, optional
    temperature_C   number, optional
    temperature_F   number, optional
    humidity        number, optional

Example:
    >>> from rtlmon.reading import parse_reading
    >>> r = parse_reading('{"model": "Acurite-Tower", "id": 7, "temperature_C": 21.5}')
    >>> r.key
    DeviceKey(model='Acurite-Tower', id=7)
"""

import json
from dataclasses import dataclass
from typing import NamedTuple

# Instance ids are unsigned 32-bit on the wire.
ID_MAX = 0xFFFFFFFF


class DeviceKey(NamedTuple):
    """Identity of one physical sensor.

    *id* stays None when the protocol carries no instance id, so
    ``DeviceKey("X", None)`` and ``DeviceKey("X", 0)`` are different
    devices.
    """

    model: str
    id: int | None


@dataclass(frozen=True)
class Reading:
    """One decoded sensor observation.

    Temperatures are in degrees, humidity in percent, any of them None
    when the decoder did not report it.  *ingestion_time* is wall-clock
    milliseconds since the epoch, set by the ingest loop.
    """

    model: str
    id: int | None = None
    temperature_c: float | None = None
    temperature_f: float | None = None
    humidity: float | None = None
    ingestion_time: int | None = None

    @property
    def key(self) -> DeviceKey:
        """Return the DeviceKey this reading is stored under."""
        return DeviceKey(self.model, self.id)


def parse_reading(line: bytes | str) -> Reading:
    """Parse one decoder output line into a Reading.

    The returned Reading has no *ingestion_time* yet.

    Raises:
        ValueError: If the line is not UTF-8 JSON, is not an object,
            lacks a non-empty string ``model``, or carries a field of
            the wrong type.
    """
    try:
        obj = json.loads(line, parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError both land here.
        raise ValueError("invalid JSON: %s" % exc) from exc
    except RecursionError as exc:
        raise ValueError("invalid JSON: nested too deeply") from exc

    if not isinstance(obj, dict):
        raise ValueError(
            "expected a JSON object, got %s" % type(obj).__name__
        )

    model = obj.get("model")
    if model is None:
        raise ValueError("missing required field: model")
    if not isinstance(model, str):
        raise ValueError("model must be str, got %s" % type(model).__name__)
    if not model:
        raise ValueError("model must not be empty")

    return Reading(
        model=model,
        id=_optional_id(obj),
        temperature_c=_optional_number(obj, "temperature_C"),
        temperature_f=_optional_number(obj, "temperature_F"),
        humidity=_optional_number(obj, "humidity"),
    )


def _optional_id(obj: dict) -> int | None:
    """Return the ``id`` field as an unsigned int, or None if absent."""
    value = obj.get("id")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("id must be int, got %s" % type(value).__name__)
    if value < 0 or value > ID_MAX:
        raise ValueError("id out of range: %d (must be 0-%d)" % (value, ID_MAX))
    return value


def _optional_number(obj: dict, field: str) -> float | None:
    """Return *field* as a float, or None if absent or null."""
    value = obj.get(field)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(
            "%s must be a number, got %s" % (field, type(value).__name__)
        )
    try:
        return float(value)
    except OverflowError as exc:
        raise ValueError("%s out of range: %s" % (field, exc)) from exc


def _reject_constant(name: str) -> float:
    """Refuse NaN and Infinity, which are not valid JSON."""
    raise ValueError("non-standard JSON constant: %s" % name)
