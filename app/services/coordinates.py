from __future__ import annotations
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class Axis(str, Enum):
    LATITUDE = "latitude"
    LONGITUDE = "longitude"


class CoordinateFormat(str, Enum):
    DECIMAL = "decimal"
    DMS = "dms"
    STRING = "string"


_AXIS_ALIASES = {
    "latitude": Axis.LATITUDE,
    "lat": Axis.LATITUDE,
    "longitude": Axis.LONGITUDE,
    "lng": Axis.LONGITUDE,
    "lon": Axis.LONGITUDE,
}

# per axis: (label, degree bound, positive letter, negative letter)
_AXIS_RULES = {
    Axis.LATITUDE: ("Latitude", 90, "N", "S"),
    Axis.LONGITUDE: ("Longitude", 180, "E", "W"),
}

FORMAT_EXAMPLES = {
    Axis.LATITUDE: ("392008N", "39.2008N", "39 20 08N", "39°20'08\"N", "392008.5N"),
    Axis.LONGITUDE: ("1160908W", "116.0908W", "116 09 08W", "116°09'08\"W", "1160908.5W"),
}


# ---------------- Errors ----------------

class CoordinateError(ValueError):
    """Base class for user-facing coordinate validation failures."""

    code = "coordinate_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(CoordinateError):
    code = "missing_field"


class NotANumber(CoordinateError):
    code = "not_a_number"


class OutOfRange(CoordinateError):
    code = "out_of_range"

    def __init__(self, message: str, *, axis: Axis, bound: Tuple[float, float]):
        super().__init__(message)
        self.axis = axis
        self.bound = bound


class InvalidFormat(CoordinateError):
    code = "invalid_format"

    def __init__(self, message: str, *, axis: Optional[Axis] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.axis = axis
        self.hint = hint


# ---------------- Value types ----------------

class DmsValue(NamedTuple):
    degrees: int
    minutes: int
    seconds: float
    direction: str

    def to_decimal(self) -> float:
        return dms_to_decimal(self.degrees, self.minutes, self.seconds, self.direction)


@dataclass(frozen=True, slots=True)
class GeoPosition:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        _check_position(self.latitude, self.longitude)


def coerce_axis(axis: Union[Axis, str]) -> Axis:
    """Accept an Axis or one of its common spellings; anything else is a caller bug."""
    if isinstance(axis, Axis):
        return axis
    found = _AXIS_ALIASES.get(str(axis).strip().lower())
    if found is None:
        raise ValueError(f"Unknown axis: {axis!r}")
    return found


def format_hint(axis: Union[Axis, str]) -> str:
    ax = coerce_axis(axis)
    label = _AXIS_RULES[ax][0]
    return f"Invalid {label.lower()} format. Use formats like: " + ", ".join(FORMAT_EXAMPLES[ax])


# ---------------- Conversions ----------------

def dms_to_decimal(degrees: float, minutes: float, seconds: float, direction: str) -> float:
    decimal = degrees + minutes / 60 + seconds / 3600
    if direction.upper() in ("S", "W"):
        decimal = -decimal
    return decimal


def decimal_to_dms(decimal: float, axis: Union[Axis, str]) -> DmsValue:
    """
    Split decimal degrees into degrees/minutes/seconds.
    Seconds are rounded to 0.01; a rounded 60.00 carries into minutes.
    """
    ax = coerce_axis(axis)
    if not math.isfinite(decimal):
        raise ValueError(f"Cannot convert non-finite value {decimal!r} to DMS")

    _, _, positive, negative = _AXIS_RULES[ax]
    direction = positive if decimal >= 0 else negative

    a = abs(decimal)
    degrees = math.floor(a)
    minutes = math.floor((a - degrees) * 60)
    seconds = round(max((a - degrees - minutes / 60) * 3600, 0.0), 2)

    if seconds >= 60:
        seconds -= 60
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        degrees += 1
    return DmsValue(int(degrees), int(minutes), seconds, direction)


# ──────────────────────────────────────────────────────────────────────────────
# Coordinate strings: ordered table of tagged matchers, first match wins.
# {deg} is filled with the axis' degree width; the letter is checked afterwards.
# ──────────────────────────────────────────────────────────────────────────────

_PATTERN_TABLE = (
    ("packed",          r"^(?P<deg>{deg})(?P<min>\d{{2}})(?P<sec>\d{{2}})(?P<dir>[NSEW])$"),
    ("packed_dot",      r"^(?P<deg>{deg})\.(?P<min>\d{{2}})(?P<sec>\d{{2}})(?P<dir>[NSEW])$"),
    ("spaced",          r"^(?P<deg>{deg}) (?P<min>\d{{1,2}}) (?P<sec>\d{{1,2}}(?:\.\d+)?)(?P<dir>[NSEW])$"),
    ("symbols",         r"^(?P<deg>{deg})[°º](?P<min>\d{{1,2}})['′’](?P<sec>\d{{1,2}}(?:\.\d+)?)(?:\"|″|”|'')(?P<dir>[NSEW])$"),
    ("packed_frac",     r"^(?P<deg>{deg})(?P<min>\d{{2}})(?P<sec>\d{{2}}\.\d+)(?P<dir>[NSEW])$"),
    ("packed_dot_frac", r"^(?P<deg>{deg})\.(?P<min>\d{{2}})(?P<sec>\d{{2}}\.\d+)(?P<dir>[NSEW])$"),
)

_DEGREE_WIDTH = {
    Axis.LATITUDE: r"\d{1,2}",
    Axis.LONGITUDE: r"\d{1,3}",
}


def _compile_matchers(ax: Axis) -> Tuple[Tuple[str, re.Pattern], ...]:
    return tuple(
        (tag, re.compile(pattern.format(deg=_DEGREE_WIDTH[ax]), re.IGNORECASE))
        for tag, pattern in _PATTERN_TABLE
    )


MATCHERS = {ax: _compile_matchers(ax) for ax in Axis}

_WS_RE = re.compile(r"\s+")
# a space survives only between two digits, where it separates fields
_LOOSE_SPACE_RE = re.compile(r" (?=\D)|(?<=\D) ")


def clean_coordinate_text(text: str) -> str:
    s = _WS_RE.sub(" ", text.strip().upper())
    return _LOOSE_SPACE_RE.sub("", s)


def _candidates(text: str) -> Tuple[str, ...]:
    # spaced fields first; a stray space inside packed digits gets a second, space-free pass
    cleaned = clean_coordinate_text(text)
    stripped = cleaned.replace(" ", "")
    return (cleaned,) if stripped == cleaned else (cleaned, stripped)


def match_coordinate_string(text: str, axis: Union[Axis, str]) -> Optional[Tuple[str, DmsValue]]:
    """Like parse_coordinate_string, but also report which pattern matched."""
    ax = coerce_axis(axis)
    if not isinstance(text, str):
        return None

    _, max_degrees, positive, negative = _AXIS_RULES[ax]

    for candidate in _candidates(text):
        for tag, rx in MATCHERS[ax]:
            m = rx.match(candidate)
            if not m:
                continue

            degrees = int(m.group("deg"))
            minutes = int(m.group("min"))
            seconds = float(m.group("sec"))
            direction = m.group("dir").upper()

            if direction not in (positive, negative):
                logger.debug("Rejected %r as %s: direction %s does not fit the axis", text, ax.value, direction)
                return None
            if degrees > max_degrees or minutes >= 60 or seconds >= 60:
                logger.debug("Rejected %r as %s: %s fields out of range", text, ax.value, tag)
                return None
            return tag, DmsValue(degrees, minutes, seconds, direction)

    return None


def parse_coordinate_string(text: str, axis: Union[Axis, str]) -> Optional[DmsValue]:
    """
    Decompose a compact coordinate string ("392008N", "39.2008N", "39 20 08N",
    39°20'08"N and the fractional-second variants) into DMS.
    Returns None when nothing matches or the matched fields are out of range.
    """
    found = match_coordinate_string(text, axis)
    return found[1] if found else None


# ---------------- Validation helpers ----------------

def _check_position(latitude: float, longitude: float) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise NotANumber("Latitude and longitude must be valid numbers")
    if not (-90.0 <= latitude <= 90.0):
        raise OutOfRange("Latitude must be between -90 and 90", axis=Axis.LATITUDE, bound=(-90.0, 90.0))
    if not (-180.0 <= longitude <= 180.0):
        raise OutOfRange("Longitude must be between -180 and 180", axis=Axis.LONGITUDE, bound=(-180.0, 180.0))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _field(payload: Mapping[str, Any], name: str) -> str:
    # accept snake_case (python callers) and camelCase (form field names)
    if name in payload:
        return _text(payload[name])
    return _text(payload.get(_camel(name)))


def _number(raw: str, what: str) -> float:
    # float() also accepts digit separators such as "4_0"
    if "_" in raw:
        raise NotANumber(f"{what} must be a number")
    try:
        value = float(raw)
    except ValueError:
        raise NotANumber(f"{what} must be a number") from None
    if not math.isfinite(value):
        raise NotANumber(f"{what} must be a number")
    return value


# ---------------- Normalization ----------------

def _from_decimal(payload: Mapping[str, Any]) -> Tuple[float, float]:
    lat_raw = _field(payload, "latitude")
    lng_raw = _field(payload, "longitude")
    if not lat_raw or not lng_raw:
        raise MissingField("Latitude and longitude are required")
    return _number(lat_raw, "Latitude"), _number(lng_raw, "Longitude")


def _dms_axis(payload: Mapping[str, Any], prefix: str, ax: Axis) -> float:
    label, max_degrees, positive, negative = _AXIS_RULES[ax]

    deg_raw = _field(payload, f"{prefix}_degrees")
    if not deg_raw:
        raise MissingField("Latitude and longitude coordinates are required")
    degrees = _number(deg_raw, f"{label} degrees")
    min_raw = _field(payload, f"{prefix}_minutes")
    minutes = _number(min_raw, f"{label} minutes") if min_raw else 0.0
    sec_raw = _field(payload, f"{prefix}_seconds")
    seconds = _number(sec_raw, f"{label} seconds") if sec_raw else 0.0

    direction = _field(payload, f"{prefix}_direction").upper()
    if not direction:
        raise MissingField(f"{label} direction is required")
    if direction not in (positive, negative):
        raise InvalidFormat(f"{label} direction must be {positive} or {negative}", axis=ax)

    if not (0 <= degrees <= max_degrees):
        raise OutOfRange(f"{label} degrees must be between 0 and {max_degrees}", axis=ax, bound=(0, max_degrees))
    if not (0 <= minutes <= 59):
        raise OutOfRange(f"{label} minutes must be between 0 and 59", axis=ax, bound=(0, 59))
    if not (0 <= seconds < 60):
        raise OutOfRange(f"{label} seconds must be at least 0 and less than 60", axis=ax, bound=(0, 60))

    return dms_to_decimal(degrees, minutes, seconds, direction)


def _from_dms(payload: Mapping[str, Any]) -> Tuple[float, float]:
    return _dms_axis(payload, "lat", Axis.LATITUDE), _dms_axis(payload, "lng", Axis.LONGITUDE)


def _from_string(payload: Mapping[str, Any]) -> Tuple[float, float]:
    lat_raw = _field(payload, "latitude")
    lng_raw = _field(payload, "longitude")
    if not lat_raw or not lng_raw:
        raise MissingField("Latitude and longitude are required")

    values = []
    for raw, ax in ((lat_raw, Axis.LATITUDE), (lng_raw, Axis.LONGITUDE)):
        dms = parse_coordinate_string(raw, ax)
        if dms is None:
            hint = format_hint(ax)
            raise InvalidFormat(hint, axis=ax, hint=hint)
        values.append(dms.to_decimal())
    return values[0], values[1]


_HANDLERS = {
    CoordinateFormat.DECIMAL: _from_decimal,
    CoordinateFormat.DMS: _from_dms,
    CoordinateFormat.STRING: _from_string,
}


def normalize(input_mode: Union[CoordinateFormat, str], payload: Mapping[str, Any]) -> GeoPosition:
    """
    Turn one of the three form encodings into a validated GeoPosition.

    Raises a CoordinateError subclass (MissingField, NotANumber, OutOfRange,
    InvalidFormat) for bad user input; an unknown input_mode is a ValueError.
    """
    try:
        mode = CoordinateFormat(input_mode)
    except ValueError:
        raise ValueError(f"Unknown coordinate input mode: {input_mode!r}") from None

    latitude, longitude = _HANDLERS[mode](payload)
    return GeoPosition(latitude=latitude, longitude=longitude)
