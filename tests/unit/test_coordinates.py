import math

import pytest

from app.services.coordinates import (
    Axis,
    CoordinateError,
    CoordinateFormat,
    DmsValue,
    GeoPosition,
    InvalidFormat,
    MissingField,
    NotANumber,
    OutOfRange,
    clean_coordinate_text,
    decimal_to_dms,
    dms_to_decimal,
    match_coordinate_string,
    normalize,
    parse_coordinate_string,
)


# ---------------- dms_to_decimal / decimal_to_dms ----------------

def test_dms_to_decimal_adds_minutes_and_seconds() -> None:
    assert dms_to_decimal(39, 20, 8, "N") == pytest.approx(39.3356, abs=1e-4)


@pytest.mark.parametrize("direction", ["S", "W", "s", "w"])
def test_dms_to_decimal_negates_south_and_west(direction: str) -> None:
    assert dms_to_decimal(40, 30, 0, direction) == pytest.approx(-40.5)


def test_dms_to_decimal_does_not_validate_ranges() -> None:
    assert dms_to_decimal(200, 75, 90, "E") == pytest.approx(200 + 75 / 60 + 90 / 3600)


def test_decimal_to_dms_splits_fields() -> None:
    dms = decimal_to_dms(-120.78611111, Axis.LONGITUDE)
    assert dms.degrees == 120
    assert dms.minutes == 47
    assert dms.seconds == pytest.approx(10.0, abs=0.01)
    assert dms.direction == "W"


@pytest.mark.parametrize(
    ("value", "axis", "direction"),
    [
        (0.0, "latitude", "N"),
        (-0.5, "lat", "S"),
        (12.0, "longitude", "E"),
        (-12.0, "lng", "W"),
    ],
)
def test_decimal_to_dms_direction_follows_sign_and_axis(value: float, axis: str, direction: str) -> None:
    assert decimal_to_dms(value, axis).direction == direction


def test_decimal_to_dms_carries_rounded_seconds() -> None:
    assert decimal_to_dms(0.99999999, Axis.LATITUDE) == DmsValue(1, 0, 0.0, "N")


def test_decimal_to_dms_rejects_non_finite() -> None:
    with pytest.raises(ValueError):
        decimal_to_dms(math.nan, Axis.LATITUDE)


@pytest.mark.parametrize("lat", [-90.0, -45.5, -0.0001, 0.0, 12.3456789, 39.3356, 89.99999, 90.0])
def test_latitude_round_trip(lat: float) -> None:
    assert dms_to_decimal(*decimal_to_dms(lat, "lat")) == pytest.approx(lat, abs=1e-4)


@pytest.mark.parametrize("lng", [-180.0, -120.7861, -0.25, 0.0, 64.6167, 137.1164, 179.999999, 180.0])
def test_longitude_round_trip(lng: float) -> None:
    assert dms_to_decimal(*decimal_to_dms(lng, "lng")) == pytest.approx(lng, abs=1e-4)


# ---------------- parse_coordinate_string ----------------

def test_parse_packed_latitude() -> None:
    dms = parse_coordinate_string("392008N", Axis.LATITUDE)
    assert dms == DmsValue(degrees=39, minutes=20, seconds=8, direction="N")
    assert dms.to_decimal() == pytest.approx(39.3356, abs=1e-4)


def test_parse_packed_longitude_with_three_degree_digits() -> None:
    dms = parse_coordinate_string("1204710W", Axis.LONGITUDE)
    assert dms == DmsValue(degrees=120, minutes=47, seconds=10, direction="W")
    assert dms.to_decimal() == pytest.approx(-120.7861, abs=1e-4)


@pytest.mark.parametrize(
    ("text", "axis", "tag", "expected"),
    [
        ("392008N", "latitude", "packed", (39, 20, 8.0, "N")),
        ("39.2008N", "latitude", "packed_dot", (39, 20, 8.0, "N")),
        ("39 20 08N", "latitude", "spaced", (39, 20, 8.0, "N")),
        ("39°20'08\"N", "latitude", "symbols", (39, 20, 8.0, "N")),
        ("392008.5N", "latitude", "packed_frac", (39, 20, 8.5, "N")),
        ("39.2008.5N", "latitude", "packed_dot_frac", (39, 20, 8.5, "N")),
        ("116.0908W", "longitude", "packed_dot", (116, 9, 8.0, "W")),
        ("116°09′08″W", "longitude", "symbols", (116, 9, 8.0, "W")),
        ("5 07 30S", "latitude", "spaced", (5, 7, 30.0, "S")),
    ],
)
def test_each_pattern_in_the_table(text: str, axis: str, tag: str, expected: tuple) -> None:
    found = match_coordinate_string(text, axis)
    assert found is not None
    assert found[0] == tag
    assert tuple(found[1]) == expected


@pytest.mark.parametrize(
    "text",
    ["392008n", "  392008 N ", "39° 20' 08\" n", " 39  20 08 N", "39 2008N", "3920 08N", "39 20 08 N"],
)
def test_parse_is_case_and_whitespace_tolerant(text: str) -> None:
    dms = parse_coordinate_string(text, Axis.LATITUDE)
    assert dms is not None
    assert (dms.degrees, dms.minutes, dms.seconds, dms.direction) == (39, 20, 8.0, "N")


def test_parse_packed_longitude_with_stray_space() -> None:
    found = match_coordinate_string("1204 710W", Axis.LONGITUDE)
    assert found == ("packed", DmsValue(120, 47, 10.0, "W"))


def test_clean_keeps_spaces_between_digit_groups_only() -> None:
    assert clean_coordinate_text(" 39  20 08 n ") == "39 20 08N"
    assert clean_coordinate_text("39° 20' 08\" N") == "39°20'08\"N"


def test_parse_rejects_letter_from_the_other_axis() -> None:
    assert parse_coordinate_string("392008N", Axis.LONGITUDE) is None
    assert parse_coordinate_string("392008E", Axis.LATITUDE) is None


@pytest.mark.parametrize(
    ("text", "axis"),
    [
        ("999999N", "latitude"),     # degrees 99 > 90
        ("1810000E", "longitude"),   # degrees 181 > 180
        ("396008N", "latitude"),     # minutes 60
        ("392060N", "latitude"),     # seconds 60
        ("39.2075.5N", "latitude"),  # seconds 75.5
    ],
)
def test_parse_rejects_out_of_range_fields(text: str, axis: str) -> None:
    assert parse_coordinate_string(text, axis) is None


@pytest.mark.parametrize("text", ["", "abc", "39.5", "N392008", "39.20N", "39-20-08N", "1204710W"])
def test_parse_returns_none_for_unrecognised_latitude(text: str) -> None:
    assert parse_coordinate_string(text, Axis.LATITUDE) is None


def test_parse_treats_bad_axis_as_programmer_error() -> None:
    with pytest.raises(ValueError):
        parse_coordinate_string("392008N", "altitude")


# ---------------- normalize ----------------

def test_normalize_decimal() -> None:
    pos = normalize("decimal", {"latitude": "40.7128", "longitude": " -116.1619 "})
    assert pos == GeoPosition(latitude=40.7128, longitude=-116.1619)


def test_normalize_decimal_latitude_out_of_range() -> None:
    with pytest.raises(OutOfRange) as exc:
        normalize("decimal", {"latitude": "91", "longitude": "0"})
    assert exc.value.axis is Axis.LATITUDE
    assert exc.value.bound == (-90.0, 90.0)
    assert "between -90 and 90" in str(exc.value)


def test_normalize_decimal_longitude_out_of_range() -> None:
    with pytest.raises(OutOfRange) as exc:
        normalize(CoordinateFormat.DECIMAL, {"latitude": "0", "longitude": "-180.5"})
    assert exc.value.axis is Axis.LONGITUDE


@pytest.mark.parametrize("payload", [{"latitude": "", "longitude": "1"}, {"latitude": "1"}, {}])
def test_normalize_decimal_missing(payload: dict) -> None:
    with pytest.raises(MissingField):
        normalize("decimal", payload)


@pytest.mark.parametrize("raw", ["abc", "12abc", "nan", "inf", "-Infinity", "4_0", "1_000"])
def test_normalize_decimal_not_a_number(raw: str) -> None:
    with pytest.raises(NotANumber):
        normalize("decimal", {"latitude": raw, "longitude": "0"})


def _dms_payload(**overrides) -> dict:
    payload = {
        "lat_degrees": "40", "lat_minutes": "30", "lat_seconds": "0", "lat_direction": "N",
        "lng_degrees": "74", "lng_minutes": "0", "lng_seconds": "0", "lng_direction": "W",
    }
    payload.update(overrides)
    return payload


def test_normalize_dms() -> None:
    pos = normalize("dms", _dms_payload())
    assert pos.latitude == pytest.approx(40.5)
    assert pos.longitude == pytest.approx(-74.0)


def test_normalize_dms_accepts_form_field_names() -> None:
    pos = normalize("dms", {
        "latDegrees": "40", "latMinutes": "30", "latSeconds": "0", "latDirection": "N",
        "lngDegrees": "74", "lngMinutes": "0", "lngSeconds": "0", "lngDirection": "W",
    })
    assert (pos.latitude, pos.longitude) == (pytest.approx(40.5), pytest.approx(-74.0))


def test_normalize_dms_blank_minutes_and_seconds_default_to_zero() -> None:
    pos = normalize("dms", _dms_payload(lat_minutes="", lat_seconds=None, lng_minutes=" "))
    assert pos.latitude == pytest.approx(40.0)
    assert pos.longitude == pytest.approx(-74.0)


@pytest.mark.parametrize(
    ("overrides", "axis", "fragment"),
    [
        ({"lat_degrees": "91"}, Axis.LATITUDE, "Latitude degrees"),
        ({"lat_degrees": "-1"}, Axis.LATITUDE, "Latitude degrees"),
        ({"lng_degrees": "181"}, Axis.LONGITUDE, "Longitude degrees"),
        ({"lat_minutes": "60"}, Axis.LATITUDE, "Latitude minutes"),
        ({"lng_minutes": "59.5"}, Axis.LONGITUDE, "Longitude minutes"),
        ({"lat_seconds": "60"}, Axis.LATITUDE, "Latitude seconds"),
        ({"lng_seconds": "-0.1"}, Axis.LONGITUDE, "Longitude seconds"),
    ],
)
def test_normalize_dms_field_bounds(overrides: dict, axis: Axis, fragment: str) -> None:
    with pytest.raises(OutOfRange) as exc:
        normalize("dms", _dms_payload(**overrides))
    assert exc.value.axis is axis
    assert fragment in exc.value.message


def test_normalize_dms_final_range_check() -> None:
    # every field is in bounds but 90°30' is past the pole
    with pytest.raises(OutOfRange) as exc:
        normalize("dms", _dms_payload(lat_degrees="90", lat_minutes="30"))
    assert exc.value.axis is Axis.LATITUDE


def test_normalize_dms_requires_degrees() -> None:
    with pytest.raises(MissingField):
        normalize("dms", _dms_payload(lng_degrees=""))


def test_normalize_dms_rejects_direction_of_other_axis() -> None:
    with pytest.raises(InvalidFormat):
        normalize("dms", _dms_payload(lat_direction="E"))


def test_normalize_dms_not_a_number() -> None:
    with pytest.raises(NotANumber):
        normalize("dms", _dms_payload(lat_minutes="thirty"))


def test_normalize_string() -> None:
    pos = normalize("string", {"latitude": "392008N", "longitude": "1204710W"})
    assert pos.latitude == pytest.approx(39.3356, abs=1e-4)
    assert pos.longitude == pytest.approx(-120.7861, abs=1e-4)


@pytest.mark.parametrize(
    ("payload", "axis", "example"),
    [
        ({"latitude": "39.5", "longitude": "1204710W"}, Axis.LATITUDE, "392008N"),
        ({"latitude": "392008N", "longitude": "392008N"}, Axis.LONGITUDE, "1160908W"),
    ],
)
def test_normalize_string_invalid_format_carries_hint(payload: dict, axis: Axis, example: str) -> None:
    with pytest.raises(InvalidFormat) as exc:
        normalize("string", payload)
    assert exc.value.axis is axis
    assert example in exc.value.hint
    assert exc.value.code == "invalid_format"


def test_normalize_string_missing() -> None:
    with pytest.raises(MissingField):
        normalize("string", {"latitude": "392008N", "longitude": ""})


def test_normalize_is_idempotent() -> None:
    payload = _dms_payload(lat_seconds="12.34", lng_seconds="56.78")
    first = normalize("dms", payload)
    second = normalize("dms", payload)
    assert first == second
    assert first.latitude.hex() == second.latitude.hex()
    assert first.longitude.hex() == second.longitude.hex()


def test_normalize_unknown_mode_is_not_a_user_error() -> None:
    with pytest.raises(ValueError) as exc:
        normalize("utm", {})
    assert not isinstance(exc.value, CoordinateError)


def test_geo_position_guards_its_invariant() -> None:
    with pytest.raises(OutOfRange):
        GeoPosition(latitude=0.0, longitude=180.0001)
    with pytest.raises(NotANumber):
        GeoPosition(latitude=math.nan, longitude=0.0)


def test_coordinate_errors_are_value_errors() -> None:
    for cls in (MissingField, NotANumber, InvalidFormat):
        assert issubclass(cls, CoordinateError)
        assert issubclass(cls, ValueError)
