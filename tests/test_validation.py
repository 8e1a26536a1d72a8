# file: tests/test_validation.py
from app.schema import (
    DEFAULT_TONE, ArgumentProblem, CalendarRequest, InvalidArguments, validate_calendar_args,
)


def test_minimal_arguments_get_defaults():
    req = validate_calendar_args({"brand": "Acme", "audience": "CTOs"})

    assert isinstance(req, CalendarRequest)
    assert req.brand == "Acme"
    assert req.audience == "CTOs"
    assert req.tone == DEFAULT_TONE
    assert req.start_date is None
    assert req.key_dates == []
    assert req.urls == []


def test_all_arguments_kept():
    req = validate_calendar_args({
        "brand": "Acme",
        "audience": "CTOs",
        "tone": "Playful",
        "start_date": "2026-11-01",
        "key_dates": ["2026-11-15 Launch"],
        "urls": ["https://acme.test"],
    })

    assert req.tone == "Playful"
    assert req.start_date == "2026-11-01"
    assert req.key_dates == ["2026-11-15 Launch"]
    assert req.urls == ["https://acme.test"]


def test_missing_required_fields_are_named():
    result = validate_calendar_args({"tone": "Dry"})

    assert isinstance(result, InvalidArguments)
    assert result.reason is ArgumentProblem.MISSING_REQUIRED
    assert result.fields == ("brand", "audience")
    assert result.message == "Missing required field(s): brand, audience"


def test_blank_or_non_string_required_field_counts_as_missing():
    assert validate_calendar_args({"brand": "  ", "audience": "CTOs"}).fields == ("brand",)
    assert validate_calendar_args({"brand": "Acme", "audience": 42}).fields == ("audience",)


def test_arguments_that_are_not_a_mapping():
    result = validate_calendar_args(["Acme", "CTOs"])

    assert isinstance(result, InvalidArguments)
    assert result.fields == ("brand", "audience")


def test_wrong_typed_optionals_fall_back_to_defaults():
    req = validate_calendar_args({
        "brand": "Acme",
        "audience": "CTOs",
        "tone": 7,
        "start_date": "next monday",
        "key_dates": "2026-11-15 Launch",
        "urls": ["https://acme.test", None, 3],
    })

    assert req.tone == DEFAULT_TONE
    assert req.start_date is None
    assert req.key_dates == []
    assert req.urls == ["https://acme.test"]


def test_start_date_must_be_exactly_iso_shaped():
    base = {"brand": "Acme", "audience": "CTOs"}

    assert validate_calendar_args({**base, "start_date": "2026-11-01"}).start_date == "2026-11-01"
    for bad in ("2026-11-01\n", " 2026-11-01", "2026-11-01T09:00", "2026-1-01"):
        assert validate_calendar_args({**base, "start_date": bad}).start_date is None
