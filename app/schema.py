# file: app/schema.py
from __future__ import annotations
import datetime as dt
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_TONE = "Confident, friendly"
REQUIRED_FIELDS = ("brand", "audience")
MAX_TITLE_CHARS = 70

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_WHITESPACE = re.compile(r"\s+")

# ---------- tool arguments ----------

class CalendarRequest(BaseModel):
    """Validated generateCalendar arguments. Build it with validate_calendar_args."""

    model_config = ConfigDict(frozen=True)

    brand: str
    audience: str
    tone: str = DEFAULT_TONE
    start_date: Optional[str] = None  # YYYY-MM-DD
    key_dates: List[str] = []
    urls: List[str] = []

class ArgumentProblem(str, Enum):
    MISSING_REQUIRED = "missing_required"

@dataclass(frozen=True)
class InvalidArguments:
    reason: ArgumentProblem
    fields: tuple[str, ...]

    @property
    def message(self) -> str:
        return "Missing required field(s): " + ", ".join(self.fields)

def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None

def _strings(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, str)]

def validate_calendar_args(args: Any) -> Union[CalendarRequest, InvalidArguments]:
    """
    Pure check of a raw arguments mapping.

    Required strings missing or blank -> InvalidArguments naming them.
    Optional fields of the wrong type are treated as absent and get their defaults,
    non-string list items are dropped, a start_date not shaped YYYY-MM-DD is dropped.
    """
    if not isinstance(args, dict):
        args = {}

    missing = tuple(f for f in REQUIRED_FIELDS if _text(args.get(f)) is None)
    if missing:
        return InvalidArguments(ArgumentProblem.MISSING_REQUIRED, missing)

    start_date = args.get("start_date")
    if not (isinstance(start_date, str) and _ISO_DATE.fullmatch(start_date)):
        start_date = None

    return CalendarRequest(
        brand=args["brand"],
        audience=args["audience"],
        tone=_text(args.get("tone")) or DEFAULT_TONE,
        start_date=start_date,
        key_dates=_strings(args.get("key_dates")),
        urls=_strings(args.get("urls")),
    )

# ---------- generation output ----------

class CalendarEntry(BaseModel):
    date: dt.date
    theme: str
    title: str = Field(max_length=MAX_TITLE_CHARS)
    hook: str
    cta: str

class LinkedInPost(BaseModel):
    text: str

class CalendarPayload(BaseModel):
    calendar: List[CalendarEntry] = Field(min_length=30, max_length=30)
    linkedin_posts: List[LinkedInPost] = Field(min_length=5, max_length=5)
    hashtags: List[str] = Field(min_length=3, max_length=8)
    utms: List[Dict[str, Any]] = []

    @field_validator("hashtags")
    @classmethod
    def _hashtag_tokens(cls, tags: List[str]) -> List[str]:
        for tag in tags:
            if tag != tag.lower() or _WHITESPACE.search(tag):
                raise ValueError(f"hashtag must be lowercase without spaces: {tag!r}")
        return tags

def contract_problems(payload: Any, urls_supplied: bool) -> List[str]:
    """Human-readable list of ways `payload` misses the calendar contract (empty when it fits)."""
    if not isinstance(payload, dict):
        return ["payload is not a JSON object"]

    problems: List[str] = []
    try:
        CalendarPayload.model_validate(payload)
    except ValidationError as e:
        for err in e.errors():
            loc = ".".join(str(p) for p in err["loc"]) or "payload"
            problems.append(f"{loc}: {err['msg']}")

    if not urls_supplied and payload.get("utms"):
        problems.append("utms: must be empty when no urls were supplied")
    return problems

def reshape_payload(payload: Any, urls_supplied: bool) -> Any:
    """
    Fix what can be fixed without guessing: lowercase hashtags with whitespace removed,
    titles cut to MAX_TITLE_CHARS, utms emptied when no urls were supplied.
    Anything else is returned untouched.
    """
    if not isinstance(payload, dict):
        return payload
    out = dict(payload)

    tags = out.get("hashtags")
    if isinstance(tags, list):
        out["hashtags"] = [_WHITESPACE.sub("", t).lower() if isinstance(t, str) else t for t in tags]

    entries = out.get("calendar")
    if isinstance(entries, list):
        fixed = []
        for entry in entries:
            if isinstance(entry, dict) and isinstance(entry.get("title"), str) \
                    and len(entry["title"]) > MAX_TITLE_CHARS:
                entry = {**entry, "title": entry["title"][:MAX_TITLE_CHARS].rstrip()}
            fixed.append(entry)
        out["calendar"] = fixed

    if not urls_supplied:
        out["utms"] = []
    return out
