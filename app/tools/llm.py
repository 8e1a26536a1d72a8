from __future__ import annotations
import re, json, logging
from datetime import date
from typing import Any, Callable, List, Optional
from app.schema import CalendarRequest, MAX_TITLE_CHARS

log = logging.getLogger("llm")

SYSTEM_PROMPT = (
    "You are a senior social media strategist. "
    "You always answer with one valid JSON object and nothing else: "
    "no markdown fences, no commentary."
)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_OBJECT_START = re.compile(r"\{")

# --- prompt rendering ---

def campaign_month(today: date) -> str:
    """Year and month as digits only, e.g. 202610."""
    return today.strftime("%Y%m")

def campaign_slug(brand: str) -> str:
    """'Acme & Co.' -> 'acme-co'"""
    return _NON_ALNUM.sub("-", brand.lower()).strip("-")

def render_user_prompt(req: CalendarRequest, today: Optional[date] = None) -> str:
    today = today or date.today()
    start = req.start_date or f"today ({today.isoformat()})"
    campaign = f"{campaign_slug(req.brand)}-{campaign_month(today)}"

    return f"""Create a 30-day social media content calendar.

Brand: {req.brand}
Audience: {req.audience}
Tone: {req.tone}
Start date: {start}
Key dates: {json.dumps(req.key_dates)}
Reference URLs: {json.dumps(req.urls)}

Return a JSON object with exactly these keys:
- "calendar": exactly 30 items, one per consecutive day from the start date, each {{"date": "YYYY-MM-DD", "theme": string, "title": string of at most {MAX_TITLE_CHARS} characters, "hook": string, "cta": string}}. Weave the key dates into the matching days.
- "linkedin_posts": exactly 5 items, each {{"text": string}}, written for {req.audience}.
- "hashtags": 3 to 8 lowercase hashtags without spaces.
- "utms": [] when no reference URLs were given. Otherwise one item per platform (linkedin, x, instagram, facebook), each {{"platform": string, "url": string}}, where url is the first reference URL with utm_source=<platform>&utm_medium=social&utm_campaign={campaign} appended.
"""

def build_completion_body(req: CalendarRequest, model: str, temperature: float,
                          today: Optional[date] = None) -> dict:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": render_user_prompt(req, today)},
        ],
        "response_format": {"type": "json_object"},
        "temperature": temperature,
    }

# --- completion reply shapes ---

def _chat_choices(data: Any) -> Optional[str]:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None

def _output_text(data: Any) -> Optional[str]:
    if isinstance(data, dict) and isinstance(data.get("output_text"), str):
        return data["output_text"]
    return None

REPLY_STRATEGIES: List[Callable[[Any], Optional[str]]] = [_chat_choices, _output_text]

def completion_text(data: Any) -> str:
    """First text any reply-shape strategy finds, or an empty string."""
    for strategy in REPLY_STRATEGIES:
        text = strategy(data)
        if text is not None:
            return text
    return ""

# --- JSON out of model text ---

_MISSING = object()

def _direct(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return _MISSING

def _last_object(text: str) -> Any:
    """Last top-level {...} in free text, skipping objects nested inside an earlier one."""
    decoder = json.JSONDecoder()
    found = _MISSING
    pos = 0
    while True:
        m = _OBJECT_START.search(text, pos)
        if not m:
            return found
        try:
            obj, end = decoder.raw_decode(text, m.start())
        except ValueError:
            pos = m.start() + 1
            continue
        if isinstance(obj, dict):
            found = obj
        pos = end

EXTRACT_STRATEGIES: List[Callable[[str], Any]] = [_direct, _last_object]

def extract_json(text: str) -> Any:
    """
    Try each strategy in order, first success wins.
    Raises ValueError when none of them produce JSON.
    """
    for strategy in EXTRACT_STRATEGIES:
        value = strategy(text or "")
        if value is not _MISSING:
            if strategy is not _direct:
                log.info("model JSON recovered via %s", strategy.__name__)
            return value
    raise ValueError("no JSON in model output")
