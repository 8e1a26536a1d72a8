# file: calendar_mcp/schemas.py
from types import MappingProxyType

from app.schema import DEFAULT_TONE

TOOL_NAME = "generateCalendar"

SERVER_NAME = "content-calendar-mcp"
SERVER_VERSION = "0.1.0"
PROTOCOL_VERSION = "2024-11-05"

_INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "brand": {"type": "string", "description": "Brand name"},
        "audience": {"type": "string", "description": "Target audience"},
        "tone": {"type": "string", "description": "Writing tone", "default": DEFAULT_TONE},
        "start_date": {"type": "string", "description": "YYYY-MM-DD", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
        "key_dates": {
            "type": "array",
            "items": {"type": "string"},
            "description": "e.g. ['2025-10-15 Product Update']",
        },
        "urls": {"type": "array", "items": {"type": "string"}, "description": "Reference URLs"},
    },
    "required": ["brand", "audience"],
    "additionalProperties": False,
}


def _freeze(value):
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value):
    if isinstance(value, MappingProxyType):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


# Read-only all the way down; list_tools() hands out plain copies
GENERATE_CALENDAR = _freeze({
    "name": TOOL_NAME,
    "description": "Generate a 30-day social calendar + 5 LinkedIn posts.",
    "input_schema": _INPUT_SCHEMA,
})


def list_tools() -> list[dict]:
    return [_thaw(GENERATE_CALENDAR)]


def server_info() -> dict:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        "capabilities": {"tools": {}},
    }
