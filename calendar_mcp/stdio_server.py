# calendar_mcp/stdio_server.py
# Same generateCalendar tool as the HTTP gateway, served over stdio for desktop MCP clients.

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from app.config import get_settings
from app.logging_config import setup_logging
from app.schema import DEFAULT_TONE
from calendar_mcp.backends import GenerationBackend, build_backend
from calendar_mcp.errors import RpcError
from calendar_mcp.schemas import GENERATE_CALENDAR, SERVER_NAME, TOOL_NAME
from calendar_mcp.servers.calendar_server import CalendarServer

# One backend per process, built on first use
_backend: Optional[GenerationBackend] = None


def _server() -> CalendarServer:
    global _backend
    if _backend is None:
        _backend = build_backend(get_settings())
    return CalendarServer(_backend)


async def close_backend():
    """Release the outbound session, if one was ever opened"""
    global _backend
    if _backend is not None:
        await _backend.close()
        _backend = None


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict]:
    try:
        yield {}
    finally:
        await close_backend()


mcp = FastMCP(name=SERVER_NAME, lifespan=lifespan)


async def generate_calendar(
    brand: str,
    audience: str,
    tone: str = DEFAULT_TONE,
    start_date: Optional[str] = None,
    key_dates: Optional[list[str]] = None,
    urls: Optional[list[str]] = None,
) -> Any:
    """
    Generate a 30-day social calendar + 5 LinkedIn posts for a brand and audience.
    Returns the calendar JSON (calendar, linkedin_posts, hashtags, utms).
    """
    args = {"brand": brand, "audience": audience, "tone": tone, "start_date": start_date,
            "key_dates": key_dates, "urls": urls}
    try:
        result = await _server().call_tool(TOOL_NAME, args)
    except RpcError as e:
        raise ToolError(e.message) from e
    return result["content"][1]["value"]


mcp.tool(name=TOOL_NAME, description=GENERATE_CALENDAR["description"])(generate_calendar)


def main():
    setup_logging(console_stderr=True)
    mcp.run()


if __name__ == "__main__":
    main()
