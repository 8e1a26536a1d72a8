# file: calendar_mcp/servers/calendar_server.py
#!/usr/bin/env python3
import logging
from typing import Any, Optional

from aiohttp import web

from app.config import Settings, get_settings
from app.logging_config import setup_logging
from app.schema import InvalidArguments, validate_calendar_args
from calendar_mcp.backends import GenerationBackend, build_backend
from calendar_mcp.errors import (
    INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR, SERVER_ERROR, RpcError,
)
from calendar_mcp.schemas import TOOL_NAME, list_tools, server_info

log = logging.getLogger("gateway")

BACKEND_KEY = web.AppKey("backend", GenerationBackend)


def ok(id_: Any, result: Any) -> dict:
    return {"jsonrpc": "2.0", "id": id_, "result": result}


def err(id_: Any, code: int, message: str) -> dict:
    return {"jsonrpc": "2.0", "id": id_, "error": {"code": code, "message": message}}


class CalendarServer:
    """MCP gateway for the single generateCalendar tool"""

    def __init__(self, backend: GenerationBackend):
        self.backend = backend

    async def call_tool(self, name: Any, args: Any) -> dict:
        """Validate, forward to the backend and wrap the payload as MCP content"""
        if name != TOOL_NAME:
            raise RpcError(INVALID_PARAMS, "Unknown tool")

        checked = validate_calendar_args(args)
        if isinstance(checked, InvalidArguments):
            raise RpcError(INVALID_PARAMS, checked.message)

        data = await self.backend.generate(checked)
        return {
            "content": [
                {"type": "text", "text": "Calendar generated."},
                {"type": "json", "value": data},
            ]
        }

    async def dispatch(self, rpc: Any) -> dict:
        """One envelope in, exactly one envelope out, with the same id"""
        if not isinstance(rpc, dict):
            return err(None, INVALID_REQUEST, "Invalid Request")

        id_ = rpc.get("id")
        method = rpc.get("method")
        log.info("rpc method=%s id=%s", method, id_)

        try:
            if method == "tools/list":
                return ok(id_, {"tools": list_tools()})

            if method == "initialize":
                return ok(id_, server_info())

            if method == "tools/call":
                params = rpc.get("params")
                if not isinstance(params, dict):
                    params = {}
                result = await self.call_tool(params.get("name"), params.get("arguments") or {})
                return ok(id_, result)

            if method == "ping":
                return ok(id_, {"ok": True})

            return err(id_, METHOD_NOT_FOUND, "Method not found")

        except RpcError as e:
            log.warning("rpc id=%s failed %s: %s", id_, e.code, e.message)
            return {"jsonrpc": "2.0", "id": id_, "error": e.to_dict()}
        except Exception as e:
            log.exception("rpc id=%s crashed", id_)
            return err(id_, SERVER_ERROR, str(e))

    async def handle_rpc(self, request: web.Request) -> web.Response:
        try:
            data = await request.json()
        except ValueError:
            return web.json_response(err(None, PARSE_ERROR, "Parse error"))
        return web.json_response(await self.dispatch(data))

    async def handle_health(self, request: web.Request) -> web.Response:
        return web.Response(text="ok")


async def _close_backend(app: web.Application):
    await app[BACKEND_KEY].close()


def create_app(settings: Optional[Settings] = None, backend: Optional[GenerationBackend] = None) -> web.Application:
    backend = backend or build_backend(settings or get_settings())
    server = CalendarServer(backend)

    app = web.Application(client_max_size=1024 ** 2)
    app[BACKEND_KEY] = backend
    app.router.add_get("/health", server.handle_health)
    # Some clients hit "/" first
    app.router.add_post("/", server.handle_rpc)
    app.router.add_post("/mcp", server.handle_rpc)
    app.on_cleanup.append(_close_backend)
    return app


def main():
    setup_logging()
    settings = get_settings()
    log.info("MCP JSON-RPC server on :%s (/, /mcp) backend=%s", settings.port, settings.backend)
    web.run_app(create_app(settings), port=settings.port)


if __name__ == "__main__":
    main()
