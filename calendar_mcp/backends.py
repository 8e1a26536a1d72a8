# file: calendar_mcp/backends.py
import logging
from datetime import date
from typing import Any, Callable, Optional

import aiohttp

from app.config import COMPLETION_BACKEND, FUNCTION_BACKEND, Settings
from app.schema import CalendarRequest, contract_problems, reshape_payload
from app.tools.llm import build_completion_body, completion_text, extract_json
from calendar_mcp.errors import MissingCredentialError, ModelOutputError, UpstreamError

log = logging.getLogger("backend")


class GenerationBackend:
    """Base client for the service that actually writes the calendar"""

    def __init__(self, url: str, timeout: float = 120.0):
        self.url = url
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def connect(self):
        """Initialize connection"""
        if not self.session:
            self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))

    async def close(self):
        """Close connection"""
        if self.session:
            await self.session.close()
            self.session = None

    async def post_json(self, body: dict, headers: Optional[dict] = None) -> Any:
        """One POST, released on every exit path; non-2xx becomes UpstreamError"""
        if not self.session:
            await self.connect()

        async with self.session.post(self.url, json=body, headers=headers) as response:
            if not 200 <= response.status < 300:
                error = UpstreamError(response.status, await response.text())
                log.warning("upstream %s answered %s: %s", self.url, error.status, error.body[:200])
                raise error
            return await response.json(content_type=None)

    async def generate(self, req: CalendarRequest) -> Any:
        raise NotImplementedError


class FunctionBackend(GenerationBackend):
    """Hosted generator function: arguments in, calendar JSON out"""

    async def generate(self, req: CalendarRequest) -> Any:
        body = req.model_dump(exclude_none=True)
        log.info("forwarding generateCalendar brand=%r to %s", req.brand, self.url)
        return await self.post_json(body)


class CompletionBackend(GenerationBackend):
    """Chat completion API prompted to answer with the calendar JSON"""

    def __init__(
        self,
        url: str,
        api_key: Optional[str],
        model: str,
        temperature: float = 0.7,
        timeout: float = 120.0,
        clock: Callable[[], date] = date.today,
    ):
        super().__init__(url, timeout)
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.clock = clock

    async def generate(self, req: CalendarRequest) -> Any:
        if not self.api_key:
            raise MissingCredentialError("OPENAI_API_KEY is not set")

        body = build_completion_body(req, self.model, self.temperature, today=self.clock())
        log.info("requesting completion model=%s brand=%r", self.model, req.brand)
        data = await self.post_json(body, headers={"Authorization": f"Bearer {self.api_key}"})

        text = completion_text(data)
        try:
            payload = extract_json(text)
        except ValueError:
            log.warning("model output was not JSON: %r", text[:200])
            raise ModelOutputError()

        urls_supplied = bool(req.urls)
        payload = reshape_payload(payload, urls_supplied)
        problems = contract_problems(payload, urls_supplied)
        if problems:
            log.warning("calendar payload off contract (%d issues): %s", len(problems), "; ".join(problems[:5]))
        return payload


def build_backend(settings: Settings) -> GenerationBackend:
    if settings.backend == COMPLETION_BACKEND:
        return CompletionBackend(
            settings.completion_url,
            api_key=settings.openai_api_key,
            model=settings.completion_model,
            temperature=settings.completion_temperature,
            timeout=settings.upstream_timeout,
        )
    if settings.backend != FUNCTION_BACKEND:
        raise ValueError(f"Unknown CALENDAR_BACKEND: {settings.backend!r}")
    return FunctionBackend(settings.generator_url, timeout=settings.upstream_timeout)
