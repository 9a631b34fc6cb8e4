"""Anthropic Messages API client with lazy, one-time initialization.

The underlying SDK client is built on first use rather than at import or app
start. If the API key is missing or malformed the client moves to ``FAILED``
and stays there for the life of the process: every later call raises a
:class:`ConfigurationError` chained to that one failure. Initialization is
guarded by a lock so concurrent first callers observe a single outcome.

Upstream failures are classified exactly once, here. The client never retries.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

import anthropic

from promptchat.core.config import AnthropicSettings
from promptchat.core.exceptions import (
    AuthConfigError,
    ConfigurationError,
    GenerationError,
    InvalidRequest,
    RateLimited,
    UpstreamUnavailable,
)

from .models import ClientState, ConfigurationReport, GenerationMetadata, GenerationResult, TokenUsage

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "sk-ant-"
MODEL_PREFIX = "claude-"
DEPRECATED_MODEL_MARKERS = ("20240620", "20240229")
PROBE_MAX_TOKENS = 10
PROBE_PROMPT = "Hello"

ClientFactory = Callable[..., Any]


def _credential_issue(api_key: Optional[str]) -> Optional[str]:
    if not api_key:
        return "ANTHROPIC__API_KEY is not configured"
    if not api_key.startswith(API_KEY_PREFIX):
        return f"ANTHROPIC__API_KEY has an invalid format, it must start with {API_KEY_PREFIX}"
    return None


def classify_upstream_error(exc: anthropic.APIError) -> GenerationError:
    status = getattr(exc, "status_code", None)
    if status == 400:
        return InvalidRequest(f"Invalid request to the generation service: {exc.message}")
    if status == 401:
        return AuthConfigError()
    if status == 429:
        return RateLimited()
    if status is not None and status >= 500:
        return UpstreamUnavailable()
    return GenerationError(f"Error communicating with the generation service: {exc.message}")


class GenerationClient:
    def __init__(
        self,
        settings: AnthropicSettings,
        client_factory: ClientFactory = anthropic.AsyncAnthropic,
    ) -> None:
        self._settings = settings
        self._client_factory = client_factory
        self._client: Any = None
        self._state = ClientState.UNINITIALIZED
        self._failure: Optional[ConfigurationError] = None
        self._lock = threading.Lock()

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def model(self) -> str:
        return self._settings.model

    def _ensure_ready(self) -> Any:
        if self._state is ClientState.READY:
            return self._client
        with self._lock:
            if self._state is ClientState.UNINITIALIZED:
                self._initialize()
            if self._failure is not None:
                raise ConfigurationError(self._failure.message) from self._failure
            return self._client

    def _initialize(self) -> None:
        issue = _credential_issue(self._settings.api_key)
        if issue is not None:
            self._failure = ConfigurationError(issue)
            self._state = ClientState.FAILED
            logger.error("Generation client initialization failed: %s", issue)
            return

        self._client = self._client_factory(api_key=self._settings.api_key, max_retries=0)
        self._state = ClientState.READY
        logger.info("Generation client initialized: model=%s", self.model)

    async def generate(
        self,
        prompt: str,
        *,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        system_message: Optional[str] = None,
    ) -> GenerationResult:
        client = self._ensure_ready()
        max_tokens = max_tokens if max_tokens is not None else self._settings.default_max_tokens
        temperature = temperature if temperature is not None else self._settings.default_temperature

        request: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_message:
            request["system"] = system_message

        logger.info(
            "Sending generation request: model=%s max_tokens=%s temperature=%s prompt_length=%s",
            self.model,
            max_tokens,
            temperature,
            len(prompt),
        )
        started = time.perf_counter()
        try:
            response = await client.messages.create(**request)
        except anthropic.APIError as exc:
            elapsed = time.perf_counter() - started
            error = classify_upstream_error(exc)
            logger.error(
                "Generation request failed after %.3fs: status=%s error=%s",
                elapsed,
                getattr(exc, "status_code", None),
                exc,
            )
            raise error from exc
        elapsed = time.perf_counter() - started

        content = getattr(response, "content", None)
        if not content:
            raise GenerationError("The generation service returned no output")
        block = content[0]
        if getattr(block, "type", None) != "text":
            raise GenerationError("Unexpected response type from the generation service")

        usage = TokenUsage(input=response.usage.input_tokens, output=response.usage.output_tokens)
        result = GenerationResult(
            text=block.text.strip(),
            usage=usage,
            metadata=GenerationMetadata(
                model=self.model,
                response_time_seconds=round(elapsed, 3),
                stop_reason=getattr(response, "stop_reason", None),
                temperature=temperature,
                max_tokens=max_tokens,
            ),
        )
        logger.info(
            "Generation completed in %.3fs: input_tokens=%s output_tokens=%s response_length=%s",
            elapsed,
            usage.input,
            usage.output,
            len(result.text),
        )
        return result

    async def check_connectivity(self) -> bool:
        """Send a tiny probe request; any failure yields False."""
        try:
            client = self._ensure_ready()
            await client.messages.create(
                model=self.model,
                max_tokens=PROBE_MAX_TOKENS,
                messages=[{"role": "user", "content": PROBE_PROMPT}],
            )
        except Exception as exc:  # noqa: BLE001 - startup diagnostic only
            logger.warning("Generation service connectivity check failed: %s", exc)
            return False
        logger.info("Generation service connectivity verified")
        return True

    def credential_issue(self) -> Optional[str]:
        """Why the configured API key is unusable, or None when it looks valid."""
        return _credential_issue(self._settings.api_key)

    def check_configuration(self) -> ConfigurationReport:
        """Static checks of credential and model name; no network, no state change."""
        issues: list[str] = []
        credential_issue = self.credential_issue()
        if credential_issue is not None:
            issues.append(credential_issue)

        model = self._settings.model
        if any(marker in model for marker in DEPRECATED_MODEL_MARKERS):
            issues.append(f"Model {model} is deprecated, use a current claude model")
        if not model.startswith(MODEL_PREFIX):
            issues.append(f'Model {model} is not valid, it must start with "{MODEL_PREFIX}"')

        return ConfigurationReport(valid=not issues, issues=issues)
