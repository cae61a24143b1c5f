"""Chat-completions client for the hosted language model.

Talks to any OpenAI-compatible ``/chat/completions`` endpoint. Only the
first choice's message content is used.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings


logger = logging.getLogger(__name__)


class LLMError(Exception):
	"""Base error for language model calls."""


class LLMAuthError(LLMError):
	"""Raised when the API key is missing or rejected."""


class LLMConnectionError(LLMError):
	"""Raised when the endpoint cannot be reached or returns an error status."""


class LLMResponseError(LLMError):
	"""Raised when the reply does not have the expected shape."""


class LLMClient:
	def __init__(
		self,
		api_key: str,
		base_url: str = "https://api.openai.com/v1",
		model: str = "gpt-4o",
		timeout: float = 60.0,
		transport: Optional[httpx.BaseTransport] = None,
	) -> None:
		self._api_key = api_key
		self._base_url = base_url.rstrip("/")
		self._model = model
		self._timeout = timeout
		self._transport = transport
		self._client: Optional[httpx.Client] = None

	@classmethod
	def from_settings(cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> "LLMClient":
		return cls(
			api_key=settings.api_key,
			base_url=settings.base_url,
			model=settings.model,
			timeout=settings.timeout_seconds,
			transport=transport,
		)

	@property
	def model(self) -> str:
		return self._model

	def _get_client(self) -> httpx.Client:
		if self._client is None:
			self._client = httpx.Client(
				base_url=self._base_url,
				timeout=self._timeout,
				headers={"Authorization": f"Bearer {self._api_key}"},
				transport=self._transport,
			)
		return self._client

	def close(self) -> None:
		if self._client is not None:
			self._client.close()
			self._client = None

	def __enter__(self) -> "LLMClient":
		return self

	def __exit__(self, *exc_info: Any) -> None:
		self.close()

	def chat(self, system: str, user: str, temperature: float = 0.0) -> str:
		"""Send one system + user exchange and return the reply text.

		Raises:
			LLMAuthError: If no API key is configured or the key is rejected.
			LLMConnectionError: If the request fails.
			LLMResponseError: If the reply has no message content.
		"""
		if not self._api_key:
			raise LLMAuthError("No API key configured; set REPO_ANALYZER_API_KEY or OPENAI_API_KEY")

		messages: List[Dict[str, str]] = [
			{"role": "system", "content": system},
			{"role": "user", "content": user},
		]
		payload = {"model": self._model, "temperature": temperature, "messages": messages}

		client = self._get_client()
		logger.debug("Requesting completion from %s (model=%s)", self._base_url, self._model)
		try:
			response = client.post("/chat/completions", json=payload)
			if response.status_code in (401, 403):
				raise LLMAuthError(f"API key rejected ({response.status_code})")
			response.raise_for_status()
			data = response.json()
		except httpx.ConnectError as e:
			raise LLMConnectionError(f"Cannot connect to {self._base_url}: {e}") from e
		except httpx.TimeoutException as e:
			raise LLMConnectionError(f"Request timed out: {e}") from e
		except httpx.HTTPStatusError as e:
			raise LLMConnectionError(f"HTTP error: {e}") from e
		except httpx.HTTPError as e:
			raise LLMConnectionError(f"Request failed: {e}") from e
		except ValueError as e:
			raise LLMResponseError(f"Reply is not JSON: {e}") from e

		try:
			content = data["choices"][0]["message"]["content"]
		except (KeyError, IndexError, TypeError) as e:
			raise LLMResponseError(f"Unexpected reply shape: {data!r}") from e
		if not isinstance(content, str):
			raise LLMResponseError(f"Reply content is not text: {content!r}")
		return content
