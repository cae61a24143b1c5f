from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from repo_analyzer.config import Settings


class FakeLLMClient:
	"""Records prompts and answers with a canned reply."""

	def __init__(self, reply: str = "ok") -> None:
		self.reply = reply
		self.calls: List[Tuple[str, str, float]] = []

	def chat(self, system: str, user: str, temperature: float = 0.0) -> str:
		self.calls.append((system, user, temperature))
		return self.reply

	def close(self) -> None:
		pass


def write_files(root, paths, content: Optional[str] = None) -> None:
	for rel in paths:
		p = root / rel
		p.parent.mkdir(parents=True, exist_ok=True)
		p.write_text(content if content is not None else f"// {rel}\n")


@pytest.fixture
def settings() -> Settings:
	return Settings(_env_file=None, api_key="test-key", sort_entries=True)


@pytest.fixture
def fake_client() -> FakeLLMClient:
	return FakeLLMClient()
