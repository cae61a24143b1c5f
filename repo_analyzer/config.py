from __future__ import annotations

import os
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .fs_scan import DEFAULT_MAX_FILES, IGNORE_PATTERNS, SUPPORTED_EXTENSIONS
from .model import ScanRequest


class Settings(BaseSettings):
	model_config = SettingsConfigDict(
		env_prefix="REPO_ANALYZER_",
		env_file=".env",
		env_file_encoding="utf-8",
		extra="ignore",
		populate_by_name=True,
	)

	api_key: str = Field("", validation_alias=AliasChoices("REPO_ANALYZER_API_KEY", "OPENAI_API_KEY"))
	base_url: str = "https://api.openai.com/v1"
	model: str = "gpt-4o"
	timeout_seconds: float = 60.0

	max_files: int = Field(DEFAULT_MAX_FILES, gt=0)
	supported_extensions: List[str] = list(SUPPORTED_EXTENSIONS)
	ignore_patterns: List[str] = list(IGNORE_PATTERNS)
	sort_entries: bool = False

	snippet_files: int = 5
	snippet_lines: int = 50

	log_level: str = "INFO"

	def scan_request(self, root_path: str, max_files: Optional[int] = None) -> ScanRequest:
		return ScanRequest(
			root_path=os.path.abspath(root_path),
			max_files=self.max_files if max_files is None else max_files,
			allowed_extensions=frozenset(self.supported_extensions),
			ignore_patterns=frozenset(self.ignore_patterns),
			sort_entries=self.sort_entries,
		)


def get_settings() -> Settings:
	return Settings()
