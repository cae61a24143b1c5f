from __future__ import annotations

import logging
import os
import re
from typing import Optional

from pydantic import ValidationError

from . import prompts
from .config import Settings
from .fs_scan import scan
from .imports import extract_dependencies
from .llm import LLMClient, LLMResponseError
from .model import ComplexityResult, ScanResult
from .summarize import extract_code_snippets, summarize_repository


logger = logging.getLogger(__name__)


NO_FILES_MESSAGE = "No supported files found in the repository."

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class AnalysisService:
	"""Runs each analysis command: scan, build the prompt, ask the model."""

	def __init__(self, settings: Settings, client: LLMClient) -> None:
		self.settings = settings
		self.client = client

	def scan(self, root_path: str, max_files: Optional[int] = None) -> ScanResult:
		return scan(self.settings.scan_request(root_path, max_files))

	def analyze_repository(self, root_path: str, max_files: Optional[int] = None) -> str:
		result = self.scan(root_path, max_files)
		if result.is_empty:
			return NO_FILES_MESSAGE
		summary = summarize_repository(result.root_path, result.files)
		snippets = extract_code_snippets(
			result.files,
			max_files=self.settings.snippet_files,
			max_lines=self.settings.snippet_lines,
		)
		logger.info("Analyzing repository %s (%d files)", result.root_path, len(result.files))
		return self.client.chat(*prompts.repository_analysis(summary, snippets), temperature=0)

	def analyze_file(self, file_path: str, content: str) -> str:
		logger.info("Analyzing file %s", os.path.basename(file_path))
		return self.client.chat(*prompts.file_analysis(file_path, content), temperature=0)

	def generate_dependency_graph(self, root_path: str, max_files: Optional[int] = None) -> str:
		result = self.scan(root_path, max_files)
		if result.is_empty:
			return NO_FILES_MESSAGE
		summary = summarize_repository(result.root_path, result.files)
		dependencies = extract_dependencies(result.files)
		logger.info("Generating dependency graph for %s", result.root_path)
		return self.client.chat(*prompts.dependency_graph(summary, dependencies), temperature=0)

	def analyze_complexity(self, code: str, language: str) -> ComplexityResult:
		reply = self.client.chat(*prompts.complexity(code, language), temperature=0)
		return parse_complexity(reply)

	def generate_tests(self, code: str, language: str) -> str:
		return self.client.chat(*prompts.test_cases(code, language), temperature=0.2)

	def suggest_improvements(self, code: str, language: str) -> str:
		return self.client.chat(*prompts.improvements(code, language), temperature=0.1)

	def document_code(self, code: str, language: str) -> str:
		return self.client.chat(*prompts.documentation(code, language), temperature=0)


def parse_complexity(reply: str) -> ComplexityResult:
	text = reply.strip()
	match = _FENCE_RE.match(text)
	if match:
		text = match.group(1)
	try:
		return ComplexityResult.model_validate_json(text)
	except ValidationError as e:
		raise LLMResponseError(f"Could not parse complexity reply: {e}") from e


def complexity_report(result: ComplexityResult) -> str:
	return f"# Code Complexity Analysis\n\n**Complexity Score:** {result.complexity_score}/10\n\n{result.analysis}"


def test_file_path(source_path: str) -> str:
	base, ext = os.path.splitext(os.path.basename(source_path))
	return os.path.join(os.path.dirname(source_path), f"{base}.test{ext}")


LANGUAGE_BY_EXTENSION = {
	".py": "python",
	".ts": "typescript",
	".tsx": "typescriptreact",
	".js": "javascript",
	".jsx": "javascriptreact",
	".java": "java",
	".go": "go",
	".rs": "rust",
	".rust": "rust",
	".rb": "ruby",
	".php": "php",
	".swift": "swift",
	".c": "c",
	".cpp": "cpp",
	".cs": "csharp",
	".html": "html",
	".css": "css",
}


def detect_language(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return LANGUAGE_BY_EXTENSION.get(ext.lower(), "plaintext")
