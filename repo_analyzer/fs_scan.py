from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

from .model import ScanRequest, ScanResult
from .summarize import count_extensions
from .tree import build_directory_tree


logger = logging.getLogger(__name__)


SUPPORTED_EXTENSIONS = (
	".js", ".ts", ".jsx", ".tsx",
	".py", ".java", ".go", ".rust",
	".rb", ".php", ".swift", ".c",
	".cpp", ".cs", ".html", ".css",
)

IGNORE_PATTERNS = (
	"node_modules", ".git", "dist", "build",
	"venv", "__pycache__", ".DS_Store",
)

DEFAULT_MAX_FILES = 100


def is_ignored(name: str, ignore_patterns: Iterable[str]) -> bool:
	return any(pattern in name for pattern in ignore_patterns)


def _list_entries(dir_path: str, sort_entries: bool) -> List[os.DirEntry]:
	with os.scandir(dir_path) as it:
		entries = list(it)
	if sort_entries:
		entries.sort(key=lambda e: e.name)
	return entries


def collect_files(request: ScanRequest) -> List[str]:
	"""Walk ``request.root_path`` depth-first and return retained file paths.

	Traversal stops the moment ``max_files`` paths are collected, so a capped
	scan only ever sees a prefix of the tree in enumeration order. Errors on
	the root propagate; errors below it are logged and the entry skipped.
	"""
	root = request.root_path
	if not os.path.exists(root):
		raise FileNotFoundError(f"Repository root not found: {root}")
	if not os.path.isdir(root):
		raise NotADirectoryError(f"Repository root is not a directory: {root}")

	result: List[str] = []

	def traverse(dir_path: str, entries: Optional[List[os.DirEntry]] = None) -> None:
		if len(result) >= request.max_files:
			return
		if entries is None:
			try:
				entries = _list_entries(dir_path, request.sort_entries)
			except OSError as e:
				logger.warning("Skipping unreadable directory %s: %s", dir_path, e)
				return

		for entry in entries:
			if len(result) >= request.max_files:
				break
			if is_ignored(entry.name, request.ignore_patterns):
				continue
			try:
				is_dir = entry.is_dir(follow_symlinks=False)
				is_file = not is_dir and entry.is_file(follow_symlinks=False)
			except OSError as e:
				logger.warning("Skipping %s: %s", entry.path, e)
				continue
			if is_dir:
				traverse(entry.path)
			elif is_file and os.path.splitext(entry.name)[1] in request.allowed_extensions:
				result.append(os.path.abspath(entry.path))

	# Listing the root is outside the per-entry guard so its errors reach the caller.
	traverse(root, _list_entries(root, request.sort_entries))
	return result


def scan(request: ScanRequest) -> ScanResult:
	files = collect_files(request)
	relative_paths = [os.path.relpath(f, request.root_path) for f in files]
	logger.debug("Scanned %s: %d files retained", request.root_path, len(files))
	return ScanResult(
		root_path=request.root_path,
		files=files,
		extension_counts=count_extensions(files),
		directory_tree=build_directory_tree(relative_paths),
	)


def scan_repository(
	root_path: str,
	max_files: int = DEFAULT_MAX_FILES,
	allowed_extensions: Iterable[str] = SUPPORTED_EXTENSIONS,
	ignore_patterns: Iterable[str] = IGNORE_PATTERNS,
	sort_entries: bool = False,
) -> ScanResult:
	request = ScanRequest(
		root_path=os.path.abspath(root_path),
		max_files=max_files,
		allowed_extensions=frozenset(allowed_extensions),
		ignore_patterns=frozenset(ignore_patterns),
		sort_entries=sort_entries,
	)
	return scan(request)
