from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Sequence

from .tree import build_directory_tree


logger = logging.getLogger(__name__)


def count_extensions(paths: Iterable[str]) -> Dict[str, int]:
	counts: Dict[str, int] = {}
	for path in paths:
		ext = os.path.splitext(path)[1]
		counts[ext] = counts.get(ext, 0) + 1
	return counts


def summarize_repository(root_path: str, files: Sequence[str]) -> str:
	"""Format the scan of ``root_path`` as a text block for a prompt."""
	relative_paths = [os.path.relpath(f, root_path) for f in files]
	extension_summary = "\n".join(
		f"{ext}: {count} files" for ext, count in count_extensions(relative_paths).items()
	)
	return (
		f"\nRepository at: {root_path}\n"
		f"Total files analyzed: {len(files)}\n"
		f"\nFile types:\n{extension_summary}\n"
		f"\nDirectory structure:\n{build_directory_tree(relative_paths)}\n"
	)


def extract_code_snippets(files: Sequence[str], max_files: int = 5, max_lines: int = 50) -> str:
	parts: List[str] = []
	for path in files[:max_files]:
		try:
			with open(path, "r", encoding="utf-8") as fh:
				content = fh.read()
		except (OSError, UnicodeDecodeError) as e:
			logger.error("Error reading file %s: %s", path, e)
			continue
		lines = content.split("\n")[:max_lines]
		ext = os.path.splitext(path)[1].replace(".", "", 1)
		parts.append(f"\nFile: {os.path.basename(path)}\n```{ext}\n" + "\n".join(lines) + "\n```\n")
	return "".join(parts)
