from __future__ import annotations

import logging
import os
import re
from typing import Dict, List, Sequence


logger = logging.getLogger(__name__)


JS_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx")

JS_IMPORT_RE = re.compile(r"""import\s+(?:{[^}]*}|\*\s+as\s+\w+|\w+)\s+from\s+['"]([^'"]+)['"]""")
PY_IMPORT_RE = re.compile(r"(?:from\s+(\S+)\s+import|import\s+(\S+))")


def extract_imports(path: str, text: str) -> List[str]:
	ext = os.path.splitext(path)[1]
	if ext in JS_EXTENSIONS:
		return [m.group(1) for m in JS_IMPORT_RE.finditer(text)]
	if ext == ".py":
		return [m.group(1) or m.group(2) for m in PY_IMPORT_RE.finditer(text)]
	return []


def dependency_map(files: Sequence[str]) -> Dict[str, List[str]]:
	"""Map each readable file to the import targets found in it."""
	deps: Dict[str, List[str]] = {}
	for path in files:
		try:
			with open(path, "r", encoding="utf-8") as fh:
				text = fh.read()
		except (OSError, UnicodeDecodeError) as e:
			logger.error("Error analyzing dependencies in %s: %s", path, e)
			continue
		deps[path] = extract_imports(path, text)
	return deps


def format_dependencies(deps: Dict[str, List[str]]) -> str:
	parts: List[str] = []
	for path, imports in deps.items():
		if not imports:
			continue
		parts.append(f"File: {os.path.basename(path)}\nImports:\n")
		parts.extend(f"- {imp}\n" for imp in imports)
		parts.append("\n")
	return "".join(parts)


def extract_dependencies(files: Sequence[str]) -> str:
	return format_dependencies(dependency_map(files))
