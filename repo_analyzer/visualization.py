from __future__ import annotations

import os
import re
import threading
from typing import Dict, List, Optional

from .model import (
	CodeQualityData,
	DependencyGraphData,
	FileDistributionData,
	FileTypeCount,
	GraphLink,
	GraphNode,
	Metric,
	ScanResult,
	VisualizationData,
	VisualizationUpdate,
)


_FUNCTION_RE = re.compile(r"function")
_COMMENT_RE = re.compile(r"(//|/\*|\*/)")


def file_distribution(result: ScanResult) -> FileDistributionData:
	return FileDistributionData(
		files=[FileTypeCount(type=ext or "(none)", count=n) for ext, n in result.extension_counts.items()]
	)


def code_quality_metrics(code: str, complexity_score: int) -> CodeQualityData:
	return CodeQualityData(
		metrics=[
			Metric(name="Complexity Score", value=complexity_score),
			Metric(name="Functions", value=len(_FUNCTION_RE.findall(code))),
			Metric(name="Lines", value=len(code.split("\n"))),
			Metric(name="Comments", value=len(_COMMENT_RE.findall(code))),
		]
	)


def _resolve_python_relative(root: str, importer: str, target: str, known: Dict[str, str]) -> Optional[str]:
	"""Resolve ``..pkg.mod`` style imports: one leading dot per package level."""
	level = len(target) - len(target.lstrip("."))
	rest = target[level:]
	if not rest:
		return None
	base = os.path.dirname(importer)
	for _ in range(level - 1):
		base = os.path.dirname(base)
	module_path = os.path.join(base, rest.replace(".", os.sep))
	for candidate in (module_path + ".py", os.path.join(module_path, "__init__.py")):
		rel = os.path.relpath(candidate, root)
		if rel in known:
			return rel
	return None


def _resolve_import(root: str, importer: str, target: str, known: Dict[str, str]) -> Optional[str]:
	"""Map an import string onto a retained file, relative to ``root``."""
	if target.startswith(".") and importer.endswith(".py"):
		return _resolve_python_relative(root, importer, target, known)
	if target.startswith("."):
		base = os.path.normpath(os.path.join(os.path.dirname(importer), target))
		for candidate in (base, *(base + ext for ext in (".ts", ".tsx", ".js", ".jsx"))):
			rel = os.path.relpath(candidate, root)
			if rel in known:
				return rel
		return None
	module_path = target.replace(".", os.sep)
	for candidate in (module_path + ".py", os.path.join(module_path, "__init__.py")):
		if candidate in known:
			return candidate
	return None


def dependency_graph_data(root: str, deps: Dict[str, List[str]]) -> DependencyGraphData:
	"""Build force-graph nodes and links from a file -> imports mapping.

	Nodes are retained files, keyed by path relative to ``root`` and grouped
	by extension. Imports that resolve to another retained file become links;
	external imports are dropped. Node value is its link degree.
	"""
	known = {os.path.relpath(path, root): path for path in deps}
	degree: Dict[str, int] = {rel: 0 for rel in known}
	links: List[GraphLink] = []
	seen = set()

	for path, imports in deps.items():
		source = os.path.relpath(path, root)
		for imp in imports:
			target = _resolve_import(root, path, imp, known)
			if target is None or target == source or (source, target) in seen:
				continue
			seen.add((source, target))
			links.append(GraphLink(source=source, target=target))
			degree[source] += 1
			degree[target] += 1

	nodes = [
		GraphNode(id=rel, group=os.path.splitext(rel)[1], value=degree[rel])
		for rel in known
	]
	return DependencyGraphData(nodes=nodes, links=links)


class VisualizationPanel:
	"""Holds the chart most recently pushed to the panel."""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._current: Optional[VisualizationUpdate] = None

	def update(self, data: VisualizationData, title: str) -> VisualizationUpdate:
		update = VisualizationUpdate(title=title, data=data)
		with self._lock:
			self._current = update
		return update

	def current(self) -> Optional[VisualizationUpdate]:
		with self._lock:
			return self._current

	def clear(self) -> None:
		with self._lock:
			self._current = None


panel = VisualizationPanel()
