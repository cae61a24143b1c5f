from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union


BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
BLANK_INDENT = "    "


@dataclass
class FileNode:
	name: str


@dataclass
class DirectoryNode:
	name: str
	children: Dict[str, "TreeNode"] = field(default_factory=dict)


TreeNode = Union[FileNode, DirectoryNode]


def build_tree(relative_paths: Iterable[str], sep: str = os.sep) -> DirectoryNode:
	"""Nest every path segment under its parent; the last segment is a leaf.

	Children keep insertion order. A later path reusing a name at the same
	level replaces the earlier entry, so a file and a directory of the same
	name share one key.
	"""
	root = DirectoryNode(name="")
	for rel_path in relative_paths:
		parts = rel_path.split(sep)
		current = root
		for part in parts[:-1]:
			child = current.children.get(part)
			if not isinstance(child, DirectoryNode):
				child = DirectoryNode(name=part)
				current.children[part] = child
			current = child
		current.children[parts[-1]] = FileNode(name=parts[-1])
	return root


def render_tree(node: DirectoryNode, prefix: str = "") -> str:
	lines: List[str] = []
	_render_children(node, prefix, lines)
	return "".join(lines)


def _render_children(node: DirectoryNode, prefix: str, lines: List[str]) -> None:
	entries = list(node.children.values())
	for i, child in enumerate(entries):
		is_last = i == len(entries) - 1
		lines.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{child.name}\n")
		if isinstance(child, DirectoryNode):
			_render_children(child, prefix + (BLANK_INDENT if is_last else PIPE_INDENT), lines)


def build_directory_tree(relative_paths: Iterable[str]) -> str:
	return render_tree(build_tree(relative_paths))
