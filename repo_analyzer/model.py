from __future__ import annotations

import os
from typing import Dict, FrozenSet, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ScanRequest(BaseModel):
	model_config = ConfigDict(frozen=True)

	root_path: str
	max_files: int = Field(gt=0)
	allowed_extensions: FrozenSet[str]
	ignore_patterns: FrozenSet[str] = frozenset()
	# Enumeration order is the default; sorting by name is opt-in.
	sort_entries: bool = False


class ScanResult(BaseModel):
	root_path: str
	files: List[str] = []
	extension_counts: Dict[str, int] = {}
	directory_tree: str = ""

	@property
	def relative_paths(self) -> List[str]:
		return [os.path.relpath(f, self.root_path) for f in self.files]

	@property
	def is_empty(self) -> bool:
		return not self.files


class ComplexityResult(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	# Replies use the camelCase key from the prompt's format instructions.
	complexity_score: int = Field(ge=1, le=10, validation_alias="complexityScore")
	analysis: str


class Metric(BaseModel):
	name: str
	value: float


class CodeQualityData(BaseModel):
	type: Literal["codeQuality"] = "codeQuality"
	metrics: List[Metric]


class FileTypeCount(BaseModel):
	type: str
	count: int


class FileDistributionData(BaseModel):
	type: Literal["fileDistribution"] = "fileDistribution"
	files: List[FileTypeCount]


class GraphNode(BaseModel):
	id: str
	group: str = ""
	value: int = 1


class GraphLink(BaseModel):
	source: str
	target: str
	value: int = 1


class DependencyGraphData(BaseModel):
	type: Literal["dependencyGraph"] = "dependencyGraph"
	nodes: List[GraphNode] = []
	links: List[GraphLink] = []


VisualizationData = Union[DependencyGraphData, CodeQualityData, FileDistributionData]


class VisualizationUpdate(BaseModel):
	title: str
	data: VisualizationData = Field(discriminator="type")
