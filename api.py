from __future__ import annotations

import os
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from repo_analyzer.config import get_settings
from repo_analyzer.llm import LLMAuthError, LLMClient, LLMError
from repo_analyzer.model import ComplexityResult, ScanResult, VisualizationUpdate
from repo_analyzer.service import AnalysisService, complexity_report, detect_language
from repo_analyzer.visualization import code_quality_metrics, panel
from web.app import app as panel_app


app = FastAPI(title="Repository Analyzer")
app.mount("/panel", panel_app)


class RootRequest(BaseModel):
	root_path: str
	max_files: Optional[int] = Field(None, gt=0)


class FileRequest(BaseModel):
	file_path: str
	content: Optional[str] = None


class CodeRequest(BaseModel):
	code: str
	language: Optional[str] = None
	file_path: Optional[str] = None


class AnalysisResponse(BaseModel):
	markdown: str


class ComplexityResponse(BaseModel):
	result: ComplexityResult
	markdown: str
	visualization: VisualizationUpdate


def get_service() -> Iterator[AnalysisService]:
	settings = get_settings()
	client = LLMClient.from_settings(settings)
	try:
		yield AnalysisService(settings, client)
	finally:
		client.close()


@app.exception_handler(LLMAuthError)
def handle_auth_error(request: Request, exc: LLMAuthError) -> JSONResponse:
	return JSONResponse(status_code=401, content={"detail": str(exc)})


@app.exception_handler(LLMError)
def handle_llm_error(request: Request, exc: LLMError) -> JSONResponse:
	return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(OSError)
def handle_os_error(request: Request, exc: OSError) -> JSONResponse:
	return JSONResponse(status_code=400, content={"detail": str(exc)})


def _root(path: str) -> str:
	root = os.path.abspath(path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	return root


def _language(req: CodeRequest) -> str:
	if req.language:
		return req.language
	return detect_language(req.file_path or "")


@app.post("/scan", response_model=ScanResult)
def scan_repo(req: RootRequest, service: AnalysisService = Depends(get_service)) -> ScanResult:
	return service.scan(_root(req.root_path), req.max_files)


@app.post("/analyze/repository", response_model=AnalysisResponse)
def analyze_repository(req: RootRequest, service: AnalysisService = Depends(get_service)) -> AnalysisResponse:
	return AnalysisResponse(markdown=service.analyze_repository(_root(req.root_path), req.max_files))


@app.post("/analyze/file", response_model=AnalysisResponse)
def analyze_file(req: FileRequest, service: AnalysisService = Depends(get_service)) -> AnalysisResponse:
	content = req.content
	if content is None:
		try:
			with open(req.file_path, "r", encoding="utf-8") as fh:
				content = fh.read()
		except (OSError, UnicodeDecodeError) as e:
			raise HTTPException(status_code=400, detail=f"Cannot read file: {e}")
	return AnalysisResponse(markdown=service.analyze_file(req.file_path, content))


@app.post("/dependency-graph", response_model=AnalysisResponse)
def dependency_graph(req: RootRequest, service: AnalysisService = Depends(get_service)) -> AnalysisResponse:
	return AnalysisResponse(markdown=service.generate_dependency_graph(_root(req.root_path), req.max_files))


@app.post("/complexity", response_model=ComplexityResponse)
def complexity(req: CodeRequest, service: AnalysisService = Depends(get_service)) -> ComplexityResponse:
	result = service.analyze_complexity(req.code, _language(req))
	update = panel.update(code_quality_metrics(req.code, result.complexity_score), "Code Complexity Analysis")
	return ComplexityResponse(result=result, markdown=complexity_report(result), visualization=update)


@app.post("/tests", response_model=AnalysisResponse)
def generate_tests(req: CodeRequest, service: AnalysisService = Depends(get_service)) -> AnalysisResponse:
	return AnalysisResponse(markdown=service.generate_tests(req.code, _language(req)))


@app.post("/improvements", response_model=AnalysisResponse)
def suggest_improvements(req: CodeRequest, service: AnalysisService = Depends(get_service)) -> AnalysisResponse:
	return AnalysisResponse(markdown=service.suggest_improvements(req.code, _language(req)))


@app.post("/documentation", response_model=AnalysisResponse)
def document_code(req: CodeRequest, service: AnalysisService = Depends(get_service)) -> AnalysisResponse:
	return AnalysisResponse(markdown=service.document_code(req.code, _language(req)))


def create_app() -> FastAPI:
	return app
