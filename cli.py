from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional

import httpx
import uvicorn

from repo_analyzer.config import get_settings
from repo_analyzer.llm import LLMClient, LLMError
from repo_analyzer.logging_setup import configure_logging
from repo_analyzer.service import AnalysisService, complexity_report, detect_language, test_file_path
from repo_analyzer.summarize import summarize_repository
from repo_analyzer.visualization import code_quality_metrics


logger = logging.getLogger("repo_analyzer.cli")


def _read(path: str) -> str:
	with open(path, "r", encoding="utf-8") as fh:
		return fh.read()


def _language(args: argparse.Namespace) -> str:
	return args.language or detect_language(args.file)


def cmd_scan(args: argparse.Namespace, service: AnalysisService) -> None:
	result = service.scan(args.path, args.max_files)
	if args.json:
		print(json.dumps(result.model_dump(), indent=2))
		return
	for path in result.files:
		print(path)


def cmd_summary(args: argparse.Namespace, service: AnalysisService) -> None:
	result = service.scan(args.path, args.max_files)
	print(summarize_repository(result.root_path, result.files))


def cmd_analyze_repo(args: argparse.Namespace, service: AnalysisService) -> None:
	logger.info("Starting repository analysis...")
	print(service.analyze_repository(args.path, args.max_files))
	logger.info("Repository analysis completed successfully!")


def cmd_analyze_file(args: argparse.Namespace, service: AnalysisService) -> None:
	logger.info("Analyzing file: %s...", os.path.basename(args.file))
	print(service.analyze_file(args.file, _read(args.file)))


def cmd_dependency_graph(args: argparse.Namespace, service: AnalysisService) -> None:
	logger.info("Generating dependency graph...")
	print(service.generate_dependency_graph(args.path, args.max_files))


def _post_to_panel(panel_url: str, payload: dict) -> None:
	try:
		response = httpx.post(panel_url.rstrip("/") + "/update", json=payload, timeout=10)
		response.raise_for_status()
	except httpx.HTTPError as e:
		logger.warning("Could not update visualization panel at %s: %s", panel_url, e)


def cmd_complexity(args: argparse.Namespace, service: AnalysisService) -> None:
	code = _read(args.file)
	result = service.analyze_complexity(code, _language(args))
	if args.panel_url:
		data = code_quality_metrics(code, result.complexity_score)
		_post_to_panel(args.panel_url, {"title": "Code Complexity Analysis", "data": data.model_dump()})
	print(complexity_report(result))


def cmd_tests(args: argparse.Namespace, service: AnalysisService) -> None:
	tests = service.generate_tests(_read(args.file), _language(args))
	if args.write:
		target = test_file_path(args.file)
		with open(target, "w", encoding="utf-8") as fh:
			fh.write(tests)
		logger.info("Wrote %s", target)
		print(target)
		return
	print(tests)


def cmd_improve(args: argparse.Namespace, service: AnalysisService) -> None:
	print(service.suggest_improvements(_read(args.file), _language(args)))


def cmd_document(args: argparse.Namespace, service: AnalysisService) -> None:
	print(service.document_code(_read(args.file), _language(args)))


def cmd_serve(args: argparse.Namespace, service: AnalysisService) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="repo-analyzer")
	parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
	sub = parser.add_subparsers(dest="cmd", required=True)

	def repo_parser(name: str, help: str, func) -> argparse.ArgumentParser:
		p = sub.add_parser(name, help=help)
		p.add_argument("path", help="Path to repository root")
		p.add_argument("--max-files", type=int, default=None, help="Stop after this many files")
		p.set_defaults(func=func)
		return p

	def file_parser(name: str, help: str, func) -> argparse.ArgumentParser:
		p = sub.add_parser(name, help=help)
		p.add_argument("file", help="Source file")
		p.add_argument("--language", default=None, help="Language name (default: from extension)")
		p.set_defaults(func=func)
		return p

	ps = repo_parser("scan", "List the files a repository scan retains", cmd_scan)
	ps.add_argument("--sort", action="store_true", help="Visit directory entries in name order")
	ps.add_argument("--json", action="store_true", help="Print the full scan result as JSON")

	repo_parser("summary", "Print the repository summary used in prompts", cmd_summary)
	repo_parser("analyze-repo", "Analyze a repository with the language model", cmd_analyze_repo)
	repo_parser("dependency-graph", "Generate a Mermaid dependency graph", cmd_dependency_graph)

	pf = sub.add_parser("analyze-file", help="Analyze a single file")
	pf.add_argument("file", help="Source file")
	pf.set_defaults(func=cmd_analyze_file)

	pc = file_parser("complexity", "Score code complexity", cmd_complexity)
	pc.add_argument("--panel-url", default=None, help="Push a code-quality chart to a running panel")

	pt = file_parser("tests", "Generate test cases", cmd_tests)
	pt.add_argument("--write", action="store_true", help="Write <name>.test<ext> next to the source")

	file_parser("improve", "Suggest code improvements", cmd_improve)
	file_parser("document", "Add documentation comments", cmd_document)

	pv = sub.add_parser("serve", help="Run FastAPI server")
	pv.add_argument("--host", default="127.0.0.1")
	pv.add_argument("--port", type=int, default=8000)
	pv.add_argument("--reload", action="store_true")
	pv.set_defaults(func=cmd_serve)

	return parser


def main(argv: Optional[list] = None) -> int:
	args = build_parser().parse_args(argv)
	settings = get_settings()
	if getattr(args, "sort", False):
		settings = settings.model_copy(update={"sort_entries": True})
	try:
		configure_logging(args.log_level or settings.log_level)
		with LLMClient.from_settings(settings) as client:
			args.func(args, AnalysisService(settings, client))
	except (OSError, ValueError, LLMError) as e:
		logger.error("%s failed: %s", args.cmd, e)
		print(f"error: {e}", file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
