from __future__ import annotations

import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
	"""Send package logs to stderr at ``level``.

	Safe to call more than once; the handler is replaced, not duplicated.
	"""
	numeric = logging.getLevelName(level.upper())
	if not isinstance(numeric, int):
		raise ValueError(f"Unknown log level: {level}")

	logger = logging.getLogger("repo_analyzer")
	for handler in list(logger.handlers):
		if getattr(handler, "_repo_analyzer", False):
			logger.removeHandler(handler)

	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(logging.Formatter(LOG_FORMAT))
	handler._repo_analyzer = True  # type: ignore[attr-defined]
	logger.addHandler(handler)
	logger.setLevel(numeric)
