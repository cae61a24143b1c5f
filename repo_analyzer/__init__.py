"""Repository analyzer: collect source files, prompt a hosted model, chart the results.

Modules:
- fs_scan.py: Bounded depth-first file collection.
- tree.py: Directory tree building and ASCII rendering.
- summarize.py: Extension counts, repository summary and code snippets for prompts.
- imports.py: Regex import extraction and dependency listings.
- prompts.py: Prompt templates for each analysis command.
- llm.py: Chat-completions HTTP client.
- service.py: Analysis operations tying the above together.
- visualization.py: Chart payloads and panel state.
- model.py: Data structures shared across the package.
- config.py: Settings loaded from the environment.
- logging_setup.py: Log handler configuration for the command line.
"""

__all__ = [
	"fs_scan",
	"tree",
	"summarize",
	"imports",
	"prompts",
	"llm",
	"service",
	"visualization",
	"model",
	"config",
	"logging_setup",
]
