"""Prompt templates sent to the chat model.

Each builder returns a ``(system, user)`` pair.
"""

from __future__ import annotations

import os
from typing import Tuple


Prompt = Tuple[str, str]


def repository_analysis(summary: str, snippets: str) -> Prompt:
	system = f"""You are a code analysis expert. Analyze this repository and provide a detailed report covering:
1. Repository Structure Analysis
2. Code Quality Assessment
3. Architectural Patterns Identified
4. Potential Issues and Recommendations
5. Documentation Quality

Repository Summary:
{summary}

Code Samples from the Repository:
{snippets}"""
	return system, "Analyze this repository and provide a detailed report with the sections mentioned above."


def file_analysis(file_path: str, content: str) -> Prompt:
	ext = os.path.splitext(file_path)[1]
	name = os.path.basename(file_path)
	system = f"""You are a code analysis expert. Analyze this file ({name}) and provide a detailed report covering:
1. Purpose and Functionality
2. Code Quality Assessment
3. Design Patterns Used
4. Potential Issues and Recommendations
5. Complexity Analysis
6. Test Coverage Recommendations

File Content:
```{ext}
{content}
```"""
	return system, "Analyze this file and provide a detailed report with the sections mentioned above."


def dependency_graph(summary: str, dependencies: str) -> Prompt:
	system = f"""You are a code architecture expert. Generate a dependency graph for this repository using Mermaid diagram syntax.
The graph should show relationships between modules and files.

Repository Structure:
{summary}

Dependencies Information:
{dependencies}"""
	return system, (
		"Generate a dependency graph in Mermaid format. Focus on the main components and their relationships. "
		"Include an explanation of the graph above the diagram."
	)


COMPLEXITY_FORMAT_INSTRUCTIONS = """Respond with a single JSON object and nothing else, using these keys:
"complexityScore": A numeric score from 1-10 indicating the code complexity (1 being simplest, 10 being most complex)
"analysis": A detailed analysis of the code complexity including cyclomatic complexity, nesting depth, and function length considerations"""


def complexity(code: str, language: str) -> Prompt:
	system = f"""You are a code complexity analyzer. Analyze the provided code and return a complexity score and detailed analysis.

{COMPLEXITY_FORMAT_INSTRUCTIONS}"""
	user = f"""Analyze the complexity of this {language} code:

```{language}
{code}
```"""
	return system, user


def test_cases(code: str, language: str) -> Prompt:
	system = f"""You are a test engineer specializing in {language}. Generate comprehensive test cases for the following code:

```{language}
{code}
```

Include tests for:
1. Normal usage scenarios
2. Edge cases
3. Error handling
4. Performance considerations

Provide the test code in the appropriate testing framework for {language}."""
	return system, "Generate test cases for this code."


def improvements(code: str, language: str) -> Prompt:
	system = f"""You are a senior software engineer with expertise in {language}. Review the following code and suggest improvements:

```{language}
{code}
```

Focus on:
1. Code readability and maintainability
2. Performance optimizations
3. Best practices for {language}
4. Potential bugs or edge cases
5. Security considerations

For each suggestion, explain why it's an improvement and provide a code example of the improved version."""
	return system, "Suggest improvements for this code."


def documentation(code: str, language: str) -> Prompt:
	system = f"""You are a documentation expert for {language}. Add comprehensive comments and documentation to the following code:

```{language}
{code}
```

Follow these documentation guidelines:
1. Add a file header comment explaining the purpose of the code
2. Document each function/method with parameters, return values, and examples
3. Add inline comments for complex logic
4. Use the standard documentation format for {language} (e.g., JSDoc for JavaScript)
5. Don't over-document obvious code

Return the fully documented version of the code."""
	return system, "Document this code with appropriate comments."
