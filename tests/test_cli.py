import json
import os

import pytest

import cli
from conftest import FakeLLMClient, write_files


@pytest.fixture
def fake_llm(monkeypatch):
	fake = FakeLLMClient("# Model says hi")

	class FakeContext:
		@classmethod
		def from_settings(cls, settings):
			return cls()

		def __enter__(self):
			return fake

		def __exit__(self, *exc_info):
			return None

	monkeypatch.setattr(cli, "LLMClient", FakeContext)
	monkeypatch.delenv("OPENAI_API_KEY", raising=False)
	monkeypatch.chdir(os.path.dirname(__file__))
	return fake


def test_scan_prints_sorted_files(tmp_path, fake_llm, capsys):
	write_files(tmp_path, ["b.py", "a/c.ts", "node_modules/x.js"])
	assert cli.main(["scan", str(tmp_path), "--sort"]) == 0
	out = capsys.readouterr().out.splitlines()
	assert out == [str(tmp_path / "a" / "c.ts"), str(tmp_path / "b.py")]


def test_scan_json(tmp_path, fake_llm, capsys):
	write_files(tmp_path, ["a.py", "b.py", "c.py"])
	assert cli.main(["scan", str(tmp_path), "--max-files", "2", "--json"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert len(data["files"]) == 2
	assert data["extension_counts"] == {".py": 2}


def test_summary(tmp_path, fake_llm, capsys):
	write_files(tmp_path, ["src/x.py"])
	assert cli.main(["summary", str(tmp_path)]) == 0
	out = capsys.readouterr().out
	assert "Total files analyzed: 1" in out
	assert "└── src" in out


def test_analyze_repo(tmp_path, fake_llm, capsys):
	write_files(tmp_path, ["a.py"])
	assert cli.main(["analyze-repo", str(tmp_path)]) == 0
	assert "# Model says hi" in capsys.readouterr().out


def test_tests_write_creates_test_file(tmp_path, fake_llm, capsys):
	write_files(tmp_path, ["util.ts"], content="export const x = 1;")
	assert cli.main(["tests", str(tmp_path / "util.ts"), "--write"]) == 0
	target = tmp_path / "util.test.ts"
	assert target.read_text() == "# Model says hi"
	assert "typescript" in fake_llm.calls[0][0]


def test_complexity_prints_report(tmp_path, fake_llm, capsys):
	fake_llm.reply = '{"complexityScore": 2, "analysis": "Simple."}'
	write_files(tmp_path, ["m.py"], content="x = 1\n")
	assert cli.main(["complexity", str(tmp_path / "m.py")]) == 0
	assert "**Complexity Score:** 2/10" in capsys.readouterr().out


def test_missing_root_exits_with_error(tmp_path, fake_llm, capsys):
	assert cli.main(["scan", str(tmp_path / "missing")]) == 1
	assert "error:" in capsys.readouterr().err


def test_missing_file_exits_with_error(tmp_path, fake_llm, capsys):
	assert cli.main(["document", str(tmp_path / "missing.py")]) == 1


@pytest.mark.parametrize("command", ["analyze-repo", "dependency-graph"])
def test_repo_commands_honour_max_files(tmp_path, fake_llm, command):
	write_files(tmp_path, [f"m{i}.py" for i in range(6)], content="import os\n")
	assert cli.main([command, str(tmp_path), "--max-files", "2"]) == 0
	assert "Total files analyzed: 2" in fake_llm.calls[0][0]


def test_non_positive_max_files_exits_with_error(tmp_path, fake_llm, capsys):
	write_files(tmp_path, ["a.py"])
	assert cli.main(["scan", str(tmp_path), "--max-files", "0"]) == 1
	assert "error:" in capsys.readouterr().err


def test_unknown_log_level_exits_with_error(tmp_path, fake_llm, capsys):
	assert cli.main(["--log-level", "bogus", "scan", str(tmp_path)]) == 1
	assert "Unknown log level" in capsys.readouterr().err
