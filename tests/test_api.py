import pytest
from fastapi.testclient import TestClient

from api import app, get_service
from conftest import FakeLLMClient, write_files
from repo_analyzer.llm import LLMAuthError, LLMConnectionError
from repo_analyzer.service import NO_FILES_MESSAGE, AnalysisService
from repo_analyzer.visualization import panel


class FailingClient(FakeLLMClient):
	def __init__(self, exc):
		super().__init__()
		self.exc = exc

	def chat(self, system, user, temperature=0.0):
		raise self.exc


@pytest.fixture
def llm():
	return FakeLLMClient("## Analysis")


@pytest.fixture
def client(settings, llm):
	app.dependency_overrides[get_service] = lambda: AnalysisService(settings, llm)
	panel.clear()
	yield TestClient(app)
	app.dependency_overrides.clear()
	panel.clear()


def test_scan_endpoint(tmp_path, client):
	write_files(tmp_path, ["src/x.ts", "src/y.py", "node_modules/dep/z.ts", "README.md"])
	resp = client.post("/scan", json={"root_path": str(tmp_path), "max_files": 10})
	assert resp.status_code == 200
	body = resp.json()
	assert body["extension_counts"] == {".ts": 1, ".py": 1}
	assert len(body["files"]) == 2
	assert "└── src" in body["directory_tree"]


def test_invalid_root(tmp_path, client):
	resp = client.post("/analyze/repository", json={"root_path": str(tmp_path / "nope")})
	assert resp.status_code == 400


def test_analyze_repository(tmp_path, client, llm):
	write_files(tmp_path, ["a.py"])
	resp = client.post("/analyze/repository", json={"root_path": str(tmp_path)})
	assert resp.json() == {"markdown": "## Analysis"}
	assert len(llm.calls) == 1


def test_analyze_empty_repository(tmp_path, client):
	resp = client.post("/dependency-graph", json={"root_path": str(tmp_path)})
	assert resp.json() == {"markdown": NO_FILES_MESSAGE}


def test_analyze_file_reads_from_disk(tmp_path, client, llm):
	write_files(tmp_path, ["m.py"], content="VALUE = 42\n")
	resp = client.post("/analyze/file", json={"file_path": str(tmp_path / "m.py")})
	assert resp.status_code == 200
	assert "VALUE = 42" in llm.calls[0][0]


def test_analyze_missing_file(tmp_path, client):
	resp = client.post("/analyze/file", json={"file_path": str(tmp_path / "gone.py")})
	assert resp.status_code == 400


def test_complexity_updates_panel(client, llm):
	llm.reply = '{"complexityScore": 5, "analysis": "Moderate."}'
	resp = client.post("/complexity", json={"code": "function f() {}", "file_path": "f.js"})
	assert resp.status_code == 200
	body = resp.json()
	assert body["result"] == {"complexity_score": 5, "analysis": "Moderate."}
	assert body["markdown"].startswith("# Code Complexity Analysis")
	assert "javascript" in llm.calls[0][1]

	state = client.get("/panel/state").json()
	assert state["title"] == "Code Complexity Analysis"
	assert state["data"]["type"] == "codeQuality"


@pytest.mark.parametrize("path", ["/tests", "/improvements", "/documentation"])
def test_code_endpoints(client, llm, path):
	resp = client.post(path, json={"code": "x = 1", "language": "python"})
	assert resp.json() == {"markdown": "## Analysis"}
	assert "python" in llm.calls[0][0]


@pytest.mark.parametrize("exc,status", [(LLMAuthError("no key"), 401), (LLMConnectionError("down"), 502)])
def test_llm_errors_map_to_status(settings, exc, status):
	app.dependency_overrides[get_service] = lambda: AnalysisService(settings, FailingClient(exc))
	try:
		resp = TestClient(app).post("/documentation", json={"code": "x", "language": "python"})
	finally:
		app.dependency_overrides.clear()
	assert resp.status_code == status
	assert resp.json()["detail"] == str(exc)


def test_panel_page_and_scan_charts(tmp_path, client):
	write_files(tmp_path, ["a.ts"], content="import b from './b';\n")
	write_files(tmp_path, ["b.ts"], content="export default 1;\n")

	assert client.get("/panel/state").json() is None
	page = client.get("/panel/")
	assert page.status_code == 200
	assert "visualization-container" in page.text

	files = client.post("/panel/files", json={"root_path": str(tmp_path)}).json()
	assert files["data"]["type"] == "fileDistribution"
	assert files["data"]["files"] == [{"type": ".ts", "count": 2}]

	graph = client.post("/panel/dependencies", json={"root_path": str(tmp_path)}).json()
	assert graph["data"]["links"] == [{"source": "a.ts", "target": "b.ts", "value": 1}]
	assert client.get("/panel/state").json()["title"] == "Dependency Graph"


def test_panel_accepts_pushed_updates(client):
	payload = {"title": "Pushed", "data": {"type": "codeQuality", "metrics": [{"name": "Lines", "value": 3}]}}
	assert client.post("/panel/update", json=payload).status_code == 200
	assert client.get("/panel/state").json() == payload


@pytest.mark.parametrize("path", ["/scan", "/analyze/repository", "/dependency-graph", "/panel/files", "/panel/dependencies"])
@pytest.mark.parametrize("max_files", [0, -1])
def test_non_positive_max_files_rejected(tmp_path, client, llm, path, max_files):
	write_files(tmp_path, ["a.py"])
	resp = client.post(path, json={"root_path": str(tmp_path), "max_files": max_files})
	assert resp.status_code == 422
	assert llm.calls == []


def test_analyze_repository_honours_max_files(tmp_path, client, llm):
	write_files(tmp_path, [f"m{i}.py" for i in range(6)])
	resp = client.post("/analyze/repository", json={"root_path": str(tmp_path), "max_files": 2})
	assert resp.status_code == 200
	assert "Total files analyzed: 2" in llm.calls[0][0]
