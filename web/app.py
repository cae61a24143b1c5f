from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from repo_analyzer.config import get_settings
from repo_analyzer.fs_scan import scan
from repo_analyzer.imports import dependency_map
from repo_analyzer.model import VisualizationUpdate
from repo_analyzer.visualization import dependency_graph_data, file_distribution, panel

WEB_DIR = os.path.dirname(os.path.abspath(__file__))

app = FastAPI(title="Repository Visualization")

# Mount static files
app.mount("/static", StaticFiles(directory=os.path.join(WEB_DIR, "static")), name="static")

# Templates
templates = Jinja2Templates(directory=os.path.join(WEB_DIR, "templates"))


class RootRequest(BaseModel):
    root_path: str
    max_files: Optional[int] = Field(None, gt=0)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Panel page; the script polls /state and draws the current chart."""
    return templates.TemplateResponse(request, "index.html", {"title": "Repository Visualization"})


@app.get("/state", response_model=Optional[VisualizationUpdate])
def get_state() -> Optional[VisualizationUpdate]:
    """Chart currently shown, or null before the first update."""
    return panel.current()


@app.post("/update", response_model=VisualizationUpdate)
def post_update(update: VisualizationUpdate) -> VisualizationUpdate:
    return panel.update(update.data, update.title)


def _scan(req: RootRequest):
    root = os.path.abspath(req.root_path)
    if not os.path.isdir(root):
        raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
    return scan(get_settings().scan_request(root, req.max_files))


@app.post("/files", response_model=VisualizationUpdate)
def show_file_distribution(req: RootRequest) -> VisualizationUpdate:
    """Pie chart of retained files per extension."""
    result = _scan(req)
    return panel.update(file_distribution(result), "File Distribution")


@app.post("/dependencies", response_model=VisualizationUpdate)
def show_dependency_graph(req: RootRequest) -> VisualizationUpdate:
    """Force-directed graph of imports between retained files."""
    result = _scan(req)
    data = dependency_graph_data(result.root_path, dependency_map(result.files))
    return panel.update(data, "Dependency Graph")


def create_app() -> FastAPI:
    return app
