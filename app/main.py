from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import logging
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.middleware.cors import CORSMiddleware
from nicegui import app, ui
import nicegui.run as ng_run

import storage
from api import router as api_router
from config import settings
from errors import PlaygroundError
from models import Project, ProjectSummary
from preview import FrameHost, PreviewRenderer

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("playground")

TAB_LABELS = {
    "html": "HTML",
    "css": "CSS",
    "js": "JavaScript",
}
PREVIEW_SANDBOX = "allow-scripts allow-modals"


@dataclass
class AppState:
    html: str
    css: str
    js: str
    active_tab: str = "html"

    @classmethod
    def from_project(cls, project: Project) -> "AppState":
        return cls(html=project.html, css=project.css, js=project.js)

    def replace(self, project: Project) -> None:
        self.html = project.html
        self.css = project.css
        self.js = project.js

    def sources(self):
        return self.html, self.css, self.js


class IFrameHost(FrameHost):
    def __init__(self, container: ui.element) -> None:
        self.container = container

    def mount(self, document: str) -> ui.element:
        with self.container:
            frame = ui.element("iframe").classes("w-full h-full border-0 bg-white")
        frame._props["sandbox"] = PREVIEW_SANDBOX
        frame._props["srcdoc"] = document
        frame.update()
        return frame

    def discard(self, frame: ui.element) -> None:
        self.container.remove(frame)


state = AppState.from_project(Project.starter())
editors: Dict[str, ui.textarea] = {}
saved_projects: List[ProjectSummary] = []
renderer: Optional[PreviewRenderer] = None


def format_local(timestamp: str) -> str:
    try:
        return storage.parse_timestamp(timestamp).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return timestamp


def run_preview() -> None:
    renderer.render(*state.sources())


def update_buffer(tab: str, value: str | None) -> None:
    setattr(state, tab, value or "")
    renderer.schedule(state.sources)


def sync_editors() -> None:
    for tab, editor in editors.items():
        editor.set_value(getattr(state, tab))


async def confirm(message: str) -> bool:
    with ui.dialog() as dialog, ui.card():
        ui.label(message)
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
            ui.button("OK", on_click=lambda: dialog.submit(True))
    result = await dialog
    dialog.delete()
    return bool(result)


async def save_current() -> None:
    name = (name_input.value or "").strip()
    if not name:
        ui.notify("Please enter a project name", type="negative")
        return
    try:
        message = await ng_run.io_bound(storage.save_project, name, state.html, state.css, state.js)
    except PlaygroundError as exc:
        ui.notify(exc.message, type="negative")
        return
    name_input.set_value("")
    save_dialog.close()
    ui.notify(message, type="positive")


async def refresh_saved_projects() -> None:
    try:
        projects = await ng_run.io_bound(storage.list_projects)
    except PlaygroundError as exc:
        ui.notify(exc.message, type="negative")
        return
    saved_projects[:] = projects
    projects_view.refresh()


async def open_load_dialog() -> None:
    load_dialog.open()
    await refresh_saved_projects()


async def load_named(name: str) -> None:
    try:
        project = await ng_run.io_bound(storage.load_project, name)
    except PlaygroundError as exc:
        ui.notify(exc.message, type="negative")
        return
    state.replace(project)
    sync_editors()
    run_preview()
    load_dialog.close()
    ui.notify(f'Project "{name}" loaded successfully!', type="positive")


async def delete_named(name: str) -> None:
    if not await confirm(f'Are you sure you want to delete project "{name}"?'):
        return
    try:
        message = await ng_run.io_bound(storage.delete_project, name)
    except PlaygroundError as exc:
        ui.notify(exc.message, type="negative")
        return
    await refresh_saved_projects()
    ui.notify(message, type="positive")


async def clear_code() -> None:
    if not await confirm("Are you sure you want to clear all code? This cannot be undone."):
        return
    state.replace(Project.starter())
    sync_editors()
    run_preview()
    ui.notify("Code cleared successfully!", type="positive")


def on_tab_change(event) -> None:
    state.active_tab = event.value


ui.page_title(settings.TITLE)

with ui.dialog() as save_dialog, ui.card().classes("min-w-[360px]"):
    ui.label("Save Project").classes("text-lg font-semibold")
    name_input = ui.input("Project name").classes("w-full")
    name_input.on("keydown.enter", lambda: save_current())
    with ui.row().classes("w-full justify-end"):
        ui.button("Cancel", on_click=save_dialog.close).props("flat")
        ui.button("Save", on_click=save_current)

with ui.dialog() as load_dialog, ui.card().classes("min-w-[420px]"):
    ui.label("Load Project").classes("text-lg font-semibold")

    @ui.refreshable
    def projects_view() -> None:
        if not saved_projects:
            ui.label("No saved projects found").classes("text-gray-500")
            return
        with ui.column().classes("w-full gap-2"):
            for summary in saved_projects:
                with ui.row().classes("w-full items-center justify-between no-wrap"):
                    with ui.column().classes("gap-0"):
                        ui.label(summary.name).classes("font-semibold break-all")
                        ui.label(f"Last modified: {format_local(summary.last_modified)}").classes(
                            "text-sm text-gray-500"
                        )
                    with ui.row().classes("no-wrap"):
                        ui.button("Load", on_click=lambda n=summary.name: load_named(n))
                        ui.button("Delete", on_click=lambda n=summary.name: delete_named(n)).props(
                            "outline color=negative"
                        )

    projects_view()
    with ui.row().classes("w-full justify-end"):
        ui.button("Cancel", on_click=load_dialog.close).props("flat")

with ui.header().classes("items-center justify-between"):
    ui.label(settings.TITLE).classes("text-xl font-semibold")
    with ui.row():
        ui.button("Run", on_click=run_preview)
        ui.button("Save", on_click=save_dialog.open)
        ui.button("Load", on_click=open_load_dialog)
        ui.button("Clear", on_click=clear_code).props("outline color=white")

with ui.row().classes("w-full no-wrap gap-4"):
    with ui.card().classes("w-1/2"):
        with ui.tabs(value=state.active_tab, on_change=on_tab_change).classes("w-full") as tabs:
            for key, label in TAB_LABELS.items():
                ui.tab(key, label=label)
        with ui.tab_panels(tabs, value=state.active_tab).classes("w-full"):
            for key in TAB_LABELS:
                with ui.tab_panel(key):
                    editors[key] = (
                        ui.textarea(
                            value=getattr(state, key),
                            on_change=lambda e, k=key: update_buffer(k, e.value),
                        )
                        .classes("w-full font-mono")
                        .props("outlined autogrow spellcheck=false")
                    )

    with ui.card().classes("w-1/2"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Preview").classes("text-lg font-semibold")
            ui.button("Refresh", on_click=run_preview).props("flat")
        preview_container = ui.element("div").classes("w-full").style("height: 70vh;")

renderer = PreviewRenderer(IFrameHost(preview_container), delay=settings.PREVIEW_DELAY)
run_preview()

storage.ensure_data_dir()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix="/api", tags=["Projects"])

ng_run.setup = lambda: None
logger.info("Project files will be saved in: %s", storage.DATA_DIR.resolve())
ui.run(reload=False, host=settings.HOST, port=settings.PORT, title=settings.TITLE)
