"""
Project API
===========
JSON endpoints for saving, listing, loading and deleting projects.

Mounted under ``/api`` on the NiceGUI FastAPI app. Route functions are
plain ``def`` so FastAPI runs the blocking filesystem work in its
threadpool. Every store error becomes ``{"message": ...}`` with the
error's status code.
"""
from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

import storage
from errors import NotFoundError, PlaygroundError

logger = logging.getLogger(__name__)

try:
    API_VERSION = version("code-playground")
except PackageNotFoundError:
    API_VERSION = "unknown"

router = APIRouter()


class SaveProjectRequest(BaseModel):
    """Fields are optional so missing data is reported as 400, not 422."""

    name: Optional[str] = Field(default=None, description="Display name of the project")
    html: Optional[str] = Field(default=None)
    css: Optional[str] = Field(default=None)
    js: Optional[str] = Field(default=None)


class MessageResponse(BaseModel):
    message: str


class ProjectSummaryResponse(BaseModel):
    name: str
    lastModified: str


class ProjectSourcesResponse(BaseModel):
    html: str
    css: str
    js: str


def _failure(exc: PlaygroundError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@router.post("/save-project", response_model=MessageResponse)
def save_project(request: SaveProjectRequest):
    try:
        message = storage.save_project(request.name, request.html, request.css, request.js)
    except PlaygroundError as exc:
        return _failure(exc)
    return {"message": message}


@router.get("/list-projects", response_model=List[ProjectSummaryResponse])
def list_projects():
    try:
        projects = storage.list_projects()
    except PlaygroundError as exc:
        return _failure(exc)
    return [project.to_dict() for project in projects]


@router.get("/load-project/{project_name:path}", response_model=ProjectSourcesResponse)
def load_project(project_name: str):
    try:
        if not project_name:
            raise NotFoundError()
        project = storage.load_project(project_name)
    except PlaygroundError as exc:
        return _failure(exc)
    return project.sources()


@router.delete("/delete-project/{project_name:path}", response_model=MessageResponse)
def delete_project(project_name: str):
    try:
        if not project_name:
            raise NotFoundError()
        message = storage.delete_project(project_name)
    except PlaygroundError as exc:
        return _failure(exc)
    return {"message": message}


@router.get("/health")
def health_check():
    return {"status": "ok", "version": API_VERSION}
