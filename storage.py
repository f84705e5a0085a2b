from __future__ import annotations

import json
import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from config import settings
from errors import NotFoundError, StorageError, ValidationError
from models import Project, ProjectSummary

logger = logging.getLogger(__name__)

DATA_DIR = Path(settings.DATA_DIR)

SOURCE_FILES = {
    "html": "index.html",
    "css": "style.css",
    "js": "script.js",
}
METADATA_FILE = "metadata.json"


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    logger.info("Ensured projects directory exists at: %s", DATA_DIR.resolve())


def sanitize_name(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_-]", "_", name)


def project_dir(name: str) -> Path:
    return DATA_DIR / sanitize_name(name)


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _write_text(path: Path, text: str) -> None:
    # newline="" keeps sources byte-for-byte
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def _read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def _read_metadata(folder: Path) -> dict:
    with (folder / METADATA_FILE).open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError("metadata is not a JSON object")
    return data


def _stored_name(folder: Path) -> Optional[str]:
    try:
        name = _read_metadata(folder).get("name")
    except (OSError, ValueError):
        return None
    return name if isinstance(name, str) else None


def save_project(name: str, html: str, css: str, js: str) -> str:
    if not name or html is None or css is None or js is None:
        raise ValidationError()
    for text in (name, html, css, js):
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValidationError("Project data must be valid UTF-8 text.") from exc

    folder = project_dir(name)
    previous = _stored_name(folder)
    if previous is not None and previous != name:
        logger.warning(
            "Project %r overwrites %r: both map to storage key %r", name, previous, folder.name
        )

    metadata = {
        "name": name,
        "lastModified": format_timestamp(datetime.now(timezone.utc)),
    }
    try:
        folder.mkdir(parents=True, exist_ok=True)
        for field, text in (("html", html), ("css", css), ("js", js)):
            _write_text(folder / SOURCE_FILES[field], text)
        with (folder / METADATA_FILE).open("w", encoding="utf-8") as handle:
            json.dump(metadata, handle, indent=2)
    except (OSError, UnicodeError) as exc:
        logger.exception("Error saving project %r", name)
        raise StorageError("Error saving project.") from exc

    logger.info("Saved project %r to %s", name, folder)
    return f'Project "{name}" saved successfully!'


def _summarize(folder: Path) -> Tuple[datetime, ProjectSummary]:
    modified = datetime.fromtimestamp(folder.stat().st_mtime, tz=timezone.utc)
    fallback = ProjectSummary(name=folder.name, last_modified=format_timestamp(modified))
    try:
        summary = ProjectSummary.from_metadata(
            _read_metadata(folder), folder.name, fallback.last_modified
        )
        return parse_timestamp(summary.last_modified), summary
    except (OSError, ValueError) as exc:
        logger.warning(
            "Metadata not usable for %s (%s), falling back to folder name and mtime.",
            folder.name,
            exc,
        )
        return modified, fallback


def list_projects() -> List[ProjectSummary]:
    entries: List[Tuple[datetime, ProjectSummary]] = []
    try:
        for path in sorted(DATA_DIR.iterdir()):
            if not path.is_dir():
                continue
            try:
                entries.append(_summarize(path))
            except FileNotFoundError:
                logger.debug("Project folder %s vanished while listing", path.name)
    except OSError as exc:
        logger.exception("Error listing projects in %s", DATA_DIR)
        raise StorageError("Error listing projects.") from exc

    entries.sort(key=lambda item: item[0], reverse=True)
    return [summary for _, summary in entries]


def load_project(name: str) -> Project:
    folder = project_dir(name)
    sources = {}
    try:
        for field, filename in SOURCE_FILES.items():
            sources[field] = _read_text(folder / filename)
    except (FileNotFoundError, NotADirectoryError) as exc:
        logger.warning("Project %r not found: %s", name, exc)
        raise NotFoundError() from exc
    except (OSError, UnicodeDecodeError) as exc:
        logger.exception("Error loading project %r", name)
        raise StorageError("Error loading project.") from exc
    try:
        last_modified = _read_metadata(folder).get("lastModified")
    except (OSError, ValueError):
        last_modified = None
    return Project(name=name, last_modified=last_modified, **sources)


def delete_project(name: str) -> str:
    if not name:
        raise ValidationError("Project name is required.")

    folder = project_dir(name)
    try:
        shutil.rmtree(folder)
    except FileNotFoundError:
        logger.info("Project %r was already absent", name)
    except OSError as exc:
        logger.exception("Error deleting project %r", name)
        raise StorageError("Error deleting project.") from exc
    else:
        logger.info("Deleted project %r", name)
    return f'Project "{name}" deleted successfully.'
