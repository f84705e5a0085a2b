from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from preview.debounce import Debouncer
from preview.document import build_document

logger = logging.getLogger(__name__)

SourceReader = Callable[[], Tuple[str, str, str]]


class FrameHost(ABC):
    """Creates and destroys the sandboxed frames a renderer draws into."""

    @abstractmethod
    def mount(self, document: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def discard(self, frame: Any) -> None:
        raise NotImplementedError


@dataclass
class RenderedFrame:
    frame: Any
    document: str
    generation: int


class PreviewRenderer:
    """Owns the preview frame and replaces it wholesale on every render.

    A render never reuses the previous frame: the old one is discarded and a
    fresh one is mounted, so the previewed script always starts from the
    global state of a fresh page load.
    """

    def __init__(self, host: FrameHost, delay: float = 1.0) -> None:
        self.host = host
        self.current: Optional[RenderedFrame] = None
        self.render_count = 0
        self._source: Optional[SourceReader] = None
        self._debouncer = Debouncer(delay, self._render_latest)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def render(self, html: str, css: str, js: str) -> RenderedFrame:
        self._debouncer.cancel()
        document = build_document(html, css, js)
        if self.current is not None:
            self.host.discard(self.current.frame)
            self.current = None
        self.render_count += 1
        frame = self.host.mount(document)
        self.current = RenderedFrame(frame=frame, document=document, generation=self.render_count)
        logger.debug("Rendered preview #%d (%d bytes)", self.render_count, len(document))
        return self.current

    def schedule(self, source: SourceReader) -> None:
        """Re-arm the idle timer; ``source`` is read only when it fires."""
        self._source = source
        self._debouncer.trigger()

    def cancel(self) -> None:
        self._debouncer.cancel()

    def _render_latest(self) -> None:
        if self._source is None:
            return
        html, css, js = self._source()
        self.render(html, css, js)
