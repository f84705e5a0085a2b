from preview.debounce import Debouncer
from preview.document import build_document
from preview.renderer import FrameHost, PreviewRenderer

__all__ = ["Debouncer", "FrameHost", "PreviewRenderer", "build_document"]
