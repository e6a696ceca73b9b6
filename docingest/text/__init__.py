from docingest.text.context import Passage, build_context, render_context
from docingest.text.segmentation import segment
from docingest.text.selection import cosine, select

__all__ = ["Passage", "build_context", "cosine", "render_context", "segment", "select"]
