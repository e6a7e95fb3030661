# Data models package
from .idea import IdeaSubmission
from .lean_canvas import LeanCanvas, CANVAS_FIELDS

__all__ = ["IdeaSubmission", "LeanCanvas", "CANVAS_FIELDS"]
