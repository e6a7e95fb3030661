"""
Exception taxonomy for the idea pipeline
"""
from typing import Optional


class IdeaCanvasError(Exception):
    """Base class for idea pipeline errors"""


class ValidationError(IdeaCanvasError):
    """Submitted idea is missing a title or description (HTTP 400)"""


class LLMFailure(IdeaCanvasError):
    """The LLM call or its reply could not be turned into a Lean Canvas.

    Never leaves the LLM client; it is collapsed into the fallback record.
    """


class LLMParseError(LLMFailure):
    """The reply contains no brace-delimited JSON object"""


class LLMJSONError(LLMFailure):
    """The brace-delimited substring is not a usable JSON object"""


class NotInitializedError(IdeaCanvasError):
    """The Google Sheets client was never built"""


class SheetWriteError(IdeaCanvasError):
    """
    An append to the spreadsheet failed.

    Attributes:
        phase: Tab whose append failed ("Ideas" or "LeanCanvas")
        idea_id: Identifier generated for the failed write
    """

    def __init__(self, message: str, phase: str, idea_id: Optional[str] = None):
        super().__init__(message)
        self.phase = phase
        self.idea_id = idea_id
