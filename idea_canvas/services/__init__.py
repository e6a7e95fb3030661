# Business logic services package
from .ai_service import AIService, StructureResult
from .sheets_service import SheetsService, AppendOutcome

__all__ = [
    "AIService",
    "StructureResult",
    "SheetsService",
    "AppendOutcome"
]
