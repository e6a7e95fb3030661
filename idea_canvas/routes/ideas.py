"""
API routes for idea submission
"""
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from idea_canvas.dependencies import get_ai_service, get_sheets_service
from idea_canvas.logging_config import logger
from idea_canvas.models import IdeaSubmission
from idea_canvas.services import AIService, SheetsService

router = APIRouter(prefix="/api", tags=["ideas"])

SUCCESS_MESSAGE = "Idea processed and saved successfully"


@router.post("/ideas")
async def create_idea(
    payload: Any = Body(default=None),
    ai_service: AIService = Depends(get_ai_service),
    sheets_service: SheetsService = Depends(get_sheets_service)
):
    """Structure an idea into a Lean Canvas and append it to the spreadsheet"""
    # Raises ValidationError (400) before any upstream call
    submission = IdeaSubmission.from_payload(payload)

    try:
        logger.info(f"Processing idea: {submission.title}")

        canvas = await ai_service.structure(submission.title, submission.description)
        data = canvas.merged_with(submission.to_wire())

        idea_id = await sheets_service.append(submission, canvas)

        return {
            "success": True,
            "ideaId": idea_id,
            "message": SUCCESS_MESSAGE,
            "data": data
        }

    except Exception as e:
        logger.error(f"Error in /api/ideas: {type(e).__name__}: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process idea", "details": str(e)}
        )


@router.get("/health")
async def health_check():
    """Liveness check, independent of upstream services"""
    return {"status": "ok"}
