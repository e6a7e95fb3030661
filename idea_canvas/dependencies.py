"""
FastAPI dependencies resolving the services wired at startup
"""
from fastapi import Request

from idea_canvas.services import AIService, SheetsService


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_sheets_service(request: Request) -> SheetsService:
    return request.app.state.sheets_service
