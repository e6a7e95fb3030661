"""
FastAPI application entry point for Idea Canvas
"""
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from idea_canvas.config import get_settings
from idea_canvas.errors import ValidationError
from idea_canvas.logging_config import logger, setup_logging
from idea_canvas.models.idea import REQUIRED_FIELDS_MESSAGE
from idea_canvas.routes import ideas_router, web_router
from idea_canvas.services import AIService, SheetsService
from idea_canvas.services.sheets_service import build_sheets_client


def init_sheets_service() -> SheetsService:
    """Build the Sheets writer once; an unusable client leaves it uninitialized"""
    settings = get_settings()

    client = None
    try:
        client = build_sheets_client(settings.GOOGLE_APPLICATION_CREDENTIALS)
        logger.info("Google Sheets client initialized")
    except Exception as e:
        logger.error(f"Error initializing Google Sheets: {str(e)}")

    return SheetsService(client, settings.GOOGLE_SHEET_ID)


def create_app(
    ai_service: Optional[AIService] = None,
    sheets_service: Optional[SheetsService] = None
) -> FastAPI:
    """
    Build the application

    Args:
        ai_service: LLM client to use instead of one built from settings
        sheets_service: Sheets writer to use instead of one built from settings
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        # Startup
        setup_logging()
        logger.info("Idea Canvas starting up")

        app.state.sheets_service = sheets_service or init_sheets_service()
        app.state.ai_service = ai_service or AIService()
        logger.info(f"Google Sheet ID: {app.state.sheets_service.spreadsheet_id}")
        logger.info(
            f"Google Sheets client ready: {app.state.sheets_service.is_initialized}"
        )

        yield

        # Shutdown
        logger.info("Idea Canvas shutting down")

    app = FastAPI(
        title="Idea Canvas",
        description="Structure product ideas into a Lean Canvas and log them to Google Sheets",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        # Malformed JSON bodies
        return JSONResponse(status_code=400, content={"error": REQUIRED_FIELDS_MESSAGE})

    app.include_router(ideas_router)
    app.include_router(web_router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port"""
    settings = get_settings()
    uvicorn.run("idea_canvas.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
