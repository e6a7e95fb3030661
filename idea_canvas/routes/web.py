"""
Web routes for HTML pages
"""
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.templating import Jinja2Templates

router = APIRouter(tags=["web"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/")
async def index(request: Request):
    """Render the idea submission form"""
    return templates.TemplateResponse(request, "index.html")
