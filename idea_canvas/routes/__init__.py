# HTTP routes package
from .ideas import router as ideas_router
from .web import router as web_router

__all__ = ["ideas_router", "web_router"]
