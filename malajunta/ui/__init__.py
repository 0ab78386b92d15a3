"""Server-rendered pages for the community site."""
from .router import router

__all__ = ["router"]
