from .skills import router as skills_router

__all__ = ["skills_router"]
