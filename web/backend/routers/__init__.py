"""API route handlers."""

from .ranking import router as ranking_router
from .team import router as team_router
