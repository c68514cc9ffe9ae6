"""Rotas de webhook da Veriff."""

from api.routes.veriff.router import router

__all__ = ["router"]
