"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Endpoints de webhook da Veriff e health checks
- Validação inicial de request (assinatura, JSON, session id)
- Delegação para os use cases
- Tradução do resultado em status HTTP

Estrutura:
- routes/veriff/: webhooks da Veriff
- routes/health/: liveness e readiness
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
