"""Connectors: adapters de borda para APIs externas.

Estrutura:
- veriff/: Station API (sessões, attempts, mídia) e webhooks
- sharepoint/: repositório de documentos onde as sessões são gravadas
- http_base.py: cliente httpx compartilhado
"""

__all__: list[str] = []
