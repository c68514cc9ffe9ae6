"""API: camada de borda.

Responsabilidades:
- Receber webhooks da Veriff e validar assinaturas
- Chamar a Station API (assinada, com failover de credenciais)
- Gravar documentos no SharePoint

Subpastas:
- connectors/: clientes HTTP (Veriff, SharePoint) e base comum
- routes/: endpoints HTTP (webhooks, health)

NÃO PODE conter: regras de agregação, layout de pastas, orquestração de use cases.
"""
