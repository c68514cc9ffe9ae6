"""App: orquestração, casos de uso e wiring.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: handlers dos webhooks (sem HTTP)
- services/: agregação dos dados da sessão
- protocols/: contratos do cliente Veriff e do repositório de documentos
- observability/: correlation_id dos logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
