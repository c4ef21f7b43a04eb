"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhooks, status, upload, health)
- Validação inicial de request (headers, autenticação, multipart)
- Delegação para os serviços de app/services via VideoServices
- Respostas no formato uniforme {"success": ...}

Estrutura:
- routes/video/: webhook, status, confirmação e upload
- routes/health/: liveness e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
