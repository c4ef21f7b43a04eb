"""API: camada de borda e adapters dos provedores de streaming.

Responsabilidades:
- Receber webhooks dos provedores e requests dos clientes
- Validar assinaturas e payloads
- Normalizar payloads de provedor em ProviderVideoInfo
- Falar HTTP com as APIs Cloudflare Stream e Bunny Stream

Subpastas:
- connectors/: clientes HTTP, normalizadores e verificação de webhooks
- routes/: endpoints HTTP (webhook, status, upload, health)

NÃO PODE conter: FSM, regra de prontidão, escrita em registros de conteúdo.
"""
