"""App: orquestração do ciclo de vida do vídeo e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de vídeo, provedor, registro persistido e upload
- services/: upload, prontidão, reconciliação, status e remoção
- infra/: implementações concretas de IO (stores, config, telemetria)
- protocols/: contratos/interfaces
- observability/: correlation id e métricas via logs estruturados

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
