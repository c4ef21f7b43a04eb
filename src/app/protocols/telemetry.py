"""Protocolo do coletor de telemetria (fire-and-forget)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

TelemetryValue = str | int | float | bool | None


class TelemetryProtocol(ABC):
    """Sink de eventos nomeados.

    Implementações podem falhar; quem chama nunca deixa a falha afetar o
    próprio retorno.
    """

    @abstractmethod
    def record_event(self, name: str, props: Mapping[str, TelemetryValue] | None = None) -> None:
        """Registra um evento."""
