"""Endpoints de vídeo: webhook dos provedores, status, confirmação e upload."""
