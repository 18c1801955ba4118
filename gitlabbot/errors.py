"""Exceções do relay GitLab -> Slack."""
from typing import Optional


class GitlabBotError(Exception):
    """Base de todos os erros do pacote."""


class ConfigError(GitlabBotError):
    """Configuração ausente ou inválida. Fatal na inicialização."""


class DecodeError(GitlabBotError):
    """Payload de webhook malformado ou incompleto."""


class DeliveryError(GitlabBotError):
    """Falha ao entregar mensagem na API do Slack (status != 200, rede ou timeout)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
