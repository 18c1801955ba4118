"""Carregamento do arquivo de configuração do bot (JSON, formato original)."""
import logging
from pathlib import Path
from typing import Annotated, Optional, Tuple

import msgspec

from .constants import (
    DEFAULT_BUILD_PORT,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_MERGE_PORT,
    DEFAULT_PUSH_PORT,
    DEFAULT_SLACK_API_BASE,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)

Port = Annotated[int, msgspec.Meta(ge=1, le=65535)]
Timeout = Annotated[float, msgspec.Meta(gt=0)]


class RedirectRule(msgspec.Struct, frozen=True, rename="pascal"):
    """Redireciona vários repositórios para um único canal."""

    channel: str
    repositories: Tuple[str, ...] = ()

    def matches(self, candidate: str) -> bool:
        return candidate in self.repositories


class Config(msgspec.Struct, frozen=True, kw_only=True, rename="pascal"):
    """Configuração do processo. Lida uma vez no start, somente leitura depois."""

    bot_username: str
    bot_channel: str
    slack_api_url: str = msgspec.field(name="SlackAPIUrl")
    slack_api_token: str = msgspec.field(name="SlackAPIToken")
    slack_api_base: str = msgspec.field(name="SlackAPIBase", default=DEFAULT_SLACK_API_BASE)
    bot_icon: str = ""
    push_icon: str = ""
    merge_icon: str = ""
    build_icon: str = ""
    bot_start_message: str = ""
    channel_prefix: str = ""
    verbose: bool = False
    http_timeout: Timeout = DEFAULT_HTTP_TIMEOUT_SECONDS
    redirect: Tuple[RedirectRule, ...] = ()
    push_port: Port = DEFAULT_PUSH_PORT
    merge_port: Port = DEFAULT_MERGE_PORT
    build_port: Port = DEFAULT_BUILD_PORT
    self_report_errors: bool = True
    dedup_per_repository: bool = False

    def redirect_for(self, candidate: str) -> Optional[str]:
        # Primeira regra que casa vence (ordem do arquivo)
        for rule in self.redirect:
            if rule.matches(candidate):
                return rule.channel
        return None


def load_config(path) -> Config:
    """Lê e valida o arquivo de configuração. Qualquer falha vira ConfigError."""
    path_obj = Path(path)
    try:
        raw = path_obj.read_bytes()
    except OSError as exc:
        raise ConfigError(f"falha ao ler arquivo de configuração {path_obj}: {exc}") from exc

    try:
        config = msgspec.json.decode(raw, type=Config)
    except msgspec.DecodeError as exc:
        raise ConfigError(f"arquivo de configuração inválido {path_obj}: {exc}") from exc

    if not config.bot_channel.strip():
        raise ConfigError("BotChannel não pode ser vazio")

    logger.info(
        "Configuração carregada de %s (%d regras de redirect)", path_obj, len(config.redirect)
    )
    return config
