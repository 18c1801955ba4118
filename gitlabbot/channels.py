"""Resolução do nome do canal do Slack a partir do repositório/target."""
import logging

from .config import Config
from .constants import CHANNEL_NAME_MAX

logger = logging.getLogger(__name__)


def resolve_channel(candidate: str, config: Config) -> str:
    """Redirect -> prefixo (exceto canal de sistema) -> corte em 21 chars -> lower.

    A ordem importa: o redirect olha o nome cru e o corte pode comer
    parte do nome já prefixado.
    """
    channel = candidate
    redirected = config.redirect_for(channel)
    if redirected is not None:
        logger.debug("Redirect de canal: %s -> %s", channel, redirected)
        channel = redirected

    if channel != config.bot_channel:
        channel = config.channel_prefix + channel

    if len(channel) > CHANNEL_NAME_MAX:
        channel = channel[:CHANNEL_NAME_MAX]

    return channel.lower()
