"""Integração com a API do Slack: criação/entrada em canal e envio de mensagens."""
import json
import logging
from typing import Optional

import requests

from .channels import resolve_channel
from .config import Config
from .errors import DeliveryError
from .formatters import encode_message

logger = logging.getLogger(__name__)


class SlackClient:
    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.base_url = config.slack_api_base.rstrip('/')
        # (connect, read); o handshake TLS conta dentro do connect
        self.timeout = (config.http_timeout, config.http_timeout)

    def ensure_channel(self, name: str) -> None:
        """Best-effort: falha aqui só é logada, o post da mensagem segue."""
        params = {
            "token": self.config.slack_api_token,
            "name": name,
            "pretty": 1,
        }
        try:
            resp = self.session.get(
                f"{self.base_url}/channels.join", params=params, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.error("Falha ao criar/entrar no canal %s: %s", name, exc)
            return

        if resp.status_code != 200:
            logger.warning(
                "channels.join para %s retornou %s: %s", name, resp.status_code, resp.text
            )
        elif self.config.verbose:
            logger.debug("channels.join OK para %s: %s", name, resp.text)

    def build_payload(self, channel: str, text: str, icon: str) -> str:
        # O texto já vem codificado (LINE_BREAK, %2B...), por isso o corpo
        # é montado cru e não passa por urlencode.
        payload = {
            "channel": f"#{channel.lower()}",
            "username": self.config.bot_username,
            "text": text,
            "icon_emoji": icon,
        }
        return "payload=" + json.dumps(payload, ensure_ascii=False)

    def post_message(self, channel: str, text: str, icon: str) -> None:
        body = self.build_payload(channel, text, icon)
        if self.config.verbose:
            logger.debug("payload = %s", body)

        try:
            resp = self.session.post(
                self.config.slack_api_url,
                data=body.encode("utf-8"),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise DeliveryError(f"POST para o Slack falhou: {exc}") from exc

        if self.config.verbose:
            logger.debug("Slack API retornou %s: %s", resp.status_code, resp.text)
        if resp.status_code != 200:
            raise DeliveryError(
                f"Slack API retornou {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )


class Notifier:
    """Resolve o canal, garante que ele existe e entrega a mensagem."""

    def __init__(self, config: Config, client: Optional[SlackClient] = None):
        self.config = config
        self.client = client or SlackClient(config)

    def notify(self, candidate: str, text: str, icon: str) -> bool:
        channel = resolve_channel(candidate, self.config)
        try:
            self._deliver(channel, text, icon)
        except DeliveryError as exc:
            logger.error("Erro ao enviar mensagem para #%s: %s %s", channel, exc, exc.body)
            if self.config.self_report_errors:
                self._report_failure(channel, exc)
            return False
        return True

    def announce_start(self) -> bool:
        if not self.config.bot_start_message:
            return True
        return self.notify(self.config.bot_channel, self.config.bot_start_message, self.config.bot_icon)

    def _deliver(self, channel: str, text: str, icon: str) -> None:
        self.client.ensure_channel(channel)
        self.client.post_message(channel, text, icon)

    def _report_failure(self, channel: str, error: DeliveryError) -> None:
        # Uma única tentativa: se o canal de sistema também falhar, só loga
        system_channel = resolve_channel(self.config.bot_channel, self.config)
        if channel == system_channel:
            return
        text = encode_message(f"[ERROR] Falha ao entregar mensagem em #{channel}: {error}")
        try:
            self._deliver(system_channel, text, self.config.bot_icon)
        except DeliveryError as exc:
            logger.error("Falha também ao reportar erro no canal de sistema #%s: %s", system_channel, exc)
