"""Listeners HTTP dos webhooks: um app Flask por tipo de evento.

Os três tipos (push, merge request, build) passam pelo mesmo pipeline:
decode -> (build: dedupe) -> format -> resolve canal -> entrega.
"""
import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from flask import Flask, request
from werkzeug.serving import make_server

from .config import Config
from .constants import BIND_HOST
from .dedupe import BuildGuard
from .errors import DecodeError
from .events import BuildEvent, MergeEvent, PushEvent, decode_event
from .formatters import format_build_message, format_merge_message, format_push_message
from .services import Notifier

logger = logging.getLogger(__name__)


class PipelineOutcome(enum.Enum):
    DECODE_FAILED = "decode_failed"
    SUPPRESSED = "suppressed"
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"


@dataclass(frozen=True)
class EventKind:
    name: str
    event_type: type
    formatter: Callable[..., str]
    icon_attr: str
    port_attr: str
    guarded: bool = False

    def icon(self, config: Config) -> str:
        return getattr(config, self.icon_attr)

    def port(self, config: Config) -> int:
        return getattr(config, self.port_attr)


PUSH = EventKind("push", PushEvent, format_push_message, "push_icon", "push_port")
MERGE = EventKind("merge", MergeEvent, format_merge_message, "merge_icon", "merge_port")
BUILD = EventKind("build", BuildEvent, format_build_message, "build_icon", "build_port", guarded=True)

EVENT_KINDS: Dict[str, EventKind] = {kind.name: kind for kind in (PUSH, MERGE, BUILD)}


def handle_payload(kind: EventKind, body: bytes, notifier: Notifier,
                   guard: Optional[BuildGuard] = None) -> PipelineOutcome:
    config = notifier.config
    if config.verbose:
        logger.debug("[%s] corpo recebido: %r", kind.name, body)

    try:
        event = decode_event(kind.event_type, body)
    except DecodeError as exc:
        logger.error("[%s] falha no parse do JSON: %s", kind.name, exc)
        return PipelineOutcome.DECODE_FAILED

    if config.verbose:
        logger.debug("[%s] evento decodificado: %r", kind.name, event)

    candidate = event.channel_candidate().lower()

    if kind.guarded and guard is not None:
        if not guard.accept(event.build_id, repository=candidate):
            logger.debug("[%s] build %s já notificado, ignorando", kind.name, event.build_id)
            return PipelineOutcome.SUPPRESSED

    message = kind.formatter(event)
    if notifier.notify(candidate, message, kind.icon(config)):
        return PipelineOutcome.DELIVERED
    return PipelineOutcome.DELIVERY_FAILED


def create_app(kind: EventKind, notifier: Notifier, guard: Optional[BuildGuard] = None) -> Flask:
    app = Flask(__name__)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': f'gitlabbot-{kind.name}'}, 200

    @app.route('/', defaults={'path': ''}, methods=['POST'])
    @app.route('/<path:path>', methods=['POST'])
    def receive(path):
        logger.info("Requisição de %s recebida", kind.name)
        try:
            outcome = handle_payload(kind, request.get_data(), notifier, guard)
        except Exception:
            logger.exception("[%s] erro inesperado no processamento do webhook", kind.name)
            return '', 500
        logger.debug("[%s] resultado: %s", kind.name, outcome.value)
        # O GitLab não usa a resposta: sempre 200, mesmo se a entrega falhar
        return '', 200

    return app


def build_servers(config: Config, notifier: Notifier, guard: BuildGuard, host: str = BIND_HOST):
    servers = []
    for kind in EVENT_KINDS.values():
        app = create_app(kind, notifier, guard if kind.guarded else None)
        server = make_server(host, kind.port(config), app, threaded=True)
        logger.info("Listener de %s escutando em %s:%d", kind.name, host, kind.port(config))
        servers.append(server)
    return servers


def serve_forever(config: Config, notifier: Notifier, guard: BuildGuard, host: str = BIND_HOST) -> None:
    """Sobe os três listeners. O último (build) roda na thread chamadora."""
    servers = build_servers(config, notifier, guard, host)
    for server in servers[:-1]:
        threading.Thread(target=server.serve_forever, daemon=True).start()
    try:
        servers[-1].serve_forever()
    finally:
        for server in servers[:-1]:
            server.shutdown()
        for server in servers:
            server.server_close()
