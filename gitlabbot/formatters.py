"""Montagem das mensagens do Slack a partir dos eventos do GitLab.

A API recebe a mensagem dentro de um único campo form-urlencoded, então
nenhuma mensagem carrega quebra de linha real: tudo vira LINE_BREAK.
"""
from datetime import datetime

from .constants import DATE_FORMAT, LINE_BREAK
from .events import BuildEvent, MergeEvent, PushEvent

_ENCODE_MAP = {
    "\n": LINE_BREAK,
    "+": "%2B",
    '"': "''",
    "&": " and ",
}


def encode_message(text: str) -> str:
    """Troca os caracteres que quebram o POST da API do Slack.

    Aplicar exatamente uma vez sobre texto livre (mensagem de commit,
    descrição de merge request).
    """
    return "".join(_ENCODE_MAP.get(ch, ch) for ch in text or "")


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def _commit_lines(repo: str, user: str, ref: str, commit) -> str:
    n = LINE_BREAK
    return (
        f"Push on *{repo}* by *{user}* at *{format_date(commit.timestamp)}* on branch *{ref}*:{n}"
        f"Last commit: <{commit.url}|{commit.id}>:{n}"
        f"```{encode_message(commit.message)}```"
    )


def format_push_message(event: PushEvent) -> str:
    body = _commit_lines(event.repository.name, event.user_name, event.ref, event.last_commit)
    return f"[PUSH] {LINE_BREAK}{body}"


def format_merge_message(event: MergeEvent) -> str:
    n = LINE_BREAK
    source_name, source_branch = event.source
    target_name, target_branch = event.target
    created = format_date(event.object_attributes.created)
    return (
        f"[MERGE REQUEST {event.state.upper()}] {n}"
        f"Target: *{target_name}/{target_branch}* Source: *{source_name}/{source_branch}*: at *{created}*:{n}"
        f"```{encode_message(event.description)}```"
    )


def format_build_message(event: BuildEvent) -> str:
    push = event.push_data
    body = _commit_lines(push.repository.name, push.user_name, event.ref, push.last_commit)
    return f"[BUILD] {LINE_BREAK}{event.build_status.upper()}: {body}"
