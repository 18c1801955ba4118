"""Modelos tipados dos webhooks do GitLab (push, merge request, build).

Os modelos só carregam dados e validam o payload no momento do parse:
JSON malformado, campo obrigatório ausente, lista de commits vazia ou
timestamp inválido viram DecodeError.
"""
from datetime import datetime, timezone
from typing import Annotated, Optional, Tuple, Type, TypeVar, Union

import msgspec

from .errors import DecodeError

EventT = TypeVar("EventT")


class Author(msgspec.Struct, frozen=True):
    name: str = ""
    email: str = ""


class Commit(msgspec.Struct, frozen=True):
    id: str
    url: str
    timestamp: datetime
    message: str = ""
    author: Optional[Author] = None


# O GitLab envia os commits do mais antigo para o mais novo
Commits = Annotated[Tuple[Commit, ...], msgspec.Meta(min_length=1)]


class Repository(msgspec.Struct, frozen=True):
    name: str


class PushData(msgspec.Struct, frozen=True, kw_only=True):
    repository: Repository
    user_name: str
    commits: Commits

    @property
    def last_commit(self) -> Commit:
        return self.commits[-1]


class PushEvent(PushData, frozen=True, kw_only=True):
    ref: str

    def channel_candidate(self) -> str:
        return self.repository.name


class Project(msgspec.Struct, frozen=True):
    name: str


def parse_created_at(value: str) -> datetime:
    """Aceita o formato antigo do GitLab ('2013-12-03 17:23:34 UTC') e RFC 3339."""
    value = value.strip()
    if value.endswith(" UTC"):
        parsed = datetime.strptime(value, "%Y-%m-%d %H:%M:%S UTC")
        return parsed.replace(tzinfo=timezone.utc)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class MergeAttributes(msgspec.Struct, frozen=True, kw_only=True):
    state: str
    source: Project
    source_branch: str
    target: Project
    target_branch: str
    created_at: str
    description: Optional[str] = ""

    def __post_init__(self):
        # ValueError aqui vira msgspec.ValidationError -> DecodeError
        parse_created_at(self.created_at)

    @property
    def created(self) -> datetime:
        return parse_created_at(self.created_at)


class MergeEvent(msgspec.Struct, frozen=True):
    object_attributes: MergeAttributes

    @property
    def state(self) -> str:
        return self.object_attributes.state

    @property
    def source(self) -> Tuple[str, str]:
        attrs = self.object_attributes
        return attrs.source.name, attrs.source_branch

    @property
    def target(self) -> Tuple[str, str]:
        attrs = self.object_attributes
        return attrs.target.name, attrs.target_branch

    @property
    def description(self) -> str:
        return self.object_attributes.description or ""

    def channel_candidate(self) -> str:
        return self.object_attributes.target.name


class BuildEvent(msgspec.Struct, frozen=True, kw_only=True):
    build_id: Union[int, float]
    build_status: str
    ref: str
    push_data: PushData

    def channel_candidate(self) -> str:
        return self.push_data.repository.name


def decode_event(event_type: Type[EventT], raw: bytes) -> EventT:
    """Decodifica o corpo bruto da requisição no modelo indicado."""
    if not raw or not raw.strip():
        raise DecodeError("corpo da requisição vazio")
    try:
        return msgspec.json.decode(raw, type=event_type)
    except msgspec.DecodeError as exc:
        raise DecodeError(f"payload {event_type.__name__} inválido: {exc}") from exc
