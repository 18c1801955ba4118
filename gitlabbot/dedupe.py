import threading
from typing import Dict, Optional, Union

BuildId = Union[int, float]


class BuildGuard:
    """High-water mark dos build ids já notificados.

    O GitLab reenvia o mesmo webhook de build várias vezes; só um id
    estritamente maior que o último aceito gera notificação. Por padrão o
    contador é global (comportamento original). Com per_repository=True a
    marca é mantida por repositório.
    """

    def __init__(self, initial: BuildId = 0, per_repository: bool = False):
        self.initial = initial
        self.per_repository = per_repository
        self._lock = threading.Lock()
        self._mark: BuildId = initial
        self._marks: Dict[str, BuildId] = {}

    def accept(self, build_id: BuildId, repository: Optional[str] = None) -> bool:
        with self._lock:
            if self.per_repository and repository is not None:
                current = self._marks.get(repository, self.initial)
                if build_id <= current:
                    return False
                self._marks[repository] = build_id
                if build_id > self._mark:
                    self._mark = build_id
                return True

            if build_id <= self._mark:
                return False
            self._mark = build_id
            return True

    @property
    def mark(self) -> BuildId:
        with self._lock:
            return self._mark

    def mark_for(self, repository: str) -> BuildId:
        with self._lock:
            if not self.per_repository:
                return self._mark
            return self._marks.get(repository, self.initial)
