from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ActorKind
from .model import Actor


class ActorDirectory(Protocol):
    """Read-only view of the learner/coach directory owned by the platform.

    Note (DIP): scan services depend on this interface, never on a concrete DB.
    """

    def find_by_code(self, code: str) -> Optional[Actor]:
        """Match a scanned code against actor id or matricule."""

        raise NotImplementedError

    def get_by_id(self, actor_id: str) -> Optional[Actor]:
        raise NotImplementedError

    def list_active(self, kind: ActorKind) -> Sequence[Actor]:
        raise NotImplementedError

    def list_group_members(self, group_id: str) -> Sequence[Actor]:
        raise NotImplementedError
