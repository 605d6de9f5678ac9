from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ActorKind, Role


@dataclass(frozen=True)
class Actor:
    """A learner or coach, as seen by the engine (read only)."""

    actor_id: str
    matricule: str
    kind: ActorKind
    first_name: str
    last_name: str
    is_active: bool = True
    timezone: Optional[str] = None
    group_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        return {
            "id": self.actor_id,
            "matricule": self.matricule,
            "kind": self.kind.value,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, passed explicitly into every engine call."""

    actor_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
