"""Per-request caller identity, passed explicitly to services"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    user_id: UUID
    email: str
    is_admin: bool = False
    correlation_id: Optional[str] = None

    def can_manage(self, owner_id: Optional[UUID]) -> bool:
        """Admins manage every booking, customers only their own"""
        return self.is_admin or (owner_id is not None and owner_id == self.user_id)
