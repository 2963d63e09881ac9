# projects/actor.py
"""
Per-request claims context.

Built once from the authenticated user and the identity provider's claim
bag (``request.auth``) and handed explicitly to the policy layer, so no
view re-derives the actor's role on its own.
"""
from dataclasses import dataclass
from typing import Optional

from core.constants import (
    DEPARTMENTS,
    ROLE_ADMIN,
    ROLE_ANONYMOUS,
    ROLE_FACULTY,
    ROLE_HOD,
)
from core.supabase_auth import extract_portal_claims


@dataclass(frozen=True)
class ActorContext:
    role: str = ROLE_ANONYMOUS
    user_id: Optional[int] = None
    department: Optional[str] = None
    user: object = None

    @classmethod
    def anonymous(cls) -> "ActorContext":
        return cls()

    @classmethod
    def for_user(cls, user, claims: Optional[dict] = None) -> "ActorContext":
        """
        Resolve role and department for a user.

        Token claims win over the stored profile; superusers always act as
        admins. Department is only kept for HoDs, since it is the HoD
        scoping key and carries no authority for anyone else.
        """
        if user is None or not user.is_authenticated:
            return cls.anonymous()

        claims = claims or {}
        role = claims.get("role") or getattr(user, "role", None) or ROLE_FACULTY
        if user.is_superuser:
            role = ROLE_ADMIN

        department = None
        if role == ROLE_HOD:
            department = claims.get("department") or getattr(user, "department", None)
            if department not in DEPARTMENTS:
                department = None

        return cls(role=role, user_id=user.pk, department=department, user=user)

    @classmethod
    def from_request(cls, request) -> "ActorContext":
        """Memoized on the request; safe to call from several places."""
        cached = getattr(request, "_portal_actor", None)
        if cached is not None:
            return cached

        claims = extract_portal_claims(getattr(request, "auth", None))
        actor = cls.for_user(getattr(request, "user", None), claims)
        request._portal_actor = actor
        return actor

    @property
    def is_anonymous(self) -> bool:
        return self.role == ROLE_ANONYMOUS

    @property
    def is_faculty(self) -> bool:
        return self.role == ROLE_FACULTY

    @property
    def is_hod(self) -> bool:
        return self.role == ROLE_HOD

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def as_dict(self) -> dict:
        return {
            "role": self.role,
            "user_id": self.user_id,
            "department": self.department,
        }
