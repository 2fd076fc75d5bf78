# storefront/services/session.py
"""
Explicit session context.

The signed-in user is resolved once per request (profile + admin role) and
passed to whatever needs it. Session changes are published through
``session_events``, the one place to subscribe to sign-in/sign-out.
"""
from dataclasses import dataclass
import threading
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from storefront.domain.errors import NotAuthenticatedError
from storefront.repos.profile_repo import ProfileRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class SessionContext:
    user_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    is_admin: bool = False
    approved: bool = False

    @property
    def authenticated(self) -> bool:
        return self.user_id is not None

    def require_user(self):
        if not self.authenticated:
            raise NotAuthenticatedError("Faça login para continuar")

    def require_admin(self):
        self.require_user()
        if not self.is_admin:
            raise PermissionError("Você não tem permissão de administrador.")

    def require_approved(self):
        self.require_user()
        if not self.approved:
            raise PermissionError("Sua conta ainda não foi aprovada.")


Listener = Callable[[str, SessionContext], None]


class SessionEvents:
    def __init__(self):
        self._listeners: List[Listener] = []
        # last context seen per signed-in user
        self._active: Dict[str, SessionContext] = {}
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: str, ctx: SessionContext):
        for listener in list(self._listeners):
            listener(event, ctx)

    def remember(self, ctx: SessionContext) -> Optional[SessionContext]:
        with self._lock:
            previous = self._active.get(ctx.user_id)
            self._active[ctx.user_id] = ctx
        return previous

    def forget(self, user_id: str) -> Optional[SessionContext]:
        with self._lock:
            return self._active.pop(user_id, None)


session_events = SessionEvents()


class SessionManager:
    """
    Resolves the session context for a request. Events are published only on
    transitions: ``sign_in`` the first time a user is seen, ``updated`` when
    the profile or role changed since, ``sign_out`` on explicit sign-out.
    """

    def __init__(self, db: Session, events: SessionEvents = session_events):
        self.repo = ProfileRepo(db)
        self.events = events

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.events.subscribe(listener)

    def sign_in(self, user_id: str, email: Optional[str] = None) -> SessionContext:
        profile = self.repo.get_profile(user_id)
        is_admin = self.repo.has_role(user_id, ADMIN_ROLE)
        ctx = SessionContext(
            user_id=user_id,
            email=email,
            phone=profile.phone if profile else None,
            full_name=profile.full_name if profile else None,
            is_admin=is_admin,
            # admins are always approved
            approved=is_admin or bool(profile and profile.approved),
        )
        previous = self.events.remember(ctx)
        if previous is None:
            self.events.publish("sign_in", ctx)
        elif previous != ctx:
            self.events.publish("updated", ctx)
        return ctx

    def sign_out(self, user_id: str) -> SessionContext:
        previous = self.events.forget(user_id)
        if previous is not None:
            self.events.publish("sign_out", previous)
        return SessionContext()
