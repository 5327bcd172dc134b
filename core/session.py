"""
Fournisseur de session : état d'authentification courant et abonnements.

Les abonnés reçoivent (événement, session) à chaque changement :
SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED, USER_UPDATED.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from core.errors import AuthError

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"
USER_UPDATED = "USER_UPDATED"

# marge avant expiration pour rafraîchir le jeton
REFRESH_MARGIN_SEC = 30


@dataclass
class Session:
    access_token: str
    refresh_token: str
    expires_at: float
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def user_id(self) -> str:
        return self.user.get("id", "")

    @property
    def email(self) -> str:
        return self.user.get("email") or ""

    def is_expired(self, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return now >= self.expires_at - REFRESH_MARGIN_SEC

    @classmethod
    def from_token_response(cls, payload: Dict[str, Any], now: Optional[float] = None) -> "Session":
        now = time.time() if now is None else now
        expires_at = payload.get("expires_at") or now + int(payload.get("expires_in") or 3600)
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token", ""),
            expires_at=float(expires_at),
            user=payload.get("user") or {},
        )


@dataclass
class SignUpResult:
    user: Dict[str, Any]
    session: Optional[Session]

    @property
    def already_registered(self) -> bool:
        # GoTrue renvoie un utilisateur sans identités pour un email déjà inscrit
        identities = self.user.get("identities")
        return identities is not None and len(identities) == 0


Listener = Callable[[str, Optional[Session]], None]


class SessionProvider:
    def __init__(self, auth_client, clock: Callable[[], float] = time.time):
        self.auth = auth_client
        self.clock = clock
        self._session: Optional[Session] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, event: str, session: Optional[Session]) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(event, session)

    def get_session(self) -> Optional[Session]:
        """Session courante, rafraîchie si le jeton expire ; None si déconnecté."""
        session = self._session
        if session is None:
            return None
        if session.is_expired(self.clock()):
            try:
                payload = self.auth.refresh(session.refresh_token)
            except AuthError as e:
                logger.warning("Rafraîchissement de session refusé: %s", e.message)
                self._set(SIGNED_OUT, None)
                return None
            self._set(TOKEN_REFRESHED, Session.from_token_response(payload, now=self.clock()))
        return self._session

    def sign_in(self, email: str, password: str) -> Session:
        payload = self.auth.sign_in_with_password(email, password)
        session = Session.from_token_response(payload, now=self.clock())
        self._set(SIGNED_IN, session)
        return session

    def sign_up(self, email: str, password: str) -> SignUpResult:
        payload = self.auth.sign_up(email, password)
        # sans confirmation d'email, GoTrue renvoie directement une session
        if payload.get("access_token"):
            session = Session.from_token_response(payload, now=self.clock())
            return SignUpResult(user=session.user, session=session)
        return SignUpResult(user=payload.get("user") or payload, session=None)

    def sign_out(self) -> None:
        session = self._session
        if session is not None:
            try:
                self.auth.sign_out(session.access_token)
            except AuthError as e:
                # la session locale est effacée même si le serveur refuse
                logger.warning("Déconnexion distante en échec: %s", e.message)
        self._set(SIGNED_OUT, None)

    def update_password(self, new_password: str) -> None:
        session = self.get_session()
        if session is None:
            raise AuthError("Sessão expirada. Faça login novamente.")
        user = self.auth.update_user(session.access_token, {"password": new_password})
        session.user = user or session.user
        self._set(USER_UPDATED, session)

    def current_user(self) -> Dict[str, Any]:
        """Utilisateur tel que vu par le serveur (GET /user)."""
        session = self.get_session()
        if session is None:
            raise AuthError("Sessão expirada. Faça login novamente.")
        return self.auth.get_user(session.access_token)
