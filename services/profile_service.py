import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from core.errors import AuthError, DataServiceError, NotFoundError
from core.models import Profile
from core.session import SessionProvider

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("nome", "tipo", "bio", "avatar_url")


class ProfileService:
    def __init__(self, client, sessions: SessionProvider, notify: Callable[[str, str], None]):
        self.client = client
        self.sessions = sessions
        self.notify = notify

    def load(self) -> Optional[Profile]:
        """Profil de l'utilisateur connecté ; une ligne absente donne un profil vide."""
        try:
            user = self.sessions.current_user()
        except AuthError as e:
            logger.warning("Utilisateur courant indisponible: %s", e.message)
            self.notify("error", "Falha ao carregar perfil.")
            return None
        profile = Profile(id=user.get("id", ""), email=user.get("email") or "")
        try:
            resp = self.client.table("profiles").select("*").eq("id", profile.id).single().execute()
        except NotFoundError:
            return profile
        except DataServiceError as e:
            logger.error("Erro ao buscar perfil: %s", e.message)
            self.notify("error", "Falha ao carregar perfil.")
            return profile
        row = resp.data or {}
        for name in PROFILE_FIELDS:
            setattr(profile, name, row.get(name) or "")
        return profile

    def save(self, profile: Profile) -> bool:
        updates = {name: getattr(profile, name) for name in PROFILE_FIELDS}
        updates["id"] = profile.id
        updates["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            self.client.upsert("profiles", updates)
        except DataServiceError as e:
            logger.error("Erro ao atualizar perfil: %s", e.message)
            self.notify("error", e.message or "Falha ao atualizar perfil.")
            return False
        self.notify("success", "Perfil atualizado com sucesso!")
        return True
