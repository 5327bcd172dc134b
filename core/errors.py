from typing import Optional


class LicitaxError(Exception):
    """Erreur de base de l'application."""


class DataServiceError(LicitaxError):
    """Échec d'un appel PostgREST (réseau, statut HTTP non 2xx)."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.details = details
        self.hint = hint


class NotFoundError(DataServiceError):
    """Lecture d'un objet unique sans résultat (PGRST116)."""


class AuthError(LicitaxError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class ValidationError(LicitaxError):
    """Saisie rejetée localement, avant tout appel distant."""
