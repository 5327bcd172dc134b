import logging
from dataclasses import dataclass
from typing import Optional

from config import SETTINGS
from core.errors import AuthError, ValidationError
from core.session import SessionProvider

logger = logging.getLogger(__name__)


def validate_new_password(password: str, confirmation: str, min_length: Optional[int] = None) -> None:
    min_length = min_length or SETTINGS.MIN_PASSWORD_LENGTH
    if password != confirmation:
        raise ValidationError("As senhas não coincidem.")
    if len(password) < min_length:
        raise ValidationError(f"A senha deve ter pelo menos {min_length} caracteres.")


@dataclass
class AuthOutcome:
    ok: bool
    message: str
    level: str = "success"


class AccountService:
    """Connexion, inscription, changement de mot de passe, déconnexion."""

    def __init__(self, sessions: SessionProvider):
        self.sessions = sessions

    def login(self, email: str, password: str) -> AuthOutcome:
        try:
            self.sessions.sign_in(email.strip(), password)
        except AuthError as e:
            logger.info("Login refusé pour %s: %s", email, e.message)
            return AuthOutcome(False, e.message or "Falha no login. Verifique suas credenciais.", "error")
        return AuthOutcome(True, "Login realizado com sucesso!")

    def signup(self, email: str, password: str, confirmation: str) -> AuthOutcome:
        try:
            validate_new_password(password, confirmation)
        except ValidationError as e:
            return AuthOutcome(False, str(e), "error")
        try:
            result = self.sessions.sign_up(email.strip(), password)
        except AuthError as e:
            logger.info("Cadastro refusé pour %s: %s", email, e.message)
            return AuthOutcome(False, e.message or "Falha no cadastro. Tente novamente.", "error")
        if result.already_registered:
            return AuthOutcome(True, "Usuário já existe ou requer confirmação de e-mail. Tente fazer login.", "info")
        return AuthOutcome(True, "Cadastro realizado com sucesso! Você será redirecionado para o login.")

    def change_password(self, new_password: str, confirmation: str) -> AuthOutcome:
        try:
            validate_new_password(new_password, confirmation)
        except ValidationError as e:
            return AuthOutcome(False, str(e), "error")
        try:
            self.sessions.update_password(new_password)
        except AuthError as e:
            logger.warning("Changement de mot de passe refusé: %s", e.message)
            return AuthOutcome(False, e.message or "Falha ao alterar senha.", "error")
        return AuthOutcome(True, "Senha alterada com sucesso!")

    def logout(self) -> None:
        self.sessions.sign_out()
