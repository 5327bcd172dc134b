from typing import Any, Dict, Optional

import requests

from config import SETTINGS
from core.errors import AuthError


class AuthClient:
    """Client pour l'API GoTrue (Supabase /auth/v1)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[int] = None,
    ):
        self.base_url = (base_url or SETTINGS.auth_url).rstrip("/")
        self.api_key = api_key if api_key is not None else SETTINGS.SUPABASE_ANON_KEY
        self.session = session or requests.Session()
        self.timeout = timeout or SETTINGS.HTTP_TIMEOUT

    def _call(
        self,
        method: str,
        path: str,
        access_token: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {"apikey": self.api_key, "Content-Type": "application/json"}
        headers["Authorization"] = f"Bearer {access_token or self.api_key}"
        try:
            r = self.session.request(
                method,
                f"{self.base_url}/{path}",
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthError(f"Serviço de autenticação indisponível: {e}") from e
        if not r.ok:
            try:
                body = r.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            # GoTrue varie selon la version : error_description / msg / message
            message = (
                body.get("error_description")
                or body.get("msg")
                or body.get("message")
                or f"HTTP {r.status_code}"
            )
            raise AuthError(message, status=r.status_code)
        if not r.content:
            return {}
        return r.json()

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        return self._call(
            "POST", "token", params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    def refresh(self, refresh_token: str) -> Dict[str, Any]:
        return self._call(
            "POST", "token", params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        return self._call("POST", "signup", json={"email": email, "password": password})

    def get_user(self, access_token: str) -> Dict[str, Any]:
        return self._call("GET", "user", access_token=access_token)

    def update_user(self, access_token: str, attributes: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("PUT", "user", access_token=access_token, json=attributes)

    def sign_out(self, access_token: str) -> None:
        self._call("POST", "logout", access_token=access_token)
