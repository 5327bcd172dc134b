from unittest.mock import Mock

import pytest

from core.errors import AuthError
from core.models import Profile
from services.profile_service import ProfileService


@pytest.fixture
def sessions():
    s = Mock()
    s.current_user.return_value = {"id": "u1", "email": "ana@exemplo.com"}
    return s


@pytest.fixture
def service(rest, sessions, notes):
    return ProfileService(rest, sessions, notify=notes)


@pytest.mark.unit
class TestProfileService:
    def test_load(self, service, http, response):
        http.request.return_value = response(200, {"id": "u1", "nome": "Ana", "tipo": "consultor", "bio": None})
        profile = service.load()
        assert profile.nome == "Ana"
        assert profile.tipo == "consultor"
        assert profile.bio == ""
        assert profile.initial == "A"

    def test_missing_row_gives_empty_profile(self, service, http, response, notes):
        http.request.return_value = response(406, {"message": "0 rows", "code": "PGRST116"})
        profile = service.load()
        assert profile == Profile(id="u1", email="ana@exemplo.com")
        assert notes.captured == []

    def test_no_user(self, service, sessions, notes):
        sessions.current_user.side_effect = AuthError("Sessão expirada.")
        assert service.load() is None
        assert notes.captured == [("error", "Falha ao carregar perfil.")]

    def test_save(self, service, http, response, notes):
        http.request.return_value = response(201, [])
        ok = service.save(Profile(id="u1", nome="Ana", tipo="empresa"))
        payload = http.request.call_args.kwargs["json"]
        assert ok
        assert payload["id"] == "u1"
        assert payload["nome"] == "Ana"
        assert "updated_at" in payload
        assert notes.captured == [("success", "Perfil atualizado com sucesso!")]

    def test_save_failure(self, service, http, response, notes):
        http.request.return_value = response(403, {"message": "permission denied"})
        assert service.save(Profile(id="u1")) is False
        assert notes.captured == [("error", "permission denied")]


@pytest.mark.unit
class TestInitial:
    def test_fallbacks(self):
        assert Profile(id="1", nome="bruno").initial == "B"
        assert Profile(id="1").initial == "U"
