import pytest

from utils.auth import resolve_route


@pytest.mark.unit
class TestResolveRoute:
    def test_private_page_requires_session(self):
        assert resolve_route("empresas", authenticated=False) == "login"
        assert resolve_route("empresas", authenticated=True) == "empresas"

    def test_home_redirects_when_signed_in(self):
        assert resolve_route("home", authenticated=True) == "dashboard"
        assert resolve_route("home", authenticated=False) == "home"

    def test_public_pages_stay_reachable(self):
        assert resolve_route("login", authenticated=True) == "login"

    def test_unknown_page(self):
        assert resolve_route("xyz", authenticated=False) == "not_found"
