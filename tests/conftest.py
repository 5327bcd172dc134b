"""
Fixtures communes : réponses HTTP factices et client PostgREST sur une
session requests simulée (aucun accès réseau).
"""

import json as jsonlib
from unittest.mock import Mock

import pytest

from data_adapters.postgrest_client import PostgrestClient


def make_response(status=200, json_data=None, headers=None, reason="OK"):
    r = Mock()
    r.status_code = status
    r.ok = 200 <= status < 300
    r.reason = reason
    r.headers = headers or {}
    r.content = b"" if json_data is None else jsonlib.dumps(json_data).encode()
    if json_data is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = json_data
    return r


@pytest.fixture
def response():
    return make_response


@pytest.fixture
def http():
    return Mock()


@pytest.fixture
def rest(http):
    return PostgrestClient(base_url="http://db.test/rest/v1", api_key="anon", session=http, timeout=5)


@pytest.fixture
def notes():
    """Notifications capturées (niveau, message)."""
    captured = []

    def notify(level, message):
        captured.append((level, message))

    notify.captured = captured
    return notify


def params_of(call):
    return dict(call.kwargs["params"])
