"""
Accès à l'état de session Streamlit : une instance par navigateur pour la
session d'authentification et l'indicateur de chargement, une par page pour
l'état de recherche.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import streamlit as st

from config import SETTINGS
from core.filter_state import FilterState
from core.models import FilterOption
from core.session import SIGNED_OUT, SessionProvider
from core.stores import LoadingStore
from data_adapters.auth_client import AuthClient
from data_adapters.postgrest_client import PostgrestClient
from services.directory_service import DirectorySearch, DirectoryService
from ui.notifications import notify


@dataclass
class DirectoryPageState:
    filters: FilterState = field(default_factory=FilterState)
    options: Optional[Dict[str, List[FilterOption]]] = None
    search: Optional[DirectorySearch] = None


def _secret(name: str, default: str) -> str:
    # st.secrets prime sur l'environnement ; absence de secrets.toml tolérée
    try:
        return st.secrets.get(name, default)
    except FileNotFoundError:
        return default


def supabase_credentials() -> Tuple[str, str]:
    url = _secret("SUPABASE_URL", SETTINGS.SUPABASE_URL).rstrip("/")
    return url, _secret("SUPABASE_ANON_KEY", SETTINGS.SUPABASE_ANON_KEY)


def get_loading_store() -> LoadingStore:
    if "loading_store" not in st.session_state:
        st.session_state["loading_store"] = LoadingStore()
    return st.session_state["loading_store"]


def _drop_page_state(event, _session) -> None:
    # l'état des pages appartient à l'utilisateur connecté
    if event == SIGNED_OUT:
        for key in [k for k in st.session_state.keys() if str(k).startswith("page_state:")]:
            del st.session_state[key]


def get_session_provider() -> SessionProvider:
    if "session_provider" not in st.session_state:
        url, key = supabase_credentials()
        provider = SessionProvider(AuthClient(base_url=f"{url}/auth/v1", api_key=key))
        provider.subscribe(_drop_page_state)
        st.session_state["session_provider"] = provider
    return st.session_state["session_provider"]


def get_rest_client() -> PostgrestClient:
    """Client PostgREST authentifié par le jeton de la session courante."""
    session = get_session_provider().get_session()
    url, key = supabase_credentials()
    return PostgrestClient(
        base_url=f"{url}/rest/v1",
        api_key=key,
        access_token=session.access_token if session else None,
    )


def get_directory_state() -> DirectoryPageState:
    key = "page_state:empresas"
    if key not in st.session_state:
        st.session_state[key] = DirectoryPageState()
    page_state: DirectoryPageState = st.session_state[key]
    # le client porte le jeton courant : on le renouvelle à chaque run
    service = DirectoryService(get_rest_client(), notify=notify, loading=get_loading_store())
    if page_state.search is None:
        page_state.search = DirectorySearch(service)
    else:
        page_state.search.service = service
    return page_state


def current_page(default: str) -> str:
    return st.query_params.get("page", default)


def navigate(page: str, **params) -> None:
    st.query_params.clear()
    st.query_params["page"] = page
    for k, v in params.items():
        st.query_params[k] = str(v)
    st.rerun()
