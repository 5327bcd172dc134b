# app.py
# Streamlit app entrypoint

import streamlit as st

from config import SETTINGS
from services.account_service import AccountService
from ui import notifications
from ui.error_boundary import render_with_boundary
from ui.pages import companies, dashboard, home, login, profile, settings, signup, tender_detail, tenders
from ui.state import current_page, get_loading_store, get_session_provider, navigate
from utils.auth import resolve_route
from utils.log import setup_logging

setup_logging()

st.set_page_config(page_title=SETTINGS.APP_TITLE, page_icon="💼", layout="wide")

PAGES = {
    "home": home.render,
    "login": login.render,
    "signup": signup.render,
    "dashboard": dashboard.render,
    "licitacoes": tenders.render,
    "licitacao": tender_detail.render,
    "empresas": companies.render,
    "perfil": profile.render,
    "configuracoes": settings.render,
}
MENU = {
    "dashboard": "📊 Painel",
    "licitacoes": "📑 Licitações",
    "empresas": "🏢 Empresas",
    "perfil": "👤 Perfil",
    "configuracoes": "⚙️ Configurações",
}


# état de page et widgets de l'annuaire
PAGE_STATE_PREFIXES = ("page_state:", "dir_")


def render_not_found() -> None:
    st.title("404")
    st.write("Página não encontrada.")
    if st.button("Voltar ao início"):
        navigate("home")


def _drop_page_state_on_leave(page: str) -> None:
    # l'état d'une page (filtres, résultats) ne survit pas à la navigation
    if st.session_state.get("_last_page") != page:
        for key in [k for k in st.session_state.keys() if str(k).startswith(PAGE_STATE_PREFIXES)]:
            del st.session_state[key]
    st.session_state["_last_page"] = page


# --- Session / routes protégées ---
sessions = get_session_provider()
session = sessions.get_session()
requested = current_page("dashboard" if session else "home")
page = resolve_route(requested, authenticated=session is not None)
if page != requested and page != "not_found":
    navigate(page)
_drop_page_state_on_leave(page)

# --- Sidebar : indicateur de chargement + menu ---
indicator = st.sidebar.empty()
get_loading_store().subscribe(
    lambda busy: indicator.caption("⏳ Carregando...") if busy else indicator.empty()
)

if session is not None:
    st.sidebar.markdown(f"**{SETTINGS.APP_TITLE}** · {session.email}")
    for key, label in MENU.items():
        if st.sidebar.button(label, key=f"menu_{key}", use_container_width=True, disabled=key == page):
            navigate(key)
    if st.sidebar.button("🚪 Sair", use_container_width=True):
        AccountService(sessions).logout()
        navigate("login")
    st.sidebar.divider()

notifications.flush_deferred()

# --- Page ---
render_with_boundary(PAGES.get(page, render_not_found))
