import streamlit as st

from services.account_service import AccountService
from ui import notifications

PUBLIC_PAGES = {"home", "login", "signup"}
PRIVATE_PAGES = {"dashboard", "licitacoes", "licitacao", "empresas", "perfil", "configuracoes"}


def resolve_route(page: str, authenticated: bool) -> str:
    """
    Routes protégées : une page privée sans session renvoie vers le login,
    l'accueil public d'un utilisateur connecté renvoie vers le tableau de bord.
    """
    if page in PRIVATE_PAGES and not authenticated:
        return "login"
    if page == "home" and authenticated:
        return "dashboard"
    if page not in PUBLIC_PAGES and page not in PRIVATE_PAGES:
        return "not_found"
    return page


def auth_gate(account: AccountService) -> bool:
    """
    Affiche le formulaire de connexion (email + mot de passe).
    Retourne True quand la connexion vient de réussir.
    Les erreurs d'authentification restent affichées dans le formulaire.
    """
    st.markdown("## 🔐 Login")
    st.write("Entre com seu email e senha para continuar.")
    with st.form("auth_form", clear_on_submit=False):
        email = st.text_input("Email", placeholder="seu@email.com")
        pwd = st.text_input("Senha", type="password", placeholder="********")
        submitted = st.form_submit_button("Entrar", use_container_width=True)

    if submitted:
        if not email or not pwd:
            st.error("Informe email e senha.")
            return False
        with st.spinner("Entrando..."):
            outcome = account.login(email, pwd)
        if outcome.ok:
            # affiché après la redirection qui suit
            notifications.defer("success", outcome.message)
            return True
        st.error(outcome.message)
    return False
