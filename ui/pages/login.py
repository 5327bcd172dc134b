import streamlit as st

from services.account_service import AccountService
from ui.state import get_session_provider, navigate
from utils.auth import auth_gate


def render() -> None:
    account = AccountService(get_session_provider())
    if auth_gate(account):
        navigate("dashboard")
    st.caption("Não tem uma conta?")
    if st.button("Cadastre-se"):
        navigate("signup")
