import streamlit as st

from services.account_service import AccountService
from ui import notifications
from ui.state import get_session_provider, navigate


def render() -> None:
    st.markdown("## 📝 Criar conta")
    st.write("Preencha os campos abaixo para se cadastrar.")
    with st.form("signup_form"):
        email = st.text_input("Email", placeholder="seu@email.com")
        password = st.text_input("Senha", type="password", placeholder="********")
        confirmation = st.text_input("Confirmar senha", type="password", placeholder="********")
        submitted = st.form_submit_button("Cadastrar", use_container_width=True)

    if submitted:
        with st.spinner("Cadastrando..."):
            outcome = AccountService(get_session_provider()).signup(email, password, confirmation)
        if not outcome.ok:
            st.error(outcome.message)
        else:
            notifications.defer(outcome.level, outcome.message)
            navigate("login")

    st.caption("Já tem uma conta?")
    if st.button("Faça login"):
        navigate("login")
