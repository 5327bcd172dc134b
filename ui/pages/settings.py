import streamlit as st

from services.account_service import AccountService
from ui.notifications import notify
from ui.state import get_session_provider

NOTIFICATIONS_KEY = "pref_email_notifications"


def render() -> None:
    st.title("⚙️ Configurações")

    st.subheader("🔔 Notificações")
    st.session_state.setdefault(NOTIFICATIONS_KEY, True)
    st.toggle(
        "Notificações por e-mail",
        key=NOTIFICATIONS_KEY,
        help="Receba atualizações sobre novas licitações, status de propostas e alertas importantes.",
    )

    st.subheader("🔑 Alterar senha")
    account = AccountService(get_session_provider())
    with st.form("password_form", clear_on_submit=True):
        new_password = st.text_input("Nova senha", type="password")
        confirmation = st.text_input("Confirmar nova senha", type="password")
        submitted = st.form_submit_button("Alterar senha")

    if submitted:
        with st.spinner("Alterando..."):
            outcome = account.change_password(new_password, confirmation)
        notify(outcome.level, outcome.message)
