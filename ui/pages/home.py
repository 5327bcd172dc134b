import streamlit as st

from config import SETTINGS
from ui.state import navigate


def render() -> None:
    st.title(f"💼 {SETTINGS.APP_TITLE}")
    st.markdown(
        "Acompanhe licitações públicas, pesquise empresas por setor, estado, porte "
        "e situação cadastral, e mantenha seu perfil atualizado."
    )
    col_a, col_b = st.columns(2)
    if col_a.button("Criar conta gratuitamente", type="primary", use_container_width=True):
        navigate("signup")
    if col_b.button("Acessar minha conta", use_container_width=True):
        navigate("login")
