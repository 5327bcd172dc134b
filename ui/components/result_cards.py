from typing import List

import streamlit as st

from config import SETTINGS
from core.models import EstablishmentRow, ResultPage, ViewState, view_state
from utils.formatting import format_brl, format_cnpj, format_date_br

COLUMNS = 3
STATUS_BADGES = {"02": "🟢", "08": "🔴", "04": "🔴"}


def render_skeleton(container, count: int = None) -> None:
    count = count or SETTINGS.SKELETON_CARDS
    with container.container():
        cols = st.columns(COLUMNS)
        for i in range(count):
            with cols[i % COLUMNS]:
                with st.container(border=True):
                    st.markdown("░░░░░░░░░░░░")
                    st.caption("Carregando empresas...")


def _card(row: EstablishmentRow) -> None:
    with st.container(border=True):
        badge = STATUS_BADGES.get(row.situacao_code or "", "🟡")
        st.markdown(f"**{row.display_name}**")
        if row.situacao:
            st.caption(f"{badge} {row.situacao}")
        st.caption(f"CNPJ: {format_cnpj(row.cnpj)}")
        # sous-champs optionnels : omis quand absents
        if row.razao_social and row.razao_social != row.display_name:
            st.write(f"🏢 {row.razao_social}")
        if row.setor:
            st.write(f"💼 Setor: {row.setor}")
        if row.cidade or row.uf:
            st.write("📍 " + ", ".join(p for p in (row.cidade, row.uf) if p))
        if row.porte:
            st.write(f"👥 Porte: {row.porte}")
        if row.capital_social is not None:
            st.write(f"💰 Capital social: {format_brl(row.capital_social)}")
        if row.data_inicio_atividade:
            st.write(f"📅 Abertura: {format_date_br(row.data_inicio_atividade)}")
        if row.email:
            st.write(f"✉️ {row.email.lower()}")


def render_results(container, loading: bool, page: ResultPage) -> ViewState:
    """Trois états exclusifs : chargement, vide, cartes."""
    current = view_state(loading, page)
    if current is ViewState.LOADING:
        render_skeleton(container)
        return current
    with container.container():
        if current is ViewState.EMPTY:
            st.info("Nenhuma empresa encontrada com os filtros aplicados.")
            return current
        rows: List[EstablishmentRow] = page.rows
        cols = st.columns(COLUMNS)
        for i, row in enumerate(rows):
            with cols[i % COLUMNS]:
                _card(row)
    return current
