import pandas as pd
import streamlit as st

from core.labels import tender_status_label
from services.tender_service import (
    ALL_MODALIDADES,
    ALL_STATUS,
    TenderService,
    distinct_values,
    filter_tenders,
    tenders_frame,
)
from ui.notifications import notify
from ui.state import get_loading_store, get_rest_client, navigate
from utils.formatting import format_brl, format_date_br

STATE_KEY = "page_state:licitacoes"
STATUS_ICONS = {"aberta": "🟢", "encerrada": "🔴"}


def render() -> None:
    st.title("📑 Licitações")

    if STATE_KEY not in st.session_state:
        svc = TenderService(get_rest_client(), notify=notify, loading=get_loading_store())
        with st.spinner("Carregando licitações..."):
            st.session_state[STATE_KEY] = tenders_frame(svc.list_tenders())
    df = st.session_state[STATE_KEY]

    col_q, col_s, col_m = st.columns([2, 1, 1])
    with col_q:
        term = st.text_input("Buscar", placeholder="Número, órgão, objeto...", key="lic_search")
    with col_s:
        status = st.selectbox(
            "Status",
            [ALL_STATUS] + distinct_values(df, "status"),
            format_func=lambda s: "Todos" if s == ALL_STATUS else tender_status_label(s),
            key="lic_status",
        )
    with col_m:
        modalidade = st.selectbox(
            "Modalidade",
            [ALL_MODALIDADES] + distinct_values(df, "modalidade"),
            format_func=lambda m: "Todas" if m == ALL_MODALIDADES else m,
            key="lic_modalidade",
        )

    view = filter_tenders(df, term, status, modalidade)
    if view.empty:
        st.info("Nenhuma licitação encontrada com os filtros aplicados.")
        return

    cols = st.columns(2)
    for i, (_, lic) in enumerate(view.iterrows()):
        with cols[i % 2]:
            with st.container(border=True):
                icon = STATUS_ICONS.get(str(lic["status"]).lower(), "🟡")
                st.markdown(f"**{lic['numero']}** · {icon} {tender_status_label(lic['status'])}")
                st.write(lic["objeto"])
                st.caption(f"🏛️ {lic['orgao']} · 💼 {lic['modalidade']}")
                if pd.notna(lic["data_abertura"]):
                    st.caption(f"📅 Abertura: {format_date_br(lic['data_abertura'])}")
                if pd.notna(lic["valor_estimado"]):
                    st.caption(f"💰 Valor estimado: {format_brl(lic['valor_estimado'])}")
                if st.button("Ver detalhes", key=f"lic_{lic['id']}"):
                    navigate("licitacao", id=lic["id"])
