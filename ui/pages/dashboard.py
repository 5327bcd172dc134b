import streamlit as st

from core.labels import tender_status_label
from services.dashboard_service import DashboardService
from ui.notifications import notify
from ui.state import get_loading_store, get_rest_client, navigate
from utils.formatting import format_date_br


def render() -> None:
    st.title("📊 Painel")
    svc = DashboardService(get_rest_client(), notify=notify, loading=get_loading_store())
    with st.spinner("Carregando indicadores..."):
        stats = svc.stats()

    c1, c2, c3 = st.columns(3)
    c1.metric("Licitações abertas", stats.open_tenders)
    c2.metric("Próximas aberturas", stats.upcoming_tenders)
    c3.metric("Empresas ativas", stats.active_companies)

    st.subheader("Licitações recentes")
    if not stats.recent:
        st.caption("Nenhuma licitação cadastrada.")
    for lic in stats.recent:
        cols = st.columns([4, 1])
        cols[0].markdown(
            f"**{lic.numero}** · {lic.objeto}  \n"
            f"{tender_status_label(lic.status)} · {format_date_br(lic.data_abertura)}"
        )
        if cols[1].button("Abrir", key=f"dash_{lic.id}"):
            navigate("licitacao", id=lic.id)
