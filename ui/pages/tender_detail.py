import streamlit as st

from core.labels import tender_status_label
from core.models import to_float
from services.tender_service import TenderService, TenderUnavailable, format_file_size
from ui.components.results_table import render_table
from ui import notifications
from ui.state import get_loading_store, get_rest_client, navigate
from utils.formatting import format_brl, format_date_br


def render() -> None:
    tender_id = st.query_params.get("id")
    if not tender_id:
        notifications.defer("error", "Licitação não informada.")
        navigate("licitacoes")

    svc = TenderService(get_rest_client(), notify=notifications.notify, loading=get_loading_store())
    try:
        with st.spinner("Carregando detalhes da licitação..."):
            detail = svc.get_detail(tender_id)
    except TenderUnavailable as e:
        notifications.defer("error", e.message)
        navigate("licitacoes")
        return

    lic = detail.tender
    if st.button("⬅ Voltar para licitações"):
        navigate("licitacoes")

    st.title(f"📑 {lic.numero}")
    st.caption(f"{tender_status_label(lic.status)} · {lic.modalidade}")
    st.subheader(lic.objeto)
    if lic.descricao:
        st.write(lic.descricao)

    col_a, col_b, col_c = st.columns(3)
    col_a.metric("Órgão", lic.orgao)
    col_b.metric("Abertura", format_date_br(lic.data_abertura) or "-")
    if lic.data_fechamento:
        col_c.metric("Fechamento", format_date_br(lic.data_fechamento))
    if lic.valor_estimado is not None:
        st.markdown(f"**Valor estimado:** {format_brl(lic.valor_estimado)}")

    st.divider()
    st.subheader("📎 Documentos")
    docs = [dict(d, tamanho_fmt=format_file_size(d.get("tamanho"))) for d in detail.documentos]
    render_table(
        docs,
        {"nome": "Nome", "tipo": "Tipo", "tamanho_fmt": "Tamanho", "url": "Link"},
        key="lic_docs",
        empty_message="Nenhum documento anexado.",
    )

    st.subheader("📨 Propostas")
    props = [
        dict(p, valor_fmt=format_brl(to_float(p.get("valor"))),
             data_fmt=format_date_br(p.get("data_envio")))
        for p in detail.propostas
    ]
    render_table(
        props,
        {"valor_fmt": "Valor", "status": "Status", "data_fmt": "Enviada em"},
        key="lic_props",
        empty_message="Nenhuma proposta enviada.",
    )
