import streamlit as st

from core.filter_state import FilterState
from core.pagination import pagination_view


def _go(state: FilterState, page: int) -> None:
    state.go_to_page(page)


def render_pagination(state: FilterState, total_count: int, page_size: int, loading: bool) -> None:
    view = pagination_view(state.page, total_count, page_size, loading=loading)
    col_prev, col_info, col_next = st.columns([1, 2, 1])
    with col_prev:
        st.button(
            "◀ Anterior",
            key="page_prev",
            disabled=not view.can_previous,
            on_click=_go,
            args=(state, view.page - 1),
            use_container_width=True,
        )
    with col_info:
        st.markdown(
            f"<div style='text-align:center'>Página {view.page} de {view.total_pages}</div>",
            unsafe_allow_html=True,
        )
    with col_next:
        st.button(
            "Próxima ▶",
            key="page_next",
            disabled=not view.can_next,
            on_click=_go,
            args=(state, view.page + 1),
            use_container_width=True,
        )
