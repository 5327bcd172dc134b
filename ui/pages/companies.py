import streamlit as st

from core.filter_state import FilterState, SortOrder
from core.query_composer import SORT_FIELDS
from ui.components.pagination import render_pagination
from ui.components.result_cards import render_results
from ui.components.sidebar import render_sidebar
from ui.state import get_directory_state

SORT_KEY = "dir_sort"


def _on_sort(state: FilterState) -> None:
    # nouveau champ : tri ascendant
    state.toggle_sort(st.session_state[SORT_KEY])


def _on_toggle_order(state: FilterState) -> None:
    state.toggle_sort(state.sort_field)


def render() -> None:
    page_state = get_directory_state()
    state = page_state.filters
    search = page_state.search

    if page_state.options is None:
        with st.spinner("Carregando filtros..."):
            page_state.options = search.service.load_filter_options()
    render_sidebar(state, page_state.options)

    st.title("🏢 Empresas")
    col_count, col_sort, col_order = st.columns([3, 2, 1])
    count_slot = col_count.empty()
    with col_sort:
        st.session_state.setdefault(SORT_KEY, state.sort_field)
        st.selectbox(
            "Ordenar por",
            list(SORT_FIELDS.keys()),
            key=SORT_KEY,
            format_func=lambda f: SORT_FIELDS[f].label,
            on_change=_on_sort,
            args=(state,),
        )
    with col_order:
        arrow = "⬆ Crescente" if state.sort_order is SortOrder.ASC else "⬇ Decrescente"
        st.button(arrow, key="dir_sort_order", on_click=_on_toggle_order, args=(state,), use_container_width=True)

    results_slot = st.empty()
    render_results(results_slot, loading=True, page=None)
    search.run(state)
    render_results(results_slot, loading=search.loading, page=search.result)

    total = search.result.total_count if search.result else 0
    count_slot.caption(
        f"{total} empresa(s) encontrada(s)" if total > 0 else "Nenhuma empresa encontrada"
    )
    render_pagination(state, total, search.service.page_size, loading=search.loading)
