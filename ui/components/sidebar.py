from typing import Dict, List

import streamlit as st

from core.filter_state import DateRange, FilterState
from core.models import FilterOption
from core.query_composer import FILTER_FIELDS
from utils.filters import active_filters_summary, clear_all_filters, remove_filter

SEARCH_KEY = "dir_search"
DATE_FROM_KEY = "dir_date_from"
DATE_TO_KEY = "dir_date_to"
ALL_LABELS = {
    "setor": "Todos setores",
    "uf": "Todos estados",
    "porte": "Todos portes",
    "situacao": "Todas situações",
}


def _filter_key(name: str) -> str:
    return f"dir_filter_{name}"


def _init_widgets(state: FilterState) -> None:
    # les widgets reflètent l'état ; ensuite seuls les callbacks modifient l'état
    st.session_state.setdefault(SEARCH_KEY, state.search_term)
    for name in FILTER_FIELDS:
        st.session_state.setdefault(_filter_key(name), state.field_filters.get(name, ""))
    dr = state.date_range or DateRange()
    st.session_state.setdefault(DATE_FROM_KEY, dr.start)
    st.session_state.setdefault(DATE_TO_KEY, dr.end)


def _reset_widgets(keys: List[str]) -> None:
    for key in keys:
        if key == SEARCH_KEY:
            st.session_state[key] = ""
        elif key in (DATE_FROM_KEY, DATE_TO_KEY):
            st.session_state[key] = None
        else:
            st.session_state[key] = ""


def _on_search(state: FilterState) -> None:
    state.set_search_term(st.session_state[SEARCH_KEY].strip())


def _on_filter(state: FilterState, name: str) -> None:
    state.set_filter(name, st.session_state[_filter_key(name)])


def _on_dates(state: FilterState) -> None:
    state.set_date_range(DateRange(st.session_state[DATE_FROM_KEY], st.session_state[DATE_TO_KEY]))


def _on_clear(state: FilterState) -> None:
    clear_all_filters(state)
    _reset_widgets([SEARCH_KEY, DATE_FROM_KEY, DATE_TO_KEY] + [_filter_key(n) for n in FILTER_FIELDS])


def _on_remove_chip(state: FilterState, chip_key: str) -> None:
    remove_filter(state, chip_key)
    if chip_key == "search":
        _reset_widgets([SEARCH_KEY])
    elif chip_key == "date_range":
        _reset_widgets([DATE_FROM_KEY, DATE_TO_KEY])
    else:
        _reset_widgets([_filter_key(chip_key)])


def render_sidebar(state: FilterState, options: Dict[str, List[FilterOption]]) -> None:
    _init_widgets(state)
    st.sidebar.header("🔎 Filtros e Busca")

    st.sidebar.text_input(
        "Buscar",
        key=SEARCH_KEY,
        placeholder="Nome fantasia, e-mail, CNPJ...",
        on_change=_on_search,
        args=(state,),
    )

    for name, spec in FILTER_FIELDS.items():
        opts = options.get(name, [])
        labels = {str(o.code): o.label for o in opts}
        codes = [""] + list(labels.keys())
        key = _filter_key(name)
        # valeur courante absente des options (lookup en échec) : on la garde
        if st.session_state[key] not in codes:
            codes.append(st.session_state[key])
        st.sidebar.selectbox(
            spec.label,
            codes,
            key=key,
            format_func=lambda c, n=name, lb=labels: ALL_LABELS[n] if c == "" else lb.get(c, c),
            on_change=_on_filter,
            args=(state, name),
        )

    st.sidebar.subheader("Data de abertura")
    col_a, col_b = st.sidebar.columns(2)
    with col_a:
        st.date_input("De", key=DATE_FROM_KEY, format="DD/MM/YYYY", on_change=_on_dates, args=(state,))
    with col_b:
        st.date_input("Até", key=DATE_TO_KEY, format="DD/MM/YYYY", on_change=_on_dates, args=(state,))
    dr = state.date_range
    if dr and dr.start and dr.end and dr.start > dr.end:
        st.sidebar.caption("A data inicial é posterior à final: nenhum resultado será encontrado.")

    st.sidebar.button("🧹 Limpar filtros", on_click=_on_clear, args=(state,), use_container_width=True)

    chips = active_filters_summary(state, options)
    if chips:
        st.sidebar.subheader("Filtros ativos")
        for chip_key, chip_label in chips:
            st.sidebar.button(
                f"❌ {chip_label}",
                key=f"chip_{chip_key}",
                on_click=_on_remove_chip,
                args=(state, chip_key),
            )
