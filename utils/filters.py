# utils/filters.py
from __future__ import annotations

from typing import Dict, List, Tuple

from core.filter_state import FilterState
from core.models import FilterOption
from core.query_composer import FILTER_FIELDS

DATE_FMT = "%d/%m/%Y"


def _option_label(options: List[FilterOption], value: str) -> str:
    for opt in options:
        if str(opt.code) == str(value):
            return opt.label
    return str(value)


def active_filters_summary(
    state: FilterState, options: Dict[str, List[FilterOption]]
) -> List[Tuple[str, str]]:
    """Puces (clé, libellé) des filtres actifs, dans l'ordre d'affichage."""
    chips: List[Tuple[str, str]] = []
    if state.search_term:
        chips.append(("search", f"Busca: {state.search_term}"))
    for name, value in state.active_filters().items():
        spec = FILTER_FIELDS.get(name)
        label = spec.label if spec else name
        chips.append((name, f"{label}: {_option_label(options.get(name, []), value)}"))
    if state.date_range is not None:
        start = state.date_range.start.strftime(DATE_FMT) if state.date_range.start else "…"
        end = state.date_range.end.strftime(DATE_FMT) if state.date_range.end else "…"
        chips.append(("date_range", f"Abertura: {start} - {end}"))
    return chips


def clear_all_filters(state: FilterState) -> None:
    state.clear()


def remove_filter(state: FilterState, key: str) -> None:
    if key == "search":
        state.set_search_term("")
    elif key == "date_range":
        state.set_date_range(None)
    else:
        state.set_filter(key, "")
