from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Optional


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


DEFAULT_SORT_FIELD = "data_inicio_atividade"
DEFAULT_SORT_ORDER = SortOrder.DESC


@dataclass
class FilterState:
    """
    État de recherche de l'annuaire.

    Toute modification d'un champ autre que `page` ramène à la page 1.
    Réaffecter une valeur identique n'est pas une modification (Streamlit
    réexécute les widgets à chaque interaction).
    """

    search_term: str = ""
    field_filters: Dict[str, str] = field(default_factory=dict)
    date_range: Optional[DateRange] = None
    sort_field: str = DEFAULT_SORT_FIELD
    sort_order: SortOrder = DEFAULT_SORT_ORDER
    page: int = 1

    def active_filters(self) -> Dict[str, str]:
        return {k: v for k, v in self.field_filters.items() if v not in (None, "")}

    def _changed(self) -> bool:
        self.page = 1
        return True

    def set_search_term(self, term: str) -> bool:
        term = term or ""
        if term == self.search_term:
            return False
        self.search_term = term
        return self._changed()

    def set_filter(self, name: str, value: Optional[str]) -> bool:
        value = "" if value is None else str(value)
        if self.field_filters.get(name, "") == value:
            return False
        if value:
            self.field_filters[name] = value
        else:
            self.field_filters.pop(name, None)
        return self._changed()

    def set_date_range(self, date_range: Optional[DateRange]) -> bool:
        if date_range is not None and date_range.is_empty:
            date_range = None
        if date_range == self.date_range:
            return False
        self.date_range = date_range
        return self._changed()

    def set_sort(self, sort_field: str, sort_order: SortOrder) -> bool:
        sort_order = SortOrder(sort_order)
        if (sort_field, sort_order) == (self.sort_field, self.sort_order):
            return False
        self.sort_field = sort_field
        self.sort_order = sort_order
        return self._changed()

    def toggle_sort(self, sort_field: str) -> bool:
        """Même champ : inverse l'ordre ; autre champ : tri ascendant."""
        if sort_field == self.sort_field:
            return self.set_sort(sort_field, self.sort_order.toggled())
        return self.set_sort(sort_field, SortOrder.ASC)

    def clear(self) -> None:
        self.search_term = ""
        self.field_filters = {}
        self.date_range = None
        self.page = 1

    def go_to_page(self, page: int) -> bool:
        page = max(1, int(page))
        if page == self.page:
            return False
        self.page = page
        return True
