import math
from dataclasses import dataclass


def total_pages(total_count: int, page_size: int) -> int:
    """Nombre de pages, au minimum 1 (une liste vide reste sur la page 1)."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, math.ceil(max(0, total_count) / page_size))


def page_offset(page: int, page_size: int) -> int:
    return (max(1, page) - 1) * page_size


@dataclass(frozen=True)
class PaginationView:
    page: int
    total_pages: int
    can_previous: bool
    can_next: bool


def pagination_view(page: int, total_count: int, page_size: int, loading: bool = False) -> PaginationView:
    pages = total_pages(total_count, page_size)
    # une page hors bornes (total réduit, requête en échec) s'affiche comme la dernière
    page = min(max(1, page), pages)
    return PaginationView(
        page=page,
        total_pages=pages,
        can_previous=page > 1 and not loading,
        can_next=page < pages and not loading,
    )
