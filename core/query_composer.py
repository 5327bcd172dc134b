"""
Traduction d'un FilterState en requête PostgREST sur `estabelecimentos`.

- recherche texte : ilike insensible à la casse sur quelques colonnes, combinées en OR ;
- un prédicat d'égalité par filtre renseigné, qualifié par l'alias de la table jointe ;
- bornes incluses sur la date d'ouverture, encodée en entier YYYYMMDD ;
- tri nulls last, qualifié par la table jointe le cas échéant ;
- pagination offset/limit, total exact dans la même requête.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from core.filter_state import FilterState, SortOrder
from core.pagination import page_offset
from data_adapters.postgrest_client import quote_value

TABLE = "estabelecimentos"

EMPRESA = "empresa"
SETOR = "setor"
CIDADE = "cidade"

BASE_COLUMNS = [
    "id",
    "cnpj",
    "nome_fantasia",
    "situacao_cadastral",
    "data_inicio_atividade",
    "uf",
    "correio_eletronico",
]
EMBEDS = {
    EMPRESA: "empresas(razao_social,porte_empresa,capital_social)",
    SETOR: "cnaes(descricao)",
    CIDADE: "municipios(descricao)",
}

SEARCH_COLUMNS = ["nome_fantasia", "correio_eletronico"]
CNPJ_COLUMN = "cnpj"
DATE_COLUMN = "data_inicio_atividade"
# un terme de recherche qui ressemble à un CNPJ (chiffres et ponctuation)
CNPJ_LIKE = re.compile(r"[\d.\/\-\s]+")


@dataclass(frozen=True)
class FieldSpec:
    column: str
    label: str
    table_alias: Optional[str] = None

    @property
    def qualified(self) -> str:
        return f"{self.table_alias}.{self.column}" if self.table_alias else self.column


FILTER_FIELDS: Dict[str, FieldSpec] = {
    "setor": FieldSpec("cnae_fiscal_principal", "Setor"),
    "uf": FieldSpec("uf", "Estado"),
    "porte": FieldSpec("porte_empresa", "Porte", EMPRESA),
    "situacao": FieldSpec("situacao_cadastral", "Situação"),
}

SORT_FIELDS: Dict[str, FieldSpec] = {
    "nome_fantasia": FieldSpec("nome_fantasia", "Nome fantasia"),
    "razao_social": FieldSpec("razao_social", "Razão social", EMPRESA),
    "data_inicio_atividade": FieldSpec("data_inicio_atividade", "Data de abertura"),
    "capital_social": FieldSpec("capital_social", "Capital social", EMPRESA),
}


def normalize_cnpj(value: str) -> str:
    """Forme canonique : chiffres seuls ("12.345.678/0001-90" → "12345678000190")."""
    return re.sub(r"\D", "", value or "")


def encode_yyyymmdd(d: date) -> int:
    return d.year * 10000 + d.month * 100 + d.day


def select_clause(inner_aliases: List[str]) -> str:
    parts = list(BASE_COLUMNS)
    for alias, embed in EMBEDS.items():
        table, _, columns = embed.partition("(")
        join = "!inner" if alias in inner_aliases else ""
        parts.append(f"{alias}:{table}{join}({columns}")
    return ",".join(parts)


def escape_like(term: str) -> str:
    """Échappe les jokers SQL de LIKE : le terme est cherché tel quel."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_conditions(term: str) -> List[str]:
    term = (term or "").strip()
    if not term:
        return []
    pattern = quote_value(f"*{escape_like(term.lower())}*")
    conditions = [f"{col}.ilike.{pattern}" for col in SEARCH_COLUMNS]
    digits = normalize_cnpj(term)
    if digits and CNPJ_LIKE.fullmatch(term):
        conditions.append(f"{CNPJ_COLUMN}.ilike.*{digits}*")
    return conditions


def compose_establishment_query(query, state: FilterState, page_size: int):
    """Applique `state` sur `query` (RestQuery neuve sur estabelecimentos) et la renvoie."""
    filters = state.active_filters()
    inner = sorted(
        {FILTER_FIELDS[name].table_alias for name in filters if name in FILTER_FIELDS}
        - {None}
    )
    query.select(select_clause(inner), count="exact")

    conditions = search_conditions(state.search_term)
    if conditions:
        query.or_(conditions)

    for name, value in filters.items():
        spec = FILTER_FIELDS.get(name)
        if spec is None:
            continue
        query.eq(spec.qualified, value)

    if state.date_range is not None:
        # bornes appliquées telles quelles, même si start > end
        if state.date_range.start is not None:
            query.gte(DATE_COLUMN, encode_yyyymmdd(state.date_range.start))
        if state.date_range.end is not None:
            query.lte(DATE_COLUMN, encode_yyyymmdd(state.date_range.end))

    sort = SORT_FIELDS.get(state.sort_field) or FieldSpec(state.sort_field, state.sort_field)
    query.order(
        sort.column,
        ascending=state.sort_order == SortOrder.ASC,
        nulls_last=True,
        foreign_table=sort.table_alias,
    )

    start = page_offset(state.page, page_size)
    query.range(start, start + page_size - 1)
    return query
