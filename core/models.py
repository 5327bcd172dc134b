from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from core.labels import PorteEmpresa, SituacaoCadastral, label_for


@dataclass(frozen=True)
class FilterOption:
    code: Union[str, int]
    label: str


def _embedded(row: Dict[str, Any], alias: str) -> Dict[str, Any]:
    # PostgREST renvoie null (ou une liste vide) quand la jointure ne trouve rien
    value = row.get(alias)
    if isinstance(value, list):
        value = value[0] if value else None
    return value or {}


def to_float(value: Any) -> Optional[float]:
    """Numérique PostgREST (souvent une chaîne) ; vide ou illisible → None."""
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def decode_yyyymmdd(value: Any) -> Optional[date]:
    """20190315 → date(2019, 3, 15) ; 0, vide ou invalide → None."""
    if value in (None, "", 0, "0"):
        return None
    try:
        n = int(value)
        return date(n // 10000, (n // 100) % 100, n % 100)
    except (TypeError, ValueError):
        return None


@dataclass
class EstablishmentRow:
    id: Any
    cnpj: str
    nome_fantasia: Optional[str] = None
    razao_social: Optional[str] = None
    situacao_code: Optional[str] = None
    situacao: Optional[str] = None
    porte: Optional[str] = None
    capital_social: Optional[float] = None
    setor: Optional[str] = None
    uf: Optional[str] = None
    cidade: Optional[str] = None
    data_inicio_atividade: Optional[date] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.nome_fantasia or self.razao_social or self.cnpj

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "EstablishmentRow":
        empresa = _embedded(row, "empresa")
        setor = _embedded(row, "setor")
        cidade = _embedded(row, "cidade")
        situacao = row.get("situacao_cadastral")
        return cls(
            id=row.get("id"),
            cnpj=str(row.get("cnpj") or ""),
            nome_fantasia=row.get("nome_fantasia") or None,
            razao_social=empresa.get("razao_social"),
            situacao_code=SituacaoCadastral.normalize(situacao) if situacao is not None else None,
            situacao=label_for(SituacaoCadastral, situacao),
            porte=label_for(PorteEmpresa, empresa.get("porte_empresa")),
            capital_social=to_float(empresa.get("capital_social")),
            setor=setor.get("descricao"),
            uf=row.get("uf") or None,
            cidade=cidade.get("descricao"),
            data_inicio_atividade=decode_yyyymmdd(row.get("data_inicio_atividade")),
            email=row.get("correio_eletronico") or None,
        )


@dataclass
class ResultPage:
    rows: List[EstablishmentRow] = field(default_factory=list)
    total_count: int = 0

    @classmethod
    def empty(cls) -> "ResultPage":
        return cls(rows=[], total_count=0)


class ViewState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


def view_state(loading: bool, page: Optional[ResultPage]) -> ViewState:
    if loading or page is None:
        return ViewState.LOADING
    if not page.rows:
        return ViewState.EMPTY
    return ViewState.POPULATED


@dataclass
class Tender:
    id: Any
    numero: str
    orgao: str
    objeto: str
    modalidade: str
    status: str
    data_abertura: Optional[str] = None
    valor_estimado: Optional[float] = None
    data_fechamento: Optional[str] = None
    descricao: Optional[str] = None

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "Tender":
        return cls(
            id=row.get("id"),
            numero=row.get("numero") or "",
            orgao=row.get("orgao") or "",
            objeto=row.get("objeto") or "",
            modalidade=row.get("modalidade") or "",
            status=row.get("status") or "",
            data_abertura=row.get("data_abertura"),
            valor_estimado=to_float(row.get("valor_estimado")),
            data_fechamento=row.get("data_fechamento"),
            descricao=row.get("descricao"),
        )


@dataclass
class TenderDetail:
    tender: Tender
    documentos: List[Dict[str, Any]] = field(default_factory=list)
    propostas: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class Profile:
    id: str
    email: str = ""
    nome: str = ""
    tipo: str = ""
    bio: str = ""
    avatar_url: str = ""

    @property
    def initial(self) -> str:
        if self.email:
            return self.email[0].upper()
        if self.nome:
            return self.nome[0].upper()
        return "U"
