import logging
from typing import Callable, List, Optional

import pandas as pd

from core.errors import DataServiceError, LicitaxError, NotFoundError
from core.models import Tender, TenderDetail
from core.stores import LoadingStore

logger = logging.getLogger(__name__)

ALL_STATUS = "todos"
ALL_MODALIDADES = "todas"
TENDER_COLUMNS = [
    "id", "numero", "orgao", "objeto", "modalidade", "status",
    "valor_estimado", "data_abertura", "data_fechamento", "descricao",
]


class TenderUnavailable(LicitaxError):
    """Détail introuvable ou illisible : la vue revient à la liste."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def format_file_size(size: Optional[float]) -> str:
    """Taille lisible : 0 → '0 Bytes', 1536 → '1.5 KB'."""
    if not size:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB", "TB"]
    value = float(size)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    return f"{round(value, 2):g} {units[i]}"


def tenders_frame(tenders: List[Tender]) -> pd.DataFrame:
    if not tenders:
        return pd.DataFrame(columns=TENDER_COLUMNS)
    return pd.DataFrame([t.__dict__ for t in tenders], columns=TENDER_COLUMNS)


def filter_tenders(
    df: pd.DataFrame,
    search_term: str = "",
    status: str = ALL_STATUS,
    modalidade: str = ALL_MODALIDADES,
) -> pd.DataFrame:
    """Filtrage côté client : sous-chaîne sur numéro/órgão/objet, statut, modalité."""
    if df.empty:
        return df
    out = df
    term = (search_term or "").strip()
    if term:
        mask = pd.Series(False, index=out.index)
        for col in ("numero", "orgao", "objeto"):
            mask |= out[col].fillna("").astype(str).str.contains(term, case=False, regex=False)
        out = out[mask]
    if status and status != ALL_STATUS:
        out = out[out["status"] == status]
    if modalidade and modalidade != ALL_MODALIDADES:
        out = out[out["modalidade"] == modalidade]
    return out


def distinct_values(df: pd.DataFrame, column: str) -> List[str]:
    """Valeurs présentes, dans l'ordre d'apparition."""
    if df.empty or column not in df.columns:
        return []
    return [v for v in df[column].dropna().drop_duplicates().tolist() if v != ""]


class TenderService:
    def __init__(self, client, notify: Callable[[str, str], None], loading: Optional[LoadingStore] = None):
        self.client = client
        self.notify = notify
        self.loading = loading or LoadingStore()

    def list_tenders(self) -> List[Tender]:
        self.loading.begin()
        try:
            resp = (
                self.client.table("licitacoes")
                .select("*")
                .order("data_abertura", ascending=False)
                .execute()
            )
        except DataServiceError as e:
            logger.error("Erro ao buscar licitações: %s", e.message)
            self.notify("error", "Falha ao carregar licitações.")
            return []
        finally:
            self.loading.end()
        return [Tender.from_record(r) for r in resp.data or []]

    def get_detail(self, tender_id) -> TenderDetail:
        """Appel d'offres + documents + propositions ; TenderUnavailable sinon."""
        self.loading.begin()
        try:
            tender = self.client.table("licitacoes").select("*").eq("id", tender_id).single().execute()
            documentos = self.client.table("documentos").select("*").eq("licitacao_id", tender_id).execute()
            propostas = self.client.table("propostas").select("*").eq("licitacao_id", tender_id).execute()
        except NotFoundError:
            logger.warning("Licitação %s introuvable", tender_id)
            raise TenderUnavailable("Licitação não encontrada.") from None
        except DataServiceError as e:
            logger.error("Erro ao buscar detalhes da licitação %s: %s", tender_id, e.message)
            raise TenderUnavailable(e.message or "Falha ao carregar detalhes da licitação.")
        finally:
            self.loading.end()
        return TenderDetail(
            tender=Tender.from_record(tender.data),
            documentos=documentos.data or [],
            propostas=propostas.data or [],
        )
