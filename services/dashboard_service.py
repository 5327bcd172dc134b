import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from core.errors import DataServiceError
from core.labels import SituacaoCadastral
from core.models import Tender
from core.stores import LoadingStore

logger = logging.getLogger(__name__)


@dataclass
class DashboardStats:
    open_tenders: int = 0
    upcoming_tenders: int = 0
    active_companies: int = 0
    recent: List[Tender] = field(default_factory=list)


class DashboardService:
    def __init__(self, client, notify: Callable[[str, str], None], loading: Optional[LoadingStore] = None):
        self.client = client
        self.notify = notify
        self.loading = loading or LoadingStore()

    def _count(self, query, what: str) -> int:
        try:
            resp = query.limit_to(0).execute()
        except DataServiceError as e:
            logger.error("Comptage '%s' en échec: %s", what, e.message)
            self.notify("error", f"Falha ao carregar {what}.")
            return 0
        return resp.count or 0

    def stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or date.today()
        out = DashboardStats()
        self.loading.begin()
        try:
            out.open_tenders = self._count(
                self.client.table("licitacoes").select("id", count="exact").eq("status", "aberta"),
                "licitações abertas",
            )
            out.upcoming_tenders = self._count(
                self.client.table("licitacoes").select("id", count="exact").gte("data_abertura", today.isoformat()),
                "próximas licitações",
            )
            out.active_companies = self._count(
                self.client.table("estabelecimentos")
                .select("id", count="exact")
                .eq("situacao_cadastral", SituacaoCadastral.ATIVA.code),
                "empresas ativas",
            )
            try:
                resp = (
                    self.client.table("licitacoes")
                    .select("*")
                    .order("data_abertura", ascending=False)
                    .limit_to(5)
                    .execute()
                )
                out.recent = [Tender.from_record(r) for r in resp.data or []]
            except DataServiceError as e:
                logger.error("Licitações recentes indisponibles: %s", e.message)
                self.notify("error", "Falha ao carregar licitações recentes.")
        finally:
            self.loading.end()
        return out
