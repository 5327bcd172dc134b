import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Tuple

from config import SETTINGS
from core.errors import DataServiceError
from core.filter_state import FilterState
from core.labels import PorteEmpresa, SituacaoCadastral, label_for
from core.models import EstablishmentRow, FilterOption, ResultPage
from core.query_composer import TABLE, compose_establishment_query
from core.stores import LoadingStore, RequestGenerations

logger = logging.getLogger(__name__)

Notify = Callable[[str, str], None]

OPTION_ERRORS = {
    "setor": "Falha ao carregar setores.",
    "uf": "Falha ao carregar estados.",
    "porte": "Falha ao carregar portes de empresa.",
    "situacao": "Falha ao carregar situações cadastrais.",
}


def _log_only(level: str, message: str) -> None:
    logger.info("[%s] %s", level, message)


class DirectoryService:
    def __init__(
        self,
        client,
        notify: Optional[Notify] = None,
        loading: Optional[LoadingStore] = None,
        page_size: Optional[int] = None,
    ):
        self.client = client
        self.notify = notify or _log_only
        self.loading = loading or LoadingStore()
        self.page_size = page_size or SETTINGS.DIRECTORY_PAGE_SIZE

    # ------------------------------------------------------------------
    # Recherche
    # ------------------------------------------------------------------
    def search(self, state: FilterState) -> ResultPage:
        """Une page de résultats ; en cas d'échec, notification et page vide."""
        query = compose_establishment_query(self.client.table(TABLE), state, self.page_size)
        self.loading.begin()
        try:
            resp = query.execute()
        except DataServiceError as e:
            logger.error("Erro ao buscar empresas: %s (code=%s)", e.message, e.code)
            self.notify("error", "Falha ao carregar empresas.")
            return ResultPage.empty()
        finally:
            self.loading.end()
        rows = [EstablishmentRow.from_record(r) for r in resp.data or []]
        total = resp.count if resp.count is not None else len(rows)
        return ResultPage(rows=rows, total_count=total)

    # ------------------------------------------------------------------
    # Options des filtres
    # ------------------------------------------------------------------
    def _distinct(self, table: str, column: str) -> List[str]:
        resp = self.client.rpc(
            SETTINGS.DISTINCT_VALUES_RPC,
            {"p_table_name": table, "p_column_name": column},
        )
        values = []
        for v in resp.data or []:
            # RETURNS SETOF TEXT : liste de valeurs ou d'objets à une clé
            if isinstance(v, dict):
                v = next(iter(v.values()), None)
            if v not in (None, ""):
                values.append(v)
        return values

    def _sector_options(self) -> List[FilterOption]:
        resp = (
            self.client.table("cnaes")
            .select("codigo,descricao")
            .order("descricao", ascending=True)
            .execute()
        )
        return [FilterOption(code=r["codigo"], label=r.get("descricao") or str(r["codigo"])) for r in resp.data or []]

    def _uf_options(self) -> List[FilterOption]:
        return [FilterOption(code=v, label=str(v)) for v in self._distinct(TABLE, "uf")]

    def _enum_options(self, table: str, column: str, enum_cls) -> List[FilterOption]:
        return [
            # code brut : il sert tel quel de valeur au prédicat eq
            FilterOption(code=v, label=label_for(enum_cls, v))
            for v in self._distinct(table, column)
        ]

    def option_lookups(self) -> Dict[str, Callable[[], List[FilterOption]]]:
        return {
            "setor": self._sector_options,
            "uf": self._uf_options,
            "porte": lambda: self._enum_options("empresas", "porte_empresa", PorteEmpresa),
            "situacao": lambda: self._enum_options(TABLE, "situacao_cadastral", SituacaoCadastral),
        }

    def load_filter_options(self) -> Dict[str, List[FilterOption]]:
        """
        Une requête par champ filtrable, exécutées en parallèle.

        Un échec n'empêche pas les autres de se terminer : le champ concerné
        reçoit une liste vide et l'utilisateur est notifié une fois le lot
        terminé (depuis le thread du script Streamlit).
        """
        lookups = self.option_lookups()
        options: Dict[str, List[FilterOption]] = {}
        failures: List[Tuple[str, Exception]] = []

        self.loading.begin()
        try:
            with ThreadPoolExecutor(max_workers=len(lookups)) as pool:
                futures = {name: pool.submit(fn) for name, fn in lookups.items()}
                for name, future in futures.items():
                    try:
                        opts = future.result()
                    except DataServiceError as e:
                        failures.append((name, e))
                        options[name] = []
                        continue
                    options[name] = sorted(opts, key=lambda o: o.label.lower())
        finally:
            self.loading.end()

        for name, err in failures:
            logger.error("Lookup des options '%s' en échec: %s", name, err)
            self.notify("error", OPTION_ERRORS.get(name, "Falha ao carregar opções de filtro."))
        return options


class DirectorySearch:
    """
    État de résultats d'une page d'annuaire.

    Chaque lancement prend une génération ; une réponse n'est appliquée que si
    aucune recherche plus récente n'a été lancée entre-temps.
    """

    def __init__(self, service: DirectoryService):
        self.service = service
        self.generations = RequestGenerations()
        self.result: Optional[ResultPage] = None
        self.loading = False

    def run(self, state: FilterState) -> bool:
        generation = self.generations.next()
        self.loading = True
        page = self.service.search(state)
        if not self.generations.is_current(generation):
            logger.debug("Réponse obsolète ignorée (génération %s < %s)", generation, self.generations.latest)
            return False
        if page.total_count == 0:
            # aucun résultat (ou échec) : la pagination revient à la page 1
            state.go_to_page(1)
        self.result = page
        self.loading = False
        return True
