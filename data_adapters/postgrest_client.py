"""
Client PostgREST (Supabase /rest/v1) construit sur requests.

`client.table("estabelecimentos").select(...).eq(...).order(...).range(...).execute()`
renvoie un `RestResponse(data, count)`. Les erreurs HTTP et réseau sont
traduites en DataServiceError / NotFoundError.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from config import SETTINGS
from core.errors import DataServiceError, NotFoundError

logger = logging.getLogger(__name__)

# caractères réservés dans les listes logiques or=(...)
_RESERVED = set(',.:()"\\ ')


@dataclass
class RestResponse:
    data: Any
    count: Optional[int] = None


def quote_value(value: Any) -> str:
    """Entoure de guillemets une valeur contenant un caractère réservé PostgREST."""
    text = str(value)
    if any(ch in _RESERVED for ch in text):
        text = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{text}"'
    return text


def parse_content_range(header: Optional[str]) -> Optional[int]:
    """'0-8/20' → 20 ; '*/0' → 0 ; '0-8/*' ou absent → None."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1].strip()
    if total == "*":
        return None
    try:
        return int(total)
    except ValueError:
        return None


class RestQuery:
    def __init__(self, client: "PostgrestClient", table: str):
        self.client = client
        self.table = table
        self.columns = "*"
        self.count: Optional[str] = None
        self.filters: List[Tuple[str, str]] = []
        self.orders: List[str] = []
        self.offset: Optional[int] = None
        self.limit: Optional[int] = None
        self.single_object = False

    # --- sélection ---
    def select(self, columns: str = "*", count: Optional[str] = None) -> "RestQuery":
        self.columns = columns
        self.count = count
        return self

    # --- prédicats ---
    def filter(self, column: str, operator: str, value: Any) -> "RestQuery":
        self.filters.append((column, f"{operator}.{value}"))
        return self

    def eq(self, column: str, value: Any) -> "RestQuery":
        return self.filter(column, "eq", value)

    def gte(self, column: str, value: Any) -> "RestQuery":
        return self.filter(column, "gte", value)

    def lte(self, column: str, value: Any) -> "RestQuery":
        return self.filter(column, "lte", value)

    def or_(self, conditions: List[str]) -> "RestQuery":
        self.filters.append(("or", "(" + ",".join(conditions) + ")"))
        return self

    # --- tri / pagination ---
    def order(
        self,
        column: str,
        ascending: bool = True,
        nulls_last: bool = True,
        foreign_table: Optional[str] = None,
    ) -> "RestQuery":
        target = f"{foreign_table}({column})" if foreign_table else column
        term = f"{target}.{'asc' if ascending else 'desc'}"
        if nulls_last:
            term += ".nullslast"
        self.orders.append(term)
        return self

    def range(self, start: int, end: int) -> "RestQuery":
        """Bornes incluses, indexées à partir de 0 (comme Range: start-end)."""
        self.offset = start
        self.limit = max(0, end - start + 1)
        return self

    def limit_to(self, n: int) -> "RestQuery":
        self.limit = n
        return self

    def single(self) -> "RestQuery":
        self.single_object = True
        return self

    def build_params(self) -> List[Tuple[str, str]]:
        params = [("select", self.columns)]
        params.extend(self.filters)
        if self.orders:
            params.append(("order", ",".join(self.orders)))
        if self.offset is not None:
            params.append(("offset", str(self.offset)))
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        return params

    def build_headers(self) -> Dict[str, str]:
        headers = {}
        if self.count:
            headers["Prefer"] = f"count={self.count}"
        if self.single_object:
            headers["Accept"] = "application/vnd.pgrst.object+json"
        return headers

    def execute(self) -> RestResponse:
        return self.client.get(self)


class PostgrestClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[int] = None,
    ):
        self.base_url = (base_url or SETTINGS.rest_url).rstrip("/")
        self.api_key = api_key if api_key is not None else SETTINGS.SUPABASE_ANON_KEY
        self.access_token = access_token
        self.session = session or requests.Session()
        self.timeout = timeout or SETTINGS.HTTP_TIMEOUT

    def table(self, name: str) -> RestQuery:
        return RestQuery(self, name)

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/{path}"
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("PostgREST %s %s injoignable: %s", method, path, e)
            raise DataServiceError(f"Serviço de dados indisponível: {e}") from e

    def get(self, query: RestQuery) -> RestResponse:
        r = self._request(
            "GET",
            query.table,
            params=query.build_params(),
            headers=self._headers(query.build_headers()),
        )
        count = parse_content_range(r.headers.get("Content-Range"))
        if r.status_code == 416:
            # offset au-delà du total : page vide, total toujours connu
            return RestResponse(data=[], count=count or 0)
        self._raise_for_error(r)
        return RestResponse(data=self._json(r), count=count)

    def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> RestResponse:
        r = self._request("POST", f"rpc/{function}", json=params or {}, headers=self._headers())
        self._raise_for_error(r)
        return RestResponse(data=self._json(r))

    def upsert(self, table: str, payload: Dict[str, Any], on_conflict: str = "id") -> RestResponse:
        headers = self._headers({"Prefer": "resolution=merge-duplicates,return=representation"})
        r = self._request("POST", table, params={"on_conflict": on_conflict}, json=payload, headers=headers)
        self._raise_for_error(r)
        return RestResponse(data=self._json(r) if r.content else [])

    @staticmethod
    def _json(r: requests.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            # proxy ou passerelle renvoyant du HTML avec un statut 2xx
            logger.warning("Réponse PostgREST illisible (%s): %s", r.status_code, e)
            raise DataServiceError("Resposta inválida do serviço de dados.", status=r.status_code) from e

    @staticmethod
    def _raise_for_error(r: requests.Response) -> None:
        if r.ok:
            return
        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or r.reason or f"HTTP {r.status_code}"
        code = body.get("code")
        error_cls = NotFoundError if code == "PGRST116" else DataServiceError
        raise error_cls(
            message,
            code=code,
            status=r.status_code,
            details=body.get("details"),
            hint=body.get("hint"),
        )
