from datetime import date

import pytest

from core.filter_state import FilterState
from core.models import ResultPage
from core.pagination import pagination_view
from core.stores import LoadingStore
from services.directory_service import DirectorySearch, DirectoryService

ROW = {
    "id": 1,
    "cnpj": "12345678000190",
    "nome_fantasia": "Padaria Central",
    "situacao_cadastral": "02",
    "data_inicio_atividade": 20190315,
    "uf": "SP",
    "correio_eletronico": "contato@padaria.com",
    "empresa": {"razao_social": "Padaria Central LTDA", "porte_empresa": "01", "capital_social": "50000.00"},
    "setor": {"descricao": "Padaria e confeitaria"},
    "cidade": None,
}


@pytest.fixture
def loading():
    return LoadingStore()


@pytest.fixture
def service(rest, notes, loading):
    return DirectoryService(rest, notify=notes, loading=loading, page_size=9)


@pytest.mark.unit
class TestSearch:
    def test_rows_and_total(self, service, http, response):
        http.request.return_value = response(200, [ROW], {"Content-Range": "0-0/20"})

        page = service.search(FilterState())

        assert page.total_count == 20
        row = page.rows[0]
        assert row.display_name == "Padaria Central"
        assert row.razao_social == "Padaria Central LTDA"
        assert row.situacao == "Ativa"
        assert row.porte == "Microempresa"
        assert row.capital_social == 50000.0
        assert row.setor == "Padaria e confeitaria"
        assert row.cidade is None
        assert row.data_inicio_atividade == date(2019, 3, 15)

    def test_failure_gives_empty_page_and_notifies(self, service, http, response, notes, loading):
        http.request.return_value = response(500, {"message": "boom"})

        page = service.search(FilterState())

        assert page == ResultPage.empty()
        assert page.total_count == 0
        assert notes.captured == [("error", "Falha ao carregar empresas.")]
        assert loading.is_loading is False

    def test_loading_store_is_balanced(self, service, http, response, loading):
        seen = []
        loading.subscribe(seen.append)
        http.request.return_value = response(200, [], {"Content-Range": "*/0"})

        service.search(FilterState())

        assert seen == [False, True, False]


def _routed(response, fail=()):
    """Réponses selon l'URL : table cnaes ou rpc de valeurs distinctes."""

    def request(method, url, **kwargs):
        if url.endswith("/cnaes"):
            if "setor" in fail:
                return response(500, {"message": "cnaes down"})
            return response(200, [
                {"codigo": 4721102, "descricao": "padaria e confeitaria"},
                {"codigo": 6201501, "descricao": "Desenvolvimento de software"},
            ])
        column = kwargs["json"]["p_column_name"]
        if column == "uf":
            if "uf" in fail:
                return response(500, {"message": "rpc down"})
            return response(200, ["SP", "AC", "RJ"])
        if column == "porte_empresa":
            return response(200, ["05", "01", "3"])
        return response(200, [{"get_distinct_column_values": "02"}, {"get_distinct_column_values": "07"}, None])

    return request


@pytest.mark.unit
class TestFilterOptions:
    def test_all_lookups(self, service, http, response, notes):
        http.request.side_effect = _routed(response)

        options = service.load_filter_options()

        assert [o.code for o in options["uf"]] == ["AC", "RJ", "SP"]
        assert [o.label for o in options["setor"]] == ["Desenvolvimento de software", "padaria e confeitaria"]
        assert [(o.code, o.label) for o in options["porte"]] == [
            ("05", "Demais"),
            ("3", "Empresa de Pequeno Porte"),
            ("01", "Microempresa"),
        ]
        assert [(o.code, o.label) for o in options["situacao"]] == [("02", "Ativa"), ("07", "Situação 07")]
        assert notes.captured == []

    def test_one_failure_does_not_block_others(self, service, http, response, notes, loading):
        http.request.side_effect = _routed(response, fail={"uf"})

        options = service.load_filter_options()

        assert options["uf"] == []
        assert len(options["setor"]) == 2
        assert len(options["porte"]) == 3
        assert notes.captured == [("error", "Falha ao carregar estados.")]
        assert loading.is_loading is False


class _SearchRacingService:
    """Lance une nouvelle recherche pendant la première."""

    def __init__(self, pages):
        self.pages = pages
        self.search_ui = None

    def search(self, state):
        page = self.pages.pop(0)
        if self.pages:
            self.search_ui.run(state)
        return page


@pytest.mark.unit
class TestDirectorySearch:
    def test_result_applied(self, service, http, response):
        http.request.return_value = response(200, [ROW], {"Content-Range": "0-0/1"})
        search = DirectorySearch(service)
        assert search.result is None

        assert search.run(FilterState()) is True
        assert search.loading is False
        assert search.result.total_count == 1

    def test_stale_result_is_dropped(self):
        older = ResultPage(rows=[], total_count=111)
        newer = ResultPage(rows=[], total_count=2)
        fake = _SearchRacingService([older, newer])
        search = DirectorySearch(fake)
        fake.search_ui = search

        applied = search.run(FilterState())

        assert applied is False
        assert search.result is newer

    def test_failed_search_applies_empty_page(self, service, http, response):
        http.request.return_value = response(500, {"message": "boom"})
        search = DirectorySearch(service)

        assert search.run(FilterState()) is True
        assert search.loading is False
        assert search.result.rows == []
        assert search.result.total_count == 0

    def test_failure_on_later_page_returns_to_first(self, service, http, response):
        state = FilterState()
        state.go_to_page(2)
        http.request.return_value = response(500, {"message": "boom"})
        search = DirectorySearch(service)

        search.run(state)

        assert state.page == 1
        view = pagination_view(state.page, search.result.total_count, 9)
        assert (view.page, view.total_pages) == (1, 1)
        assert not view.can_previous and not view.can_next

    def test_non_json_body_gives_empty_page(self, service, http, response, notes):
        page = response(200, None, {"Content-Type": "text/html"})
        page.content = b"<html>gateway</html>"
        http.request.return_value = page
        search = DirectorySearch(service)

        assert search.run(FilterState()) is True
        assert search.result.total_count == 0
        assert notes.captured == [("error", "Falha ao carregar empresas.")]


@pytest.mark.unit
class TestRawOptionCodes:
    def test_unpadded_code_is_used_as_filter_value(self, service, http, response):
        http.request.side_effect = _routed(response)

        porte = {o.label: o.code for o in service.load_filter_options()["porte"]}

        # la valeur stockée sert telle quelle au prédicat eq
        assert porte["Empresa de Pequeno Porte"] == "3"
