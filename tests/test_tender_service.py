import pytest

from core.models import Tender
from core.stores import LoadingStore
from services.tender_service import (
    ALL_MODALIDADES,
    ALL_STATUS,
    TenderService,
    TenderUnavailable,
    distinct_values,
    filter_tenders,
    format_file_size,
    tenders_frame,
)

TENDERS = [
    Tender(1, "PE 001/2024", "Prefeitura de Campinas", "Aquisição de notebooks", "Pregão Eletrônico", "aberta", "2024-05-10"),
    Tender(2, "CC 014/2024", "Secretaria de Saúde", "Reforma de UBS", "Concorrência", "encerrada", "2024-03-02"),
    Tender(3, "PE 002/2024", "Universidade Federal", "Serviços de limpeza", "Pregão Eletrônico", "suspensa", None),
]


@pytest.fixture
def frame():
    return tenders_frame(TENDERS)


@pytest.mark.unit
class TestClientSideFilter:
    def test_no_filters(self, frame):
        assert len(filter_tenders(frame)) == 3

    def test_search_is_case_insensitive_on_three_columns(self, frame):
        assert filter_tenders(frame, "campinas")["id"].tolist() == [1]
        assert filter_tenders(frame, "ubs")["id"].tolist() == [2]
        assert filter_tenders(frame, "pe 00")["id"].tolist() == [1, 3]

    def test_search_is_literal(self, frame):
        assert filter_tenders(frame, "(").empty

    def test_status_and_modalidade(self, frame):
        assert filter_tenders(frame, status="aberta")["id"].tolist() == [1]
        out = filter_tenders(frame, status=ALL_STATUS, modalidade="Pregão Eletrônico")
        assert out["id"].tolist() == [1, 3]
        assert filter_tenders(frame, status="aberta", modalidade="Concorrência").empty

    def test_empty_frame(self):
        assert filter_tenders(tenders_frame([]), "x", "aberta", ALL_MODALIDADES).empty

    def test_distinct_values(self, frame):
        assert distinct_values(frame, "modalidade") == ["Pregão Eletrônico", "Concorrência"]
        assert distinct_values(frame, "inexistente") == []


@pytest.mark.unit
class TestFileSize:
    @pytest.mark.parametrize(
        "size, expected",
        [(0, "0 Bytes"), (None, "0 Bytes"), (512, "512 Bytes"), (1024, "1 KB"), (1536, "1.5 KB"), (5 * 1024 ** 2, "5 MB")],
    )
    def test_format(self, size, expected):
        assert format_file_size(size) == expected


@pytest.fixture
def service(rest, notes):
    return TenderService(rest, notify=notes, loading=LoadingStore())


@pytest.mark.unit
class TestTenderService:
    def test_list(self, service, http, response):
        http.request.return_value = response(200, [{"id": 1, "numero": "PE 1", "status": "aberta", "valor_estimado": "1000.5"}])
        tenders = service.list_tenders()
        assert tenders[0].valor_estimado == 1000.5
        assert dict(http.request.call_args.kwargs["params"])["order"] == "data_abertura.desc.nullslast"

    def test_list_failure(self, service, http, response, notes):
        http.request.return_value = response(500, {"message": "boom"})
        assert service.list_tenders() == []
        assert notes.captured == [("error", "Falha ao carregar licitações.")]

    def test_detail(self, service, http, response):
        http.request.side_effect = [
            response(200, {"id": 1, "numero": "PE 1", "objeto": "Notebooks"}),
            response(200, [{"nome": "edital.pdf", "tamanho": 2048}]),
            response(200, []),
        ]
        detail = service.get_detail(1)
        assert detail.tender.objeto == "Notebooks"
        assert detail.documentos == [{"nome": "edital.pdf", "tamanho": 2048}]
        assert detail.propostas == []

    def test_detail_not_found(self, service, http, response):
        http.request.return_value = response(406, {"message": "0 rows", "code": "PGRST116"})
        with pytest.raises(TenderUnavailable) as exc:
            service.get_detail(99)
        assert exc.value.message == "Licitação não encontrada."

    def test_detail_failure(self, service, http, response):
        http.request.return_value = response(500, {"message": "timeout"})
        with pytest.raises(TenderUnavailable, match="timeout"):
            service.get_detail(1)
        assert service.loading.is_loading is False
