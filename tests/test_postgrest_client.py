import pytest
import requests

from core.errors import DataServiceError, NotFoundError
from data_adapters.postgrest_client import parse_content_range, quote_value


@pytest.mark.unit
class TestHelpers:
    def test_parse_content_range(self):
        assert parse_content_range("0-8/20") == 20
        assert parse_content_range("*/0") == 0
        assert parse_content_range("0-8/*") is None
        assert parse_content_range(None) is None

    def test_quote_value(self):
        assert quote_value("*acme*") == "*acme*"
        assert quote_value("a,b") == '"a,b"'
        assert quote_value('say "hi"') == '"say \\"hi\\""'


@pytest.mark.unit
class TestGet:
    def test_query_params_and_headers(self, rest, http, response):
        http.request.return_value = response(200, [{"id": 1}], {"Content-Range": "0-0/1"})

        resp = (
            rest.table("estabelecimentos")
            .select("id,uf", count="exact")
            .eq("uf", "SP")
            .order("id", ascending=False)
            .range(9, 17)
            .execute()
        )

        assert resp.data == [{"id": 1}]
        assert resp.count == 1
        method, url = http.request.call_args.args
        assert (method, url) == ("GET", "http://db.test/rest/v1/estabelecimentos")
        kwargs = http.request.call_args.kwargs
        assert kwargs["params"] == [
            ("select", "id,uf"),
            ("uf", "eq.SP"),
            ("order", "id.desc.nullslast"),
            ("offset", "9"),
            ("limit", "9"),
        ]
        assert kwargs["headers"]["Prefer"] == "count=exact"
        assert kwargs["headers"]["apikey"] == "anon"
        assert kwargs["headers"]["Authorization"] == "Bearer anon"
        assert kwargs["timeout"] == 5

    def test_access_token_is_bearer(self, rest, http, response):
        rest.access_token = "jwt"
        http.request.return_value = response(200, [])
        rest.table("licitacoes").select().execute()
        assert http.request.call_args.kwargs["headers"]["Authorization"] == "Bearer jwt"

    def test_or_filter(self, rest, http, response):
        http.request.return_value = response(200, [])
        rest.table("t").or_(["a.eq.1", "b.eq.2"]).execute()
        params = http.request.call_args.kwargs["params"]
        assert ("or", "(a.eq.1,b.eq.2)") in params

    def test_single_object_accept_header(self, rest, http, response):
        http.request.return_value = response(200, {"id": 7})
        resp = rest.table("licitacoes").select("*").eq("id", 7).single().execute()
        assert resp.data == {"id": 7}
        assert http.request.call_args.kwargs["headers"]["Accept"] == "application/vnd.pgrst.object+json"

    def test_range_past_end_is_empty_page(self, rest, http, response):
        http.request.return_value = response(416, {"message": "Requested range not satisfiable"}, {"Content-Range": "*/20"})
        resp = rest.table("estabelecimentos").select(count="exact").range(90, 98).execute()
        assert resp.data == []
        assert resp.count == 20


@pytest.mark.unit
class TestErrors:
    def test_http_error_maps_body(self, rest, http, response):
        http.request.return_value = response(
            400,
            {"message": "column x does not exist", "code": "42703", "details": None, "hint": "check"},
            reason="Bad Request",
        )
        with pytest.raises(DataServiceError) as exc:
            rest.table("t").select("x").execute()
        assert exc.value.message == "column x does not exist"
        assert exc.value.code == "42703"
        assert exc.value.status == 400
        assert exc.value.hint == "check"

    def test_no_body_uses_reason(self, rest, http, response):
        http.request.return_value = response(503, None, reason="Service Unavailable")
        with pytest.raises(DataServiceError, match="Service Unavailable"):
            rest.table("t").select().execute()

    def test_single_row_missing_is_not_found(self, rest, http, response):
        http.request.return_value = response(406, {"message": "0 rows", "code": "PGRST116"})
        with pytest.raises(NotFoundError):
            rest.table("licitacoes").select().eq("id", 1).single().execute()

    def test_non_json_success_body(self, rest, http, response):
        html = response(200, None)
        html.content = b"<html>bad gateway</html>"
        http.request.return_value = html
        with pytest.raises(DataServiceError) as exc:
            rest.table("t").select().execute()
        assert exc.value.status == 200

    def test_network_error(self, rest, http):
        http.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(DataServiceError, match="indisponível"):
            rest.table("t").select().execute()


@pytest.mark.unit
class TestWrites:
    def test_rpc(self, rest, http, response):
        http.request.return_value = response(200, ["SP", "RJ"])
        resp = rest.rpc("get_distinct_column_values", {"p_table_name": "estabelecimentos", "p_column_name": "uf"})
        assert resp.data == ["SP", "RJ"]
        method, url = http.request.call_args.args
        assert (method, url) == ("POST", "http://db.test/rest/v1/rpc/get_distinct_column_values")
        assert http.request.call_args.kwargs["json"]["p_column_name"] == "uf"

    def test_upsert(self, rest, http, response):
        http.request.return_value = response(201, [{"id": "u1", "nome": "Ana"}])
        resp = rest.upsert("profiles", {"id": "u1", "nome": "Ana"})
        kwargs = http.request.call_args.kwargs
        assert kwargs["params"] == {"on_conflict": "id"}
        assert kwargs["headers"]["Prefer"].startswith("resolution=merge-duplicates")
        assert resp.data == [{"id": "u1", "nome": "Ana"}]
