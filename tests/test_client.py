"""
Tests for the PocketBase client facade, request executor and records

HTTP is mocked with respx.
"""

import json
from typing import Any, Dict, List

import httpx
import pytest
import respx
from hypothesis import given, settings, strategies as st

from pocketbase_client import (
    PocketBaseClient,
    PocketBaseConfig,
    Result,
    MemoryStorage,
    create_pocketbase_client,
)
from pocketbase_client.errors import ApiError, ConfigurationError
from pocketbase_client.executor import RequestExecutor
from pocketbase_client.records import pagination_params


BASE = "https://x.test"
RECORDS = f"{BASE}/api/collections/users/records"


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def valid_config() -> PocketBaseConfig:
    """Valid configuration for testing."""
    return PocketBaseConfig(base_url=BASE, collection="users", token="initial_token")


@pytest.fixture
def client(valid_config: PocketBaseConfig) -> PocketBaseClient:
    """Create client for testing."""
    return PocketBaseClient(valid_config)


@pytest.fixture
def mock_record() -> Dict[str, Any]:
    return {
        "id": "rec_123",
        "collectionName": "users",
        "username": "jdoe",
        "email": "jdoe@example.com",
        "created": "2024-09-02 10:00:00.000Z",
    }


# =============================================================================
# Configuration Tests
# =============================================================================

class TestConfiguration:
    """Tests for client configuration."""

    def test_trailing_slash_stripped(self):
        client = PocketBaseClient(PocketBaseConfig(base_url="https://x.test///", collection="users"))
        assert client.base_url == "https://x.test"

    def test_missing_base_url(self):
        """Test missing base URL raises error."""
        with pytest.raises(ConfigurationError) as exc_info:
            PocketBaseClient(PocketBaseConfig(base_url="", collection="users"))
        assert "base_url is required" in str(exc_info.value)

    def test_missing_collection(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PocketBaseClient(PocketBaseConfig(base_url=BASE, collection=""))
        assert "collection is required" in str(exc_info.value)

    def test_token_optional_by_default(self):
        client = PocketBaseClient(PocketBaseConfig(base_url=BASE, collection="users"))
        assert client.get_token() is None

    def test_required_token_missing(self):
        with pytest.raises(ConfigurationError):
            PocketBaseClient(PocketBaseConfig(base_url=BASE, collection="users", require_token=True))

    def test_required_token_from_storage(self):
        config = PocketBaseConfig(
            base_url=BASE,
            collection="users",
            require_token=True,
            storage=MemoryStorage("stored_token"),
        )
        assert PocketBaseClient(config).get_token() == "stored_token"

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError):
            PocketBaseClient(PocketBaseConfig(base_url=BASE, collection="users", timeout=0))

    def test_factory(self):
        client = create_pocketbase_client(BASE, "posts", token="abc", timeout=5.0)
        assert client.collection == "posts"
        assert client.get_token() == "abc"


# =============================================================================
# Request Executor Tests
# =============================================================================

class TestRequestExecutor:
    """Tests for header injection, body encoding and result folding."""

    @respx.mock
    def test_bearer_and_content_type(self, client: PocketBaseClient):
        route = respx.get(RECORDS).mock(return_value=httpx.Response(200, json={"items": []}))

        client.get_all_records()

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer initial_token"
        assert request.headers["Content-Type"] == "application/json"
        assert request.content == b""

    @respx.mock
    def test_no_authorization_without_token(self):
        client = PocketBaseClient(PocketBaseConfig(base_url=BASE, collection="users"))
        route = respx.get(RECORDS).mock(return_value=httpx.Response(200, json={"items": []}))

        client.get_all_records()

        assert "Authorization" not in route.calls.last.request.headers

    @respx.mock
    def test_body_and_content_length(self, client: PocketBaseClient):
        route = respx.post(RECORDS).mock(return_value=httpx.Response(200, json={"id": "1"}))
        data = {"title": "héllo", "tags": ["a", "b"]}

        client.create_record(data)

        request = route.calls.last.request
        assert json.loads(request.content) == data
        assert request.headers["Content-Length"] == str(len(request.content))

    @respx.mock
    def test_custom_headers(self):
        client = PocketBaseClient(PocketBaseConfig(
            base_url=BASE, collection="users", headers={"X-Trace": "t-1"}
        ))
        route = respx.get(RECORDS).mock(return_value=httpx.Response(200, json={}))

        client.get_all_records()

        assert route.calls.last.request.headers["X-Trace"] == "t-1"

    @respx.mock
    def test_custom_method_passed_through(self):
        route = respx.route(method="PUT", url=RECORDS).mock(return_value=httpx.Response(200, json={}))
        executor = RequestExecutor()

        result = executor.execute("put", RECORDS, {"a": 1})

        assert result.status_code == 200
        assert route.called

    @respx.mock
    def test_api_error_passes_through(self, client: PocketBaseClient):
        body = {"code": 404, "message": "The requested resource wasn't found.", "data": {}}
        respx.get(f"{RECORDS}/missing").mock(return_value=httpx.Response(404, json=body))

        result = client.get_record_by_id("missing")

        assert result == Result(404, body)
        assert not result.ok

    @respx.mock
    def test_no_content_decodes_to_none(self, client: PocketBaseClient):
        respx.delete(f"{RECORDS}/rec_123").mock(return_value=httpx.Response(204))

        result = client.delete_record("rec_123")

        assert result.status_code == 204
        assert result.response is None

    @respx.mock
    def test_non_json_decodes_to_none(self, client: PocketBaseClient):
        respx.get(RECORDS).mock(return_value=httpx.Response(502, text="<html>Bad Gateway</html>"))

        result = client.get_all_records()

        assert result == Result(502, None)

    @pytest.mark.parametrize("error", [
        httpx.ConnectError("Connection refused"),
        httpx.ConnectTimeout("timed out"),
        httpx.ReadTimeout("timed out"),
        httpx.RemoteProtocolError("peer closed connection"),
    ])
    @respx.mock
    def test_transport_error_folded(self, client: PocketBaseClient, error: Exception):
        respx.get(RECORDS).mock(side_effect=error)

        result = client.get_all_records()

        assert result.status_code == 500
        assert "error" in result.response

    @respx.mock
    def test_transport_error_description(self, client: PocketBaseClient):
        respx.get(RECORDS).mock(side_effect=httpx.ConnectError("Connection refused"))

        assert client.get_all_records().response == {"error": "Connection refused"}

    @respx.mock
    def test_timeout_description(self, client: PocketBaseClient):
        respx.get(RECORDS).mock(side_effect=httpx.ReadTimeout("timed out"))

        assert client.get_all_records().response == {"error": "Request timeout"}


# =============================================================================
# Result Tests
# =============================================================================

class TestResult:

    def test_to_dict(self):
        assert Result(200, {"a": 1}).to_dict() == {"statusCode": 200, "response": {"a": 1}}

    def test_raise_for_status(self):
        with pytest.raises(ApiError) as exc_info:
            Result(400, {"code": 400, "message": "Failed to create record."}).raise_for_status()
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Failed to create record."

    def test_raise_for_status_ok(self):
        result = Result(200, {})
        assert result.raise_for_status() is result


# =============================================================================
# Record Operation Tests
# =============================================================================

class TestRecords:
    """Tests for collection-scoped CRUD."""

    @respx.mock
    def test_list_pagination_url(self):
        client = PocketBaseClient(PocketBaseConfig(base_url=BASE, collection="users"))
        route = respx.get(RECORDS).mock(return_value=httpx.Response(200, json={"items": []}))

        client.get_all_records({}, page=2, per_page=10)

        assert str(route.calls.last.request.url) == f"{RECORDS}?page=2&perPage=10"

    @respx.mock
    def test_list_overrides_caller_pagination(self, client: PocketBaseClient):
        route = respx.get(RECORDS).mock(return_value=httpx.Response(200, json={"items": []}))

        client.records.list({"perPage": 500, "filter": 'created >= "2024-09-01"', "page": 9})

        params = list(route.calls.last.request.url.params.multi_items())
        assert params == [
            ("filter", 'created >= "2024-09-01"'),
            ("page", "1"),
            ("perPage", "20"),
        ]

    @respx.mock
    def test_get_with_query(self, client: PocketBaseClient, mock_record: Dict):
        route = respx.get(f"{RECORDS}/rec_123").mock(return_value=httpx.Response(200, json=mock_record))

        result = client.records.get("rec_123", {"expand": "team"})

        assert result.response["id"] == "rec_123"
        assert route.calls.last.request.url.params["expand"] == "team"

    @respx.mock
    def test_update(self, client: PocketBaseClient, mock_record: Dict):
        route = respx.patch(f"{RECORDS}/rec_123").mock(return_value=httpx.Response(200, json=mock_record))

        result = client.update_record("rec_123", {"username": "jdoe"})

        assert result.ok
        assert json.loads(route.calls.last.request.content) == {"username": "jdoe"}

    @respx.mock
    def test_delete_has_no_body(self, client: PocketBaseClient):
        route = respx.delete(f"{RECORDS}/rec_123").mock(return_value=httpx.Response(204))

        client.records.delete("rec_123")

        assert route.calls.last.request.content == b""

    @respx.mock
    def test_create_then_get_round_trip(self, client: PocketBaseClient):
        """Records created against a stateful mock come back as a superset."""
        store: Dict[str, Dict[str, Any]] = {}

        def create(request: httpx.Request) -> httpx.Response:
            record = json.loads(request.content)
            record["id"] = f"rec{len(store) + 1}"
            record["created"] = "2024-09-02 10:00:00.000Z"
            store[record["id"]] = record
            return httpx.Response(200, json=record)

        def fetch(request: httpx.Request, record_id: str) -> httpx.Response:
            if record_id not in store:
                return httpx.Response(404, json={"code": 404, "message": "Not found."})
            return httpx.Response(200, json=store[record_id])

        respx.post(RECORDS).mock(side_effect=create)
        respx.get(url__regex=rf"{RECORDS}/(?P<record_id>\w+)").mock(side_effect=fetch)

        data = {"title": "Hello", "views": 3}
        created = client.create_record(data)
        fetched = client.get_record_by_id(created.response["id"])

        assert fetched.status_code == 200
        assert data.items() <= fetched.response.items()
        assert client.get_record_by_id("nope").status_code == 404

    @respx.mock
    def test_record_id_is_single_segment(self, client: PocketBaseClient):
        route = respx.get(url__startswith=RECORDS).mock(return_value=httpx.Response(404, json={}))

        client.records.get("a/b")

        assert route.calls.last.request.url.raw_path == b"/api/collections/users/records/a%2Fb"


class TestPaginationParams:

    @settings(deadline=None)
    @given(
        st.dictionaries(
            st.sampled_from(["page", "perPage", "filter", "sort", "expand", "fields"]),
            st.one_of(st.integers(), st.text(max_size=10)),
        ),
        st.integers(min_value=1, max_value=1000),
        st.integers(min_value=1, max_value=500),
    )
    def test_page_and_per_page_always_last(self, params: Dict, page: int, per_page: int):
        merged = pagination_params(params, page, per_page)
        keys: List[str] = list(merged)

        assert keys[-2:] == ["page", "perPage"]
        assert merged["page"] == page
        assert merged["perPage"] == per_page
        others = [key for key in params if key not in ("page", "perPage")]
        assert keys[:-2] == others

    def test_caller_params_not_mutated(self):
        params = {"page": 3}
        pagination_params(params, 1, 20)
        assert params == {"page": 3}


# =============================================================================
# Token Tests
# =============================================================================

class TestTokenStore:

    @respx.mock
    def test_set_token_applies_to_next_request(self, client: PocketBaseClient):
        route = respx.get(RECORDS).mock(return_value=httpx.Response(200, json={}))

        client.set_token("replaced")
        client.get_all_records()

        assert route.calls.last.request.headers["Authorization"] == "Bearer replaced"

    def test_clear_token(self, client: PocketBaseClient):
        client.clear_token()
        assert client.get_token() is None

    def test_context_manager(self, valid_config: PocketBaseConfig):
        with PocketBaseClient(valid_config) as pb:
            assert pb.get_token() == "initial_token"

    def test_close_releases_own_http_client(self, client: PocketBaseClient):
        client.close()
        assert client.executor._http_client.is_closed

    def test_close_leaves_injected_http_client_open(self, valid_config: PocketBaseConfig):
        http_client = httpx.Client()

        with PocketBaseClient(valid_config, http_client=http_client):
            pass

        assert not http_client.is_closed
        http_client.close()
