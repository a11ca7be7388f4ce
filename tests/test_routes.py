"""Tests for the HTTP routes."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from pubdict.routes.dictionary import build_options
from pubdict.services.dictionary import (
    BackendError,
    DictInfo,
    Entry,
    Match,
    MatchType,
    NotSupportedError,
)

D = "https://pubdictionaries.org/dictionaries/"


@pytest.fixture
def backend(test_app):
    """A mocked backend installed on the application."""
    mock = AsyncMock()
    test_app.state.backend = mock
    return mock


class TestBuildOptions:
    """Tests for query parameter translation."""

    def test_empty(self):
        assert build_options() == {}

    def test_all_parameters(self):
        assert build_options(
            ids=["X"],
            dict_ids=["d"],
            sort="id",
            page=2,
            per_page=5,
            z=["dictAbbrev"],
            get_all_results=True,
        ) == {
            "filter": {"id": ["X"], "dictID": ["d"]},
            "sort": "id",
            "page": 2,
            "perPage": 5,
            "z": ["dictAbbrev"],
            "getAllResults": True,
        }

    def test_sort_dict_id_wins(self):
        assert build_options(sort="id", sort_dict_ids=["d"])["sort"] == {"dictID": ["d"]}


class TestDictionaryRoutes:
    """Tests for /dictionaries, /entries and /matches."""

    @pytest.mark.asyncio
    async def test_list_dict_infos(self, async_client: AsyncClient, backend):
        backend.get_dict_infos.return_value = [DictInfo(id=D + "GO", name="GO")]

        response = await async_client.get("/dictionaries", params={"id": [D + "GO"], "perPage": 3})

        assert response.status_code == 200
        assert response.json() == {"items": [{"id": D + "GO", "name": "GO"}]}
        backend.get_dict_infos.assert_awaited_once_with({"filter": {"id": [D + "GO"]}, "perPage": 3})

    @pytest.mark.asyncio
    async def test_list_entries(self, async_client: AsyncClient, backend):
        backend.get_entries.return_value = [
            Entry("X", D + "A", "X", ("x",), {"dictAbbrev": "A"}),
        ]

        response = await async_client.get("/entries", params={"id": "X", "getAllResults": "true"})

        assert response.status_code == 200
        assert response.json()["items"][0]["terms"] == [{"str": "x"}]
        backend.get_entries.assert_awaited_once_with(
            {"filter": {"id": ["X"]}, "getAllResults": True}
        )

    @pytest.mark.asyncio
    async def test_list_matches(self, async_client: AsyncClient, backend):
        backend.get_entry_matches_for_string.return_value = [
            Match("GO:1", D + "go", "cell", "GO:1", MatchType.PREFIX, ("cell",)),
        ]

        response = await async_client.get(
            "/matches", params={"q": "cell", "dictID": D + "go", "sortDictID": D + "go"}
        )

        assert response.status_code == 200
        assert response.json()["items"][0]["type"] == "S"
        backend.get_entry_matches_for_string.assert_awaited_once_with(
            "cell", {"filter": {"dictID": [D + "go"]}, "sort": {"dictID": [D + "go"]}}
        )

    @pytest.mark.asyncio
    async def test_not_supported_maps_to_404(self, async_client: AsyncClient, backend):
        backend.get_entries.side_effect = NotSupportedError()

        response = await async_client.get("/entries")

        assert response.status_code == 404
        assert response.json() == {"status": 404, "error": "Not supported"}

    @pytest.mark.asyncio
    async def test_backend_error_status(self, async_client: AsyncClient, backend):
        backend.get_dict_infos.side_effect = BackendError(503, "Request failed")
        response = await async_client.get("/dictionaries", params={"id": D + "GO"})
        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_bad_gateway_passed_through(self, async_client: AsyncClient, backend):
        """Should answer with the error's own status and body."""
        backend.get_dict_infos.side_effect = BackendError(502, "Invalid JSON response (HTTP 200)")
        response = await async_client.get("/dictionaries", params={"id": D + "GO"})
        assert response.status_code == 502
        assert response.json() == {"status": 502, "error": "Invalid JSON response (HTTP 200)"}
