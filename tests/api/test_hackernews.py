"""Unit tests for api/hackernews.py module."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from api.hackernews import API_BASE, THUMBNAIL_URL, search, search_by_date
from core.errors import MalformedBackendResponse, SourceUnavailable

HIT = {
    "objectID": "4242",
    "title": "Show HN: A thing",
    "url": "https://thing.dev",
    "author": "pg",
    "points": 120,
    "num_comments": 33,
    "created_at": "2024-05-01T10:00:00Z",
    "story_text": None,
}


def _response(payload):
    mock_response = MagicMock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = MagicMock()
    return mock_response


class TestSearch:
    """Test suite for search async function."""

    async def test_default_params(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=_response({"hits": []}))
            mock_client.return_value.__aenter__.return_value.get = mock_get
            await search("open source")

        args, kwargs = mock_get.call_args
        assert args[0] == f"{API_BASE}/search"
        assert kwargs["params"] == {"query": "open source", "tags": "story", "hitsPerPage": 15}

    async def test_optional_params(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=_response({"hits": []}))
            mock_client.return_value.__aenter__.return_value.get = mock_get
            await search("rust", search_type="all", max_results=500, page=2, min_points=50)

        params = mock_get.call_args[1]["params"]
        assert "tags" not in params
        assert params["hitsPerPage"] == 50
        assert params["page"] == 2
        assert params["numericFilters"] == "points>50"

    async def test_explicit_numeric_filters_win(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=_response({"hits": []}))
            mock_client.return_value.__aenter__.return_value.get = mock_get
            await search("rust", min_points=50, numeric_filters="num_comments>10")

        assert mock_get.call_args[1]["params"]["numericFilters"] == "num_comments>10"

    async def test_query_omitted_when_empty(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=_response({"hits": []}))
            mock_client.return_value.__aenter__.return_value.get = mock_get
            await search()

        assert "query" not in mock_get.call_args[1]["params"]

    async def test_by_date_endpoint(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=_response({"hits": []}))
            mock_client.return_value.__aenter__.return_value.get = mock_get
            await search_by_date("linux", max_results=5)

        args, kwargs = mock_get.call_args
        assert args[0] == f"{API_BASE}/search_by_date"
        assert kwargs["params"]["hitsPerPage"] == 5

    async def test_normalizes_hits(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response({"hits": [HIT]})
            )
            items = await search("thing")

        assert items[0].model_dump() == {
            "url": "https://thing.dev",
            "title": "Show HN: A thing",
            "thumbnail": THUMBNAIL_URL,
            "content": "Show HN: A thing",
            "author": "pg",
            "points": 120,
            "num_comments": 33,
        }

    async def test_missing_url_links_to_discussion(self):
        hit = {**HIT, "url": None, "story_text": "Ask HN body"}
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response({"hits": [hit]})
            )
            items = await search("ask")

        assert items[0].url == "https://news.ycombinator.com/item?id=4242"
        assert items[0].content == "Ask HN body"

    async def test_status_error_raises_source_unavailable(self):
        request = httpx.Request("GET", f"{API_BASE}/search")
        response = httpx.Response(503, request=request)
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("unavailable", request=request, response=response)
        )
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(return_value=mock_response)
            with pytest.raises(SourceUnavailable) as exc_info:
                await search("q")

        assert exc_info.value.status_code == 503
        assert exc_info.value.source == "hackernews"

    async def test_timeout_raises_source_unavailable(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ReadTimeout("slow")
            )
            with pytest.raises(SourceUnavailable):
                await search("q")

    async def test_missing_hits_raises_malformed(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response({"hits": None})
            )
            with pytest.raises(MalformedBackendResponse):
                await search("q")

    @pytest.mark.parametrize(
        "overrides",
        [{"points": "n/a"}, {"num_comments": [1, 2]}, {"title": 7}],
    )
    async def test_bad_hit_fields_raise_malformed(self, overrides):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response({"hits": [{**HIT, **overrides}]})
            )
            with pytest.raises(MalformedBackendResponse) as exc_info:
                await search("q")

        assert exc_info.value.source == "hackernews"
