"""Tests for the async HTTP client."""

import httpx
import pytest

from notices_scraper.core.http_client import HttpClient, USER_AGENT


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_requires_context(self):
        with pytest.raises(RuntimeError):
            await HttpClient().get("https://www.rbi.org.in/")

    @pytest.mark.asyncio
    async def test_extra_headers_merged(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, text="ok")

        async with HttpClient(headers={"X-Test": "1"}, transport=httpx.MockTransport(handler)) as client:
            assert await client.get_text("https://pib.gov.in/") == "ok"

        assert seen["user-agent"] == USER_AGENT
        assert seen["x-test"] == "1"

    @pytest.mark.asyncio
    async def test_status_error_raised(self):
        def handler(request):
            return httpx.Response(403)

        async with HttpClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get("https://www.sebi.gov.in/")

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        async with HttpClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get("https://dor.gov.in/")

        assert len(calls) == 1
