import json

import httpx
import pytest

from firstmint.infrastructure.zora.graphql_request import build_request
from firstmint.infrastructure.zora.zora_client import ZoraClient


@pytest.mark.asyncio
async def test_post_sends_json_body_and_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers["content-type"]
        seen["user_agent"] = request.headers["user-agent"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {}})

    client = ZoraClient(transport=httpx.MockTransport(handler))
    response = await client.post(build_request("0xabc", user_agent="firstmint/test"))

    assert response.status_code == 200
    assert seen["method"] == "POST"
    assert seen["url"] == "https://api.zora.co/universal/graphql"
    assert seen["content_type"] == "application/json"
    assert seen["user_agent"] == "firstmint/test"
    assert seen["body"]["variables"] == {"address": "0xabc"}


@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised():
    client = ZoraClient(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    response = await client.post(build_request("0xabc"))
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ZoraClient(transport=httpx.MockTransport(handler))
    with pytest.raises(httpx.ConnectError):
        await client.post(build_request("0xabc"))


def test_default_timeout():
    assert ZoraClient().timeout_seconds == 10.0
