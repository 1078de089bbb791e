import asyncio
import json
import unittest

from aiohttp import web
from aiohttp.test_utils import AioHTTPTestCase

from subjct_mcp.api import APIRequestError, APITimeoutError, HTTPMethod, SubjctClient, ToolDispatcher
from subjct_mcp.config import SubjctConfig


class TestSubjctClient(AioHTTPTestCase):
    """SubjctClient against an in-process stand-in for the SUBJCT API"""

    async def get_application(self):
        self.received = []
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self.handle)
        return app

    async def handle(self, request: web.Request) -> web.Response:
        self.received.append({
            "method": request.method,
            "path_qs": request.raw_path,
            "headers": dict(request.headers),
            "body": await request.read(),
        })
        if request.path == "/json":
            return web.json_response({"title": "Post", "words": 120})
        if request.path == "/text":
            return web.Response(text="plain body")
        if request.path == "/empty":
            return web.Response(text="")
        if request.path == "/broken":
            return web.Response(text="{not json", content_type="application/json")
        if request.path.startswith("/slow"):
            await asyncio.sleep(1.0)
            return web.json_response({})
        if request.path == "/fail":
            return web.Response(status=404, reason="Not Found", text="article missing")
        return web.Response(status=500, reason="Internal Server Error", text="boom")

    def make_client(self, **overrides) -> SubjctClient:
        base_url = str(self.server.make_url("/"))
        return SubjctClient(SubjctConfig(base_url=base_url, **overrides))

    async def test_json_response_decoded(self):
        result = await self.make_client().request("/json")
        self.assertEqual(result, {"title": "Post", "words": 120})

    async def test_text_response_returned_raw(self):
        result = await self.make_client().request("/text")
        self.assertEqual(result, "plain body")

    async def test_empty_text_response(self):
        result = await self.make_client().request("/empty", HTTPMethod.POST)
        self.assertEqual(result, "")

    async def test_malformed_json_raises(self):
        with self.assertRaises(json.JSONDecodeError):
            await self.make_client().request("/broken")

    async def test_non_success_status_raises(self):
        with self.assertRaises(APIRequestError) as ctx:
            await self.make_client().request("/fail")

        error = ctx.exception
        self.assertEqual(error.status, 404)
        self.assertEqual(error.body, "article missing")
        self.assertEqual(str(error), "API request failed: 404 Not Found - article missing")

    async def test_timeout_raises_with_message(self):
        """A slow API surfaces as APITimeoutError naming the URL and limit"""
        client = self.make_client(timeout=0.1)
        with self.assertRaises(APITimeoutError) as ctx:
            await client.request("/slow")

        error = ctx.exception
        self.assertEqual(error.timeout, 0.1)
        self.assertTrue(error.url.endswith("/slow"))
        self.assertEqual(str(error), f"Request to {error.url} timed out after 0.1 seconds")

    async def test_timeout_reported_by_dispatcher(self):
        client = self.make_client(timeout=0.1)
        client.config.base_url = str(self.server.make_url("/slow"))
        result = await ToolDispatcher(client).call_tool("get_organisation", {})

        self.assertTrue(result.isError)
        self.assertTrue(result.content[0].text.startswith("Error: Request to "))
        self.assertTrue(result.content[0].text.endswith("/slow/org timed out after 0.1 seconds"))

    async def test_server_error_raises(self):
        with self.assertRaises(APIRequestError) as ctx:
            await self.make_client().request("/anything", HTTPMethod.PUT, {"a": 1})
        self.assertEqual(ctx.exception.status, 500)

    async def test_body_serialized_as_json(self):
        await self.make_client().request("/json", HTTPMethod.POST, {"query": "seo", "size": 3})
        received = self.received[-1]
        self.assertEqual(received["method"], "POST")
        self.assertEqual(json.loads(received["body"]), {"query": "seo", "size": 3})
        self.assertEqual(received["headers"]["Content-Type"], "application/json")

    async def test_get_sends_no_body(self):
        await self.make_client().request("/json")
        self.assertEqual(self.received[-1]["body"], b"")

    async def test_query_string_kept(self):
        await self.make_client().request("/json?page=2&size=5")
        self.assertEqual(self.received[-1]["path_qs"], "/json?page=2&size=5")

    async def test_no_credentials_configured(self):
        await self.make_client().request("/json", use_secret_key=True)
        headers = self.received[-1]["headers"]
        self.assertNotIn("Authorization", headers)
        self.assertNotIn("X-Secret-Key", headers)

    async def test_bearer_token_on_standard_requests(self):
        client = self.make_client(api_key="key-1", secret_key="secret-1")
        await client.request("/json")
        headers = self.received[-1]["headers"]
        self.assertEqual(headers["Authorization"], "Bearer key-1")
        self.assertNotIn("X-Secret-Key", headers)

    async def test_secret_key_on_privileged_requests(self):
        client = self.make_client(api_key="key-1", secret_key="secret-1")
        await client.request("/json", use_secret_key=True)
        headers = self.received[-1]["headers"]
        self.assertEqual(headers["X-Secret-Key"], "secret-1")
        self.assertNotIn("Authorization", headers)

    async def test_secret_request_falls_back_to_bearer(self):
        client = self.make_client(api_key="key-1")
        await client.request("/json", use_secret_key=True)
        self.assertEqual(self.received[-1]["headers"]["Authorization"], "Bearer key-1")

    async def test_extra_headers_merged(self):
        await self.make_client().request("/json", headers={"X-Trace": "abc"})
        headers = self.received[-1]["headers"]
        self.assertEqual(headers["X-Trace"], "abc")
        self.assertEqual(headers["Content-Type"], "application/json")


if __name__ == '__main__':
    unittest.main()
