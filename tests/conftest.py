from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any
from urllib.parse import urlsplit

import pytest
from requests import PreparedRequest, Response
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from urllib3._collections import HTTPHeaderDict

from xadm.infrastructure.http import SessionCredential, XoloHttpClient

BASE_URL = "https://xolo.example.edu"


class FakeXoloServer(BaseAdapter):
    """Transport adapter answering canned responses per (method, path)."""

    def __init__(self) -> None:
        super().__init__()
        self.routes: dict[tuple[str, str], dict[str, Any]] = {}
        self.requests: list[PreparedRequest] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json_body: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
        set_cookies: list[str] | None = None,
    ) -> None:
        self.routes[(method, path)] = {
            "status": status,
            "json_body": json_body,
            "text": text,
            "headers": headers or {},
            "set_cookies": set_cookies or [],
        }

    def paths(self) -> list[str]:
        return [urlsplit(req.url).path for req in self.requests]

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        path = urlsplit(request.url).path
        canned = self.routes.get(
            (request.method, path),
            {"status": 404, "json_body": {"error": "not found"}, "text": None, "headers": {}, "set_cookies": []},
        )

        response = Response()
        response.status_code = canned["status"]
        response.reason = "OK" if canned["status"] < 400 else "Error"
        response.headers = CaseInsensitiveDict(canned["headers"])
        if canned["json_body"] is not None:
            response._content = json.dumps(canned["json_body"]).encode("utf-8")
            response.headers.setdefault("Content-Type", "application/json")
        else:
            response._content = (canned["text"] or "").encode("utf-8")
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        if canned["set_cookies"]:
            # repeated lines stay apart in urllib3, requests joins them
            raw_headers = HTTPHeaderDict()
            for value in canned["set_cookies"]:
                raw_headers.add("Set-Cookie", value)
            response.raw = SimpleNamespace(headers=raw_headers)
            response.headers["Set-Cookie"] = ", ".join(canned["set_cookies"])
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def fake_server() -> FakeXoloServer:
    return FakeXoloServer()


@pytest.fixture
def client(fake_server: FakeXoloServer) -> XoloHttpClient:
    http_client = XoloHttpClient(base_url=BASE_URL, credential=SessionCredential())
    http_client.session.mount("https://", fake_server)
    return http_client
