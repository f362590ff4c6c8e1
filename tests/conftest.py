"""Shared fixtures: an in-process fake Zabbix API served with FastAPI."""
import json
from typing import Any, Dict, List

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import Response
from fastapi.testclient import TestClient

from zabbix_rpc import ZabbixAPI

API_URL = "http://testserver/api_jsonrpc.php"
USER = "Admin"
PASSWORD = "zabbix"
TOKEN = "0424bd59b807674191e7d77572075f33"

HOSTS = [
    {"hostid": "10084", "host": "Zabbix server", "status": "0"},
    {"hostid": "10105", "host": "core-sw-01", "status": "0"},
]


def _error(code: int, message: str, data: str) -> Dict[str, Any]:
    return {"code": code, "message": message, "data": data}


class FakeZabbix:
    """Minimal stand-in for ``api_jsonrpc.php``.

    Every request is recorded in ``calls``. Bodies in ``scripted`` are
    returned verbatim for the matching method, bypassing the default
    behaviour.
    """

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.scripted: Dict[str, Any] = {}
        self.tokens = set()
        self.app = FastAPI()
        self.app.post("/api_jsonrpc.php")(self.handle)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [call["payload"] for call in self.calls]

    async def handle(self, request: Request) -> Response:
        payload = json.loads(await request.body())
        self.calls.append({
            "payload": payload,
            "content_type": request.headers.get("content-type"),
        })

        method = payload["method"]
        if method in self.scripted:
            body = self.scripted[method]
            if not isinstance(body, str):
                body = json.dumps(body)
            return Response(content=body, media_type="application/json")

        reply = {"jsonrpc": "2.0", "id": payload["id"]}
        reply.update(self.dispatch(method, payload.get("params"), payload.get("auth")))
        return Response(content=json.dumps(reply), media_type="application/json")

    def dispatch(self, method: str, params: Any, auth: Any) -> Dict[str, Any]:
        if method == "user.login":
            if params == {"user": USER, "password": PASSWORD}:
                self.tokens.add(TOKEN)
                return {"result": TOKEN}
            return {"error": _error(
                -32602, "Invalid params.",
                "Incorrect user name or password or account is temporarily blocked.",
            )}

        if method == "apiinfo.version":
            if auth is not None:
                return {"error": _error(
                    -32602, "Invalid params.",
                    'The "apiinfo.version" method must be called without the "auth" parameter.',
                )}
            return {"result": "6.0.21"}

        if auth not in self.tokens:
            return {"error": _error(-32602, "Invalid params.", "Not authorised.")}

        if method == "user.logout":
            self.tokens.discard(auth)
            return {"result": True}
        if method == "host.get":
            return {"result": HOSTS}
        if method == "history.get":
            return {"result": [{"itemid": "23296", "clock": "1351090996", "value": "0.085"}]}
        if method in ("item.update", "discoveryrule.update"):
            return {"result": {"itemids": [params["itemid"]]}}
        if method in ("item.get", "hostgroup.get", "trigger.get", "trend.get", "event.get"):
            return {"result": []}
        return {"error": _error(-32601, "Method not found.", "Incorrect API \"%s\"." % method.split(".")[0])}


@pytest.fixture
def fake_zabbix():
    """Fresh fake server per test."""
    return FakeZabbix()


@pytest.fixture
def api(fake_zabbix):
    """ZabbixAPI wired to the fake server through starlette's TestClient."""
    http_client = TestClient(fake_zabbix.app)
    session = ZabbixAPI(API_URL, USER, PASSWORD, http_client=http_client)
    yield session
    http_client.close()


@pytest.fixture
def logged_in_api(api):
    api.login()
    return api
