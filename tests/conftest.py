"""Shared pytest fixtures: a fake upstream for Claude, Gemini and Supabase."""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from conciencia.config import Settings, get_settings
from conciencia.dependencies import get_http_client
from conciencia.main import app
from conciencia.utils.rate_limit_utils import limiter

SUPABASE_URL = "https://db.test"

VALID_REPLY = {
    "respuesta_conversacional": "Te escucho 🫶",
    "analisis": {
        "estado_emocional": ["cansancio"],
        "intensidad_emocional": 40,
        "voz_identificada": "nino",
        "pensamiento_automatico": "merezco descansar",
        "distorsion_cognitiva": [],
        "contexto": "fiaca para hacer ejercicio",
        "pensamiento_alternativo": None,
        "modo_respuesta": "escucha",
        "tarea_vinculada": None,
        "tecnica_aplicada": "ninguna",
        "estado_animo": None,
        "sintomas_fisicos": [],
        "logro_detectado": None,
        "recomendacion": None,
    },
}


def claude_body(text):
    return {"content": [{"type": "text", "text": text}], "stop_reason": "end_turn"}


class FakeUpstream:
    """
    Routes requests by host. Responses are (status, json) tuples so each call
    gets a fresh httpx.Response; a str body is sent as raw text.
    Set a value to an Exception to raise it.
    """

    def __init__(self):
        self.requests = []
        self.embedding = (200, {"embedding": {"values": [0.1, 0.2, 0.3]}})
        self.claude = (200, claude_body(json.dumps(VALID_REPLY)))
        self.rpc = {
            "buscar_registros_similares": (200, []),
            "obtener_logros_recientes": (200, []),
        }
        self.tables = {}

    # -- inspection helpers --

    def calls_to(self, host=None, path=None, method=None):
        return [
            r for r in self.requests
            if (host is None or r.url.host == host)
            and (path is None or r.url.path == path)
            and (method is None or r.method == method)
        ]

    def claude_calls(self):
        return self.calls_to(host="api.anthropic.com")

    def last_claude_payload(self):
        return json.loads(self.claude_calls()[-1].content)

    # -- transport --

    def _reply(self, request, spec):
        if isinstance(spec, Exception):
            raise spec
        status, body = spec
        if isinstance(body, str):
            return httpx.Response(status, text=body, request=request)
        return httpx.Response(status, json=body, request=request)

    def handler(self, request: httpx.Request):
        self.requests.append(request)

        if request.url.host == "generativelanguage.googleapis.com":
            return self._reply(request, self.embedding)

        if request.url.host == "api.anthropic.com":
            return self._reply(request, self.claude)

        path = request.url.path
        if path.startswith("/rest/v1/rpc/"):
            name = path.rsplit("/", 1)[-1]
            return self._reply(request, self.rpc.get(name, (404, {"message": "no such function"})))

        table = path.rsplit("/", 1)[-1]
        spec = self.tables.get((request.method, table))
        if spec is not None:
            return self._reply(request, spec)
        return self._default_table_reply(request, table)

    def _default_table_reply(self, request, table):
        if request.method == "GET":
            return httpx.Response(200, json=[], request=request)
        row_id = request.url.params.get("id", "eq.generated")[3:]
        if request.method == "POST":
            row = json.loads(request.content)
            return httpx.Response(201, json=[{"id": f"{table}-1", **row}], request=request)
        if request.method == "PATCH":
            row = json.loads(request.content)
            return httpx.Response(200, json=[{"id": row_id, **row}], request=request)
        if request.method == "DELETE":
            return httpx.Response(200, json=[{"id": row_id}], request=request)
        return httpx.Response(405, request=request)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return Settings(
        anthropic_api_key="test-claude-key",
        gemini_api_key="test-gemini-key",
        supabase_url=SUPABASE_URL,
        supabase_key="test-anon-key",
    )


@pytest.fixture
def client(upstream, settings):
    async def fake_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as http:
            yield http

    limiter.enabled = False
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = fake_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.reset()
    limiter.enabled = True
