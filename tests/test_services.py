import asyncio

import httpx
import pytest

from conciencia.services.achievement_service import detect_achievement_category
from conciencia.services.embedding_service import generate_embedding
from conciencia.services.habit_service import next_streak
from conciencia.services.memory_service import load_memory_context
from conciencia.services.supabase_client import BackendError, SupabaseClient
from tests.conftest import SUPABASE_URL, FakeUpstream


def run_with_client(upstream, coro_factory):
    async def runner():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as http:
            return await coro_factory(http)
    return asyncio.run(runner())


@pytest.mark.parametrize("contexto, logro, expected", [
    ("", "meditó 10 minutos", "general"),
    ("sesión de meditación", "medita todas las mañanas", "autocuidado"),
    ("", "se levantó temprano", "autocuidado"),
    ("la pollería", "abrió a horario", "productividad"),
    ("", "terminó la tarea de la facu", "productividad"),
    ("pareja", "puso un límite", "social"),
    ("", "hizo ejercicio", "fisico"),
    ("", "controló el impulso de comprar", "emocional"),
    ("", "algo lindo", "general"),
    (None, None, "general"),
])
def test_achievement_category(contexto, logro, expected):
    assert detect_achievement_category({"contexto": contexto, "logro_detectado": logro}) == expected


def test_category_first_match_wins():
    # "levant" (autocuidado) is checked before "ejerci" (fisico)
    assert detect_achievement_category({"logro_detectado": "se levantó e hizo ejercicio"}) == "autocuidado"


def test_next_streak():
    assert next_streak({"racha_actual": 2, "racha_maxima": 7}) == {"racha_actual": 3, "racha_maxima": 7}
    assert next_streak({"racha_actual": 7, "racha_maxima": 7}) == {"racha_actual": 8, "racha_maxima": 8}
    assert next_streak({}) == {"racha_actual": 1, "racha_maxima": 1}


def test_unconfigured_client_raises():
    upstream = FakeUpstream()

    async def call(http):
        return await SupabaseClient(http, None, None).select("metas")

    with pytest.raises(BackendError):
        run_with_client(upstream, call)
    assert upstream.requests == []


def test_client_wraps_transport_errors():
    upstream = FakeUpstream()
    upstream.tables[("GET", "metas")] = httpx.ConnectTimeout("slow")

    async def call(http):
        return await SupabaseClient(http, SUPABASE_URL, "key").select("metas")

    with pytest.raises(BackendError) as excinfo:
        run_with_client(upstream, call)
    assert excinfo.value.status_code is None


def test_embedding_without_key_makes_no_call():
    upstream = FakeUpstream()
    assert run_with_client(upstream, lambda http: generate_embedding(http, "hola", None)) is None
    assert upstream.requests == []


def test_embedding_request_shape():
    upstream = FakeUpstream()
    values = run_with_client(upstream, lambda http: generate_embedding(http, "hola", "gkey"))
    assert values == [0.1, 0.2, 0.3]
    request = upstream.requests[0]
    assert request.url.params["key"] == "gkey"
    assert request.url.path.endswith("text-embedding-004:embedContent")


def test_memory_context_prefers_similar_records():
    upstream = FakeUpstream()
    upstream.rpc["buscar_registros_similares"] = (200, [{"mensaje_raw": "x", "similarity": 0.8}])

    async def call(http):
        return await load_memory_context(SupabaseClient(http, SUPABASE_URL, "key"), [0.5], "u1")

    similar, recent = run_with_client(upstream, call)
    assert similar == [{"mensaje_raw": "x", "similarity": 0.8}]
    assert recent == []
    assert upstream.calls_to(path="/rest/v1/registros_emocionales") == []


def test_memory_context_without_embedding_uses_recent():
    upstream = FakeUpstream()
    upstream.tables[("GET", "registros_emocionales")] = (200, [{"mensaje_raw": "y"}])

    async def call(http):
        return await load_memory_context(SupabaseClient(http, SUPABASE_URL, "key"), None, "u1")

    similar, recent = run_with_client(upstream, call)
    assert similar == []
    assert recent == [{"mensaje_raw": "y"}]


def test_embedding_non_object_body_is_none():
    upstream = FakeUpstream()
    upstream.embedding = (200, ["oops"])
    assert run_with_client(upstream, lambda http: generate_embedding(http, "hola", "gkey")) is None


def test_client_rejects_non_json_success_body():
    upstream = FakeUpstream()
    upstream.rpc["buscar_registros_similares"] = (200, "<html>gateway</html>")

    async def call(http):
        return await SupabaseClient(http, SUPABASE_URL, "key").rpc("buscar_registros_similares", {})

    with pytest.raises(BackendError) as excinfo:
        run_with_client(upstream, call)
    assert excinfo.value.status_code == 200
