import json

from conciencia.config import Settings, get_settings
from conciencia.main import app

USER_ID = "6f1c2d4e-0000-4000-8000-000000000001"


def test_profile_returns_first_row(client, upstream):
    upstream.tables[("GET", "perfil_usuario")] = (200, [{"id": USER_ID, "nombre": "Gonza"}])
    response = client.get("/api/perfil")
    assert response.status_code == 200
    assert response.json()["nombre"] == "Gonza"
    assert upstream.requests[-1].url.params["limit"] == "1"


def test_profile_missing_is_404(client):
    assert client.get("/api/perfil").status_code == 404


def test_profile_update_stamps_timestamp(client, upstream):
    response = client.patch(f"/api/perfil/{USER_ID}", json={"ambiciones": ["Lanzar la agencia"]})
    assert response.status_code == 200
    sent = json.loads(upstream.requests[-1].content)
    assert sent["ambiciones"] == ["Lanzar la agencia"]
    assert "datos_actualizados_at" in sent
    assert "nombre" not in sent


def test_create_record_without_achievement(client, upstream):
    response = client.post("/api/registros", json={
        "user_id": USER_ID,
        "mensaje_raw": "hoy estuve tranquilo",
        "estado_emocional": ["calma"],
        "intensidad_emocional": 20,
    })
    assert response.status_code == 201
    assert response.json()["logro"] is None
    assert upstream.calls_to(path="/rest/v1/logros") == []


def test_create_record_with_achievement_saves_both(client, upstream):
    response = client.post("/api/registros", json={
        "user_id": USER_ID,
        "mensaje_raw": "hoy salí a caminar aunque no tenía ganas",
        "contexto": "actividad física",
        "logro_detectado": "salió a caminar",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["registro"]["mensaje_raw"].startswith("hoy salí")

    logro = json.loads(upstream.calls_to(path="/rest/v1/logros", method="POST")[0].content)
    assert logro == {
        "user_id": USER_ID,
        "descripcion": "salió a caminar",
        "categoria": "fisico",
        "fuente": "implicito",
        "mensaje_origen": "hoy salí a caminar aunque no tenía ganas",
    }


def test_failed_achievement_keeps_record(client, upstream):
    upstream.tables[("POST", "logros")] = (500, {"message": "boom"})
    response = client.post("/api/registros", json={
        "user_id": USER_ID,
        "mensaje_raw": "medité 10 minutos",
        "logro_detectado": "meditó",
    })
    assert response.status_code == 201
    assert response.json()["logro"] is None
    assert response.json()["registro"]["id"] == "registros_emocionales-1"


def test_record_validation(client):
    response = client.post("/api/registros", json={
        "user_id": USER_ID,
        "mensaje_raw": "x",
        "voz_identificada": "abuela",
    })
    assert response.status_code == 422


def test_records_summary(client, upstream):
    upstream.tables[("GET", "registros_emocionales")] = (200, [
        {"voz_identificada": "nino", "estado_emocional": ["culpa", "tristeza"], "intensidad_emocional": 60, "fecha": "2025-03-05"},
        {"voz_identificada": "nino", "estado_emocional": ["culpa"], "intensidad_emocional": 40, "fecha": "2025-03-05"},
        {"voz_identificada": None, "estado_emocional": [], "intensidad_emocional": None, "created_at": "2025-03-04T10:00:00Z"},
    ])
    summary = client.get("/api/registros/resumen", params={"user_id": USER_ID}).json()
    assert summary["total_registros"] == 3
    assert summary["voces"] == {"nino": 2, "ninguna_dominante": 1}
    assert summary["emociones"][0] == {"emocion": "culpa", "cantidad": 2}
    assert summary["intensidad_por_dia"] == [{"fecha": "2025-03-05", "intensidad": 50}]


def test_delete_record(client, upstream):
    response = client.delete("/api/registros/abc")
    assert response.status_code == 200
    assert upstream.requests[-1].url.params["id"] == "eq.abc"


def test_delete_missing_record_is_404(client, upstream):
    upstream.tables[("DELETE", "registros_emocionales")] = (200, [])
    assert client.delete("/api/registros/nope").status_code == 404


def test_goals_crud(client, upstream):
    created = client.post("/api/metas", json={"user_id": USER_ID, "titulo": "Correr 5k", "categoria": "fisico"})
    assert created.status_code == 201
    assert created.json()["estado"] == "activa"

    updated = client.patch("/api/metas/m1", json={"progreso_porcentaje": 40})
    assert updated.json() == {"id": "m1", "progreso_porcentaje": 40}

    assert client.patch("/api/metas/m1", json={}).status_code == 400
    assert client.patch("/api/metas/m1", json={"progreso_porcentaje": 140}).status_code == 422
    assert client.delete("/api/metas/m1").status_code == 200


def test_habits_list_embeds_goal_title(client, upstream):
    client.get("/api/habitos", params={"user_id": USER_ID, "solo_activos": True})
    params = upstream.requests[-1].url.params
    assert params["select"] == "*,metas(titulo)"
    assert params["activo"] == "eq.true"


def test_completed_checkin_advances_streak(client, upstream):
    upstream.tables[("GET", "habitos")] = (200, [{"id": "h1", "racha_actual": 4, "racha_maxima": 4}])
    response = client.post("/api/habitos/h1/checkins", json={"user_id": USER_ID, "completado": True})
    assert response.status_code == 201
    assert response.json()["habito"]["racha_actual"] == 5

    checkin = json.loads(upstream.calls_to(path="/rest/v1/checkins_habitos", method="POST")[0].content)
    assert checkin["habito_id"] == "h1"
    streak = json.loads(upstream.calls_to(path="/rest/v1/habitos", method="PATCH")[0].content)
    assert streak == {"racha_actual": 5, "racha_maxima": 5}


def test_skipped_checkin_keeps_streak(client, upstream):
    upstream.tables[("GET", "habitos")] = (200, [{"id": "h1", "racha_actual": 2, "racha_maxima": 7}])
    response = client.post("/api/habitos/h1/checkins", json={"user_id": USER_ID, "completado": False})
    assert response.status_code == 201
    assert upstream.calls_to(path="/rest/v1/habitos", method="PATCH") == []


def test_checkin_for_unknown_habit_is_404(client):
    assert client.post("/api/habitos/h9/checkins", json={"user_id": USER_ID}).status_code == 404


def test_manual_achievement_is_explicit(client, upstream):
    client.post("/api/logros", json={"user_id": USER_ID, "descripcion": "puse un límite", "categoria": "social"})
    sent = json.loads(upstream.requests[-1].content)
    assert sent["fuente"] == "explicito"


def test_conversation_messages_in_order(client, upstream):
    client.get("/api/conversaciones/c1/mensajes")
    params = upstream.requests[-1].url.params
    assert params["conversacion_id"] == "eq.c1"
    assert params["order"] == "created_at.asc"


def test_backend_error_maps_to_502(client, upstream):
    upstream.tables[("GET", "metas")] = (500, {"message": "boom"})
    response = client.get("/api/metas", params={"user_id": USER_ID})
    assert response.status_code == 502
    assert response.json()["upstream_status"] == 500


def test_unconfigured_backend_is_503(client):
    app.dependency_overrides[get_settings] = lambda: Settings(anthropic_api_key="k")
    assert client.get("/api/metas", params={"user_id": USER_ID}).status_code == 503


def test_healthz(client, upstream):
    body = client.get("/healthz").json()
    assert body["status"] == "ok"
    assert body["details"]["supabase_connection"] is True


def test_healthz_partial_without_keys(client):
    app.dependency_overrides[get_settings] = lambda: Settings()
    body = client.get("/healthz").json()
    assert body["status"] == "partial"
    assert body["details"]["supabase_config"] is False


def test_non_json_backend_body_maps_to_502(client, upstream):
    upstream.tables[("GET", "metas")] = (200, "<html>gateway</html>")
    response = client.get("/api/metas", params={"user_id": USER_ID})
    assert response.status_code == 502
    assert response.json()["upstream_status"] == 200
