from conciencia.utils.prompt_templates import (
    achievements_context,
    build_system_prompt,
    format_record_date,
    habits_context,
    memory_context,
    mode_prompt,
    resolve_mode,
)

SIMILAR = [{
    "created_at": "2025-03-05T22:10:00Z",
    "mensaje_raw": "no fui al gimnasio",
    "estado_emocional": ["culpa", "frustración"],
    "voz_identificada": "sargento",
    "pensamiento_alternativo": "un día no define nada",
    "contexto": "gimnasio",
    "similarity": 0.873,
}]

RECENT = [{
    "created_at": "2025-03-04T10:00:00+00:00",
    "mensaje_raw": "hoy medité",
    "estado_emocional": [],
    "voz_identificada": None,
}]


def test_unknown_mode_falls_back_to_listening():
    assert resolve_mode(None) == "escucha"
    assert resolve_mode("terapia_de_choque") == "escucha"
    assert mode_prompt("cualquiera") == mode_prompt("escucha")


def test_each_mode_has_its_own_block():
    blocks = {mode_prompt(m) for m in ("escucha", "reflexion", "accion")}
    assert len(blocks) == 3
    assert "TOMAR ACCIÓN" in mode_prompt("accion")
    assert "CONOCERTE MÁS" in mode_prompt("reflexion")


def test_format_record_date():
    assert format_record_date("2025-03-05T22:10:00Z") == "5/3/2025"
    assert format_record_date(None) == "?"
    assert format_record_date("ayer") == "ayer"


def test_similar_records_take_priority_over_recent():
    context = memory_context(SIMILAR, RECENT)
    assert "RECUERDOS RELEVANTES" in context
    assert '"no fui al gimnasio"' in context
    assert "Emociones: culpa, frustración" in context
    assert 'P.Alt: "un día no define nada"' in context
    assert "(87% similar)" in context
    assert "hoy medité" not in context


def test_recent_records_used_when_no_similar():
    context = memory_context([], RECENT)
    assert context.startswith("\n\nCONTEXTO RECIENTE:")
    assert '- 4/3/2025: "hoy medité" → N/A, Voz: N/A' in context


def test_no_memory_means_empty_block():
    assert memory_context([], []) == ""


def test_habits_context_lists_streak_and_goal():
    context = habits_context([
        {"nombre": "Gimnasio", "frecuencia": "diario", "racha_actual": 4, "metas": {"titulo": "Ganar masa muscular"}},
        {"nombre": "Meditar", "frecuencia": "diario", "racha_actual": 0, "metas": None},
    ])
    assert '- "Gimnasio" (frecuencia: diario, racha: 4 días, meta: "Ganar masa muscular")' in context
    assert '- "Meditar" (frecuencia: diario, racha: 0 días)' in context
    assert "modo de acción" in context


def test_habits_context_without_habits():
    assert "NO tiene hábitos registrados" in habits_context([])
    assert "NO tiene hábitos registrados" in habits_context(None)


def test_achievements_context():
    assert achievements_context([]) == ""
    context = achievements_context([
        {"created_at": "2025-03-05T08:00:00Z", "descripcion": "se levantó temprano", "categoria": "autocuidado"},
    ])
    assert "LOGROS RECIENTES" in context
    assert "se levantó temprano (autocuidado)" in context


def test_system_prompt_order():
    prompt = build_system_prompt("accion", SIMILAR, [], [], [])
    persona = prompt.index('Sos "Conciencia"')
    mode = prompt.index("TOMAR ACCIÓN")
    memory = prompt.index("RECUERDOS RELEVANTES")
    habits = prompt.index("NO tiene hábitos")
    response_format = prompt.index("FORMATO DE RESPUESTA")
    assert persona < mode < memory < habits < response_format
