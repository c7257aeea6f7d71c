# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

# migrate_db.py
# Creates every table, RLS policy and RPC function on the hosted Postgres,
# then seeds the single profile row. Safe to run more than once.
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from conciencia.models import Profile
from conciencia.models.database import Base, get_engine, get_session_factory

EXTENSIONS = ["CREATE EXTENSION IF NOT EXISTS pgcrypto", "CREATE EXTENSION IF NOT EXISTS vector"]

RPC_FUNCTIONS = [
    """
    CREATE OR REPLACE FUNCTION buscar_registros_similares(
        query_embedding text,
        match_count int,
        user_uuid uuid
    )
    RETURNS TABLE (
        id uuid,
        mensaje_raw text,
        estado_emocional text[],
        voz_identificada text,
        pensamiento_alternativo text,
        contexto text,
        created_at timestamptz,
        similarity float
    )
    LANGUAGE sql STABLE AS $$
        SELECT r.id, r.mensaje_raw, r.estado_emocional, r.voz_identificada,
               r.pensamiento_alternativo, r.contexto, r.created_at,
               1 - (r.embedding <=> query_embedding::vector) AS similarity
        FROM registros_emocionales r
        WHERE r.user_id = user_uuid AND r.embedding IS NOT NULL
        ORDER BY r.embedding <=> query_embedding::vector
        LIMIT match_count
    $$
    """,
    """
    CREATE OR REPLACE FUNCTION obtener_logros_recientes(user_uuid uuid, dias int DEFAULT 7)
    RETURNS SETOF logros
    LANGUAGE sql STABLE AS $$
        SELECT * FROM logros
        WHERE user_id = user_uuid AND created_at >= now() - make_interval(days => dias)
        ORDER BY created_at DESC
        LIMIT 10
    $$
    """,
]

SEED_PROFILE = {
    "nombre": "Gonza",
    "estatura_cm": 164,
    "ambiciones": [
        "Lanzar agencia de automatización",
        "Construir físico con buena masa muscular",
        "Ser emocionalmente independiente y seguro",
    ],
    "estructura_interna_actual": {
        "adulto_responsable": {
            "fisico": "Postura recta, mirada segura, ejercicio diario",
            "autoestima": "Se siente a gusto con su propia compañía",
            "estado_emocional": "Felicidad con orgullo, calma con el pasado",
            "accion": "Hace lo que tiene que hacer tenga ganas o no",
            "introspeccion": "La usa como herramienta de mejora, nunca como castigo",
        },
        "voces": {
            "nino": "Voz de victimización, impotencia",
            "sargento": "Voz hipercrítica, minimiza logros",
            "adulto": "En construcción - validador, realista, compasivo sin lástima",
        },
    },
}


def rls_statements(table: str):
    policy = f"Allow all {table}"
    return [
        f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY",
        f"""DO $$ BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_policies WHERE policyname = '{policy}') THEN
                CREATE POLICY "{policy}" ON {table} FOR ALL USING (true) WITH CHECK (true);
            END IF;
        END $$""",
    ]


def create_schema(engine):
    with engine.begin() as conn:
        for statement in EXTENSIONS:
            conn.execute(text(statement))

    Base.metadata.create_all(bind=engine)

    with engine.begin() as conn:
        for table in Base.metadata.sorted_tables:
            for statement in rls_statements(table.name):
                conn.execute(text(statement))
        for statement in RPC_FUNCTIONS:
            conn.execute(text(statement))


def seed_profile(session_factory):
    with session_factory() as db:
        existing = db.execute(
            select(Profile).where(Profile.nombre == SEED_PROFILE["nombre"]).limit(1)
        ).scalar_one_or_none()
        if existing:
            print(f"✅ Profile already exists: {existing.id}")
            return existing.id

        profile = Profile(**SEED_PROFILE)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        print(f"✅ Profile created: {profile.id}")
        return profile.id


def check_tables(engine):
    with engine.connect() as conn:
        for table in Base.metadata.sorted_tables:
            try:
                count = conn.execute(text(f"SELECT count(*) FROM {table.name}")).scalar()
                print(f"✅ {table.name}: accessible ({count} rows)")
            except SQLAlchemyError as e:
                print(f"❌ {table.name}: {e}")
                conn.rollback()


if __name__ == "__main__":
    engine = get_engine()

    print("🚀 Creating tables, policies and RPC functions...")
    create_schema(engine)

    print("📦 Seeding profile...")
    seed_profile(get_session_factory())

    print("🔍 Testing table access...")
    check_tables(engine)

    print("✨ Migration complete.")
