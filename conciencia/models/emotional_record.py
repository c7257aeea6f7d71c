# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Text, Date, DateTime, ForeignKey, CheckConstraint, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector
from conciencia.models.database import Base

EMBEDDING_DIMENSIONS = 768

VOICES = ("nino", "sargento", "adulto", "mixta", "ninguna_dominante")
RECORD_TYPES = ("entrada_libre", "checkin_habito", "reflexion_nocturna", "respuesta_notificacion")


class EmotionalRecord(Base):
    __tablename__ = "registros_emocionales"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    user_id = Column(UUID(as_uuid=True), ForeignKey("perfil_usuario.id", ondelete="CASCADE"))
    created_at = Column(DateTime(timezone=True), server_default=text("now()"), index=True)
    fecha = Column(Date, server_default=text("CURRENT_DATE"))

    mensaje_raw = Column(Text, nullable=False)
    estado_emocional = Column(ARRAY(Text), server_default=text("'{}'"))
    intensidad_emocional = Column(Integer)
    voz_identificada = Column(Text)
    pensamiento_automatico = Column(Text)
    distorsion_cognitiva = Column(ARRAY(Text), server_default=text("'{}'"))
    contexto = Column(Text)
    pensamiento_alternativo = Column(Text)
    intensidad_post_reestructuracion = Column(Integer)
    actividades_realizadas = Column(ARRAY(Text), server_default=text("'{}'"))
    avances_del_dia = Column(Text)
    tipo_registro = Column(Text, server_default=text("'entrada_libre'"))
    respuesta_ia = Column(Text)

    estado_animo = Column(Integer)
    sintomas_fisicos = Column(ARRAY(Text), server_default=text("'{}'"))
    logro_detectado = Column(Text)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS))

    user = relationship("Profile", back_populates="registros")

    __table_args__ = (
        CheckConstraint("intensidad_emocional BETWEEN 0 AND 100", name="ck_registro_intensidad"),
        CheckConstraint(
            "intensidad_post_reestructuracion BETWEEN 0 AND 100",
            name="ck_registro_intensidad_post",
        ),
        CheckConstraint("estado_animo BETWEEN 1 AND 10", name="ck_registro_estado_animo"),
        CheckConstraint(
            "voz_identificada IN (%s)" % ", ".join(f"'{v}'" for v in VOICES),
            name="ck_registro_voz",
        ),
        CheckConstraint(
            "tipo_registro IN (%s)" % ", ".join(f"'{t}'" for t in RECORD_TYPES),
            name="ck_registro_tipo",
        ),
    )
