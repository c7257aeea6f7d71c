# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Text, DateTime, ForeignKey, CheckConstraint, text
from sqlalchemy.dialects.postgresql import UUID
from conciencia.models.database import Base

ACHIEVEMENT_CATEGORIES = ("autocuidado", "productividad", "social", "fisico", "emocional", "general")
ACHIEVEMENT_SOURCES = ("implicito", "explicito")


class Achievement(Base):
    """A 'logro': positive behavioural event detected by the model or logged by hand."""

    __tablename__ = "logros"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    user_id = Column(UUID(as_uuid=True), ForeignKey("perfil_usuario.id", ondelete="CASCADE"))

    descripcion = Column(Text, nullable=False)
    categoria = Column(Text, server_default=text("'general'"))
    fuente = Column(Text, server_default=text("'implicito'"))
    mensaje_origen = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=text("now()"), index=True)

    __table_args__ = (
        CheckConstraint(
            "categoria IN (%s)" % ", ".join(f"'{c}'" for c in ACHIEVEMENT_CATEGORIES),
            name="ck_logro_categoria",
        ),
        CheckConstraint(
            "fuente IN (%s)" % ", ".join(f"'{s}'" for s in ACHIEVEMENT_SOURCES),
            name="ck_logro_fuente",
        ),
    )
