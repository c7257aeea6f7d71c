# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Text, Date, DateTime, ForeignKey, CheckConstraint, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from conciencia.models.database import Base

GOAL_CATEGORIES = ("fisico", "emocional", "profesional", "relacional", "academico", "personal")
GOAL_STATES = ("activa", "pausada", "completada", "abandonada")


class Goal(Base):
    __tablename__ = "metas"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    user_id = Column(UUID(as_uuid=True), ForeignKey("perfil_usuario.id", ondelete="CASCADE"))
    created_at = Column(DateTime(timezone=True), server_default=text("now()"))

    titulo = Column(Text, nullable=False)
    descripcion = Column(Text)
    categoria = Column(Text)
    estado = Column(Text, server_default=text("'activa'"))
    fecha_limite = Column(Date)
    progreso_porcentaje = Column(Integer, server_default=text("0"))
    notas_progreso = Column(Text)

    user = relationship("Profile", back_populates="metas")
    habitos = relationship("Habit", back_populates="meta")

    __table_args__ = (
        CheckConstraint(
            "categoria IN (%s)" % ", ".join(f"'{c}'" for c in GOAL_CATEGORIES),
            name="ck_meta_categoria",
        ),
        CheckConstraint(
            "estado IN (%s)" % ", ".join(f"'{s}'" for s in GOAL_STATES),
            name="ck_meta_estado",
        ),
        CheckConstraint("progreso_porcentaje BETWEEN 0 AND 100", name="ck_meta_progreso"),
    )

    def __repr__(self):
        return f"<Goal id={self.id} estado={self.estado} progreso={self.progreso_porcentaje}%>"
