# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Numeric, Text, DateTime, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from sqlalchemy.orm import relationship
from conciencia.models.database import Base


class Profile(Base):
    __tablename__ = "perfil_usuario"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    nombre = Column(Text, nullable=False)
    estatura_cm = Column(Integer)
    peso_kg = Column(Numeric)
    foto_url = Column(Text)
    ambiciones = Column(ARRAY(Text), server_default=text("'{}'"))
    estructura_interna_actual = Column(JSONB, server_default=text("'{}'::jsonb"))
    datos_actualizados_at = Column(DateTime(timezone=True), server_default=text("now()"))
    created_at = Column(DateTime(timezone=True), server_default=text("now()"))

    registros = relationship("EmotionalRecord", back_populates="user", passive_deletes=True)
    metas = relationship("Goal", back_populates="user", passive_deletes=True)
    habitos = relationship("Habit", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<Profile id={self.id} nombre={self.nombre}>"
