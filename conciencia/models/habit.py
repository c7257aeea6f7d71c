# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Text, Boolean, Date, DateTime, Time, ForeignKey, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from conciencia.models.database import Base


class Habit(Base):
    __tablename__ = "habitos"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    user_id = Column(UUID(as_uuid=True), ForeignKey("perfil_usuario.id", ondelete="CASCADE"))
    meta_id = Column(UUID(as_uuid=True), ForeignKey("metas.id", ondelete="SET NULL"))

    nombre = Column(Text, nullable=False)
    frecuencia = Column(Text, server_default=text("'diario'"))  # 'diario', 'semanal', ...
    hora_recordatorio = Column(Time)
    mensaje_recordatorio = Column(Text)
    mensaje_nocturno = Column(Text)
    hora_mensaje_nocturno = Column(Time)
    activo = Column(Boolean, server_default=text("true"))
    racha_actual = Column(Integer, server_default=text("0"))
    racha_maxima = Column(Integer, server_default=text("0"))
    created_at = Column(DateTime(timezone=True), server_default=text("now()"))

    user = relationship("Profile", back_populates="habitos")
    meta = relationship("Goal", back_populates="habitos")
    checkins = relationship("HabitCheckin", back_populates="habito", passive_deletes=True)


class HabitCheckin(Base):
    __tablename__ = "checkins_habitos"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    user_id = Column(UUID(as_uuid=True), ForeignKey("perfil_usuario.id", ondelete="CASCADE"))
    habito_id = Column(UUID(as_uuid=True), ForeignKey("habitos.id", ondelete="CASCADE"))

    fecha = Column(Date, server_default=text("CURRENT_DATE"))
    hora_programada = Column(Time)
    hora_real = Column(Time)
    completado = Column(Boolean, server_default=text("false"))
    sentimiento_antes = Column(Text)
    sentimiento_durante = Column(Text)
    sentimiento_despues = Column(Text)
    voz_activa_durante = Column(Text)
    que_hizo_despues = Column(Text)
    notas = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=text("now()"))

    habito = relationship("Habit", back_populates="checkins")
