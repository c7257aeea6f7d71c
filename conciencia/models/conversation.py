# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import Column, Text, DateTime, ForeignKey, Index, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from conciencia.models.database import Base


class Conversation(Base):
    __tablename__ = "conversaciones"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    user_id = Column(UUID(as_uuid=True), ForeignKey("perfil_usuario.id", ondelete="CASCADE"))
    modo = Column(Text, server_default=text("'escucha'"))
    titulo = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=text("now()"))
    updated_at = Column(DateTime(timezone=True), server_default=text("now()"))

    mensajes = relationship("ChatMessage", back_populates="conversacion", passive_deletes=True)


class ChatMessage(Base):
    __tablename__ = "mensajes_chat"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    conversacion_id = Column(UUID(as_uuid=True), ForeignKey("conversaciones.id", ondelete="CASCADE"))
    role = Column(Text, nullable=False)  # 'user' or 'assistant'
    content = Column(Text, nullable=False)
    analisis = Column(JSONB)
    created_at = Column(DateTime(timezone=True), server_default=text("now()"))

    conversacion = relationship("Conversation", back_populates="mensajes")

    __table_args__ = (
        Index("ix_mensajes_conversacion_created", "conversacion_id", "created_at"),
    )
