# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Text, Boolean, DateTime, Time, ForeignKey, CheckConstraint, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from conciencia.models.database import Base

NOTIFICATION_TYPES = ("recordatorio_habito", "checkin_emocional", "cierre_dia", "personalizado")
NOTIFICATION_TONES = ("invitacion", "motivacional", "neutro")


class NotificationConfig(Base):
    __tablename__ = "notificaciones_config"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    user_id = Column(UUID(as_uuid=True), ForeignKey("perfil_usuario.id", ondelete="CASCADE"))

    tipo = Column(Text)
    hora = Column(Time)
    mensaje = Column(Text)
    dias_semana = Column(ARRAY(Text), server_default=text("'{}'"))
    activa = Column(Boolean, server_default=text("true"))
    tono = Column(Text, server_default=text("'invitacion'"))
    created_at = Column(DateTime(timezone=True), server_default=text("now()"))

    __table_args__ = (
        CheckConstraint(
            "tipo IN (%s)" % ", ".join(f"'{t}'" for t in NOTIFICATION_TYPES),
            name="ck_notificacion_tipo",
        ),
        CheckConstraint(
            "tono IN (%s)" % ", ".join(f"'{t}'" for t in NOTIFICATION_TONES),
            name="ck_notificacion_tono",
        ),
    )
