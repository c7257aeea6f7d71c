# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal

Voice = Literal["nino", "sargento", "adulto", "mixta", "ninguna_dominante"]
RecordType = Literal["entrada_libre", "checkin_habito", "reflexion_nocturna", "respuesta_notificacion"]
GoalCategory = Literal["fisico", "emocional", "profesional", "relacional", "academico", "personal"]
GoalState = Literal["activa", "pausada", "completada", "abandonada"]
AchievementCategory = Literal["autocuidado", "productividad", "social", "fisico", "emocional", "general"]
Mode = Literal["escucha", "reflexion", "accion"]


class ProfileUpdate(BaseModel):
    nombre: Optional[str] = None
    estatura_cm: Optional[int] = None
    peso_kg: Optional[float] = None
    foto_url: Optional[str] = None
    ambiciones: Optional[List[str]] = None
    estructura_interna_actual: Optional[Dict[str, Any]] = None


class RecordCreate(BaseModel):
    user_id: str
    mensaje_raw: str
    estado_emocional: List[str] = []
    intensidad_emocional: Optional[int] = Field(None, ge=0, le=100)
    voz_identificada: Voice = "ninguna_dominante"
    pensamiento_automatico: Optional[str] = None
    distorsion_cognitiva: List[str] = []
    contexto: Optional[str] = None
    pensamiento_alternativo: Optional[str] = None
    respuesta_ia: Optional[str] = None
    tipo_registro: RecordType = "entrada_libre"
    embedding: Optional[List[float]] = None
    estado_animo: Optional[int] = Field(None, ge=1, le=10)
    sintomas_fisicos: List[str] = []
    logro_detectado: Optional[str] = None


class GoalCreate(BaseModel):
    user_id: str
    titulo: str
    descripcion: Optional[str] = None
    categoria: Optional[GoalCategory] = None
    estado: GoalState = "activa"
    fecha_limite: Optional[str] = None
    progreso_porcentaje: int = Field(0, ge=0, le=100)
    notas_progreso: Optional[str] = None


class GoalUpdate(BaseModel):
    titulo: Optional[str] = None
    descripcion: Optional[str] = None
    categoria: Optional[GoalCategory] = None
    estado: Optional[GoalState] = None
    fecha_limite: Optional[str] = None
    progreso_porcentaje: Optional[int] = Field(None, ge=0, le=100)
    notas_progreso: Optional[str] = None


class HabitCreate(BaseModel):
    user_id: str
    nombre: str
    meta_id: Optional[str] = None
    frecuencia: str = "diario"
    hora_recordatorio: Optional[str] = None
    mensaje_recordatorio: Optional[str] = None
    mensaje_nocturno: Optional[str] = None
    hora_mensaje_nocturno: Optional[str] = None
    activo: bool = True


class HabitUpdate(BaseModel):
    nombre: Optional[str] = None
    meta_id: Optional[str] = None
    frecuencia: Optional[str] = None
    hora_recordatorio: Optional[str] = None
    mensaje_recordatorio: Optional[str] = None
    mensaje_nocturno: Optional[str] = None
    hora_mensaje_nocturno: Optional[str] = None
    activo: Optional[bool] = None


class CheckinCreate(BaseModel):
    user_id: str
    fecha: Optional[str] = None
    hora_programada: Optional[str] = None
    hora_real: Optional[str] = None
    completado: bool = False
    sentimiento_antes: Optional[str] = None
    sentimiento_durante: Optional[str] = None
    sentimiento_despues: Optional[str] = None
    voz_activa_durante: Optional[str] = None
    que_hizo_despues: Optional[str] = None
    notas: Optional[str] = None


class AchievementCreate(BaseModel):
    user_id: str
    descripcion: str
    categoria: AchievementCategory = "general"
    mensaje_origen: Optional[str] = None


class ConversationCreate(BaseModel):
    user_id: str
    modo: Mode = "escucha"
    titulo: Optional[str] = None
