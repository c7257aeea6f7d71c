# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel
from typing import Optional, List, Dict, Any


class HistoryMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class ChatRequest(BaseModel):
    # message is validated by hand so a missing one answers 400, not 422
    message: Optional[str] = None
    history: Optional[List[HistoryMessage]] = None
    activeHabits: Optional[List[Dict[str, Any]]] = None
    userId: Optional[str] = None
    modo: Optional[str] = None
    conversacionId: Optional[str] = None
