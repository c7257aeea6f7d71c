# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import Depends, HTTPException
import httpx

from conciencia.config import Settings, get_settings
from conciencia.services.supabase_client import SupabaseClient


# Dependency to get an outbound HTTP client
async def get_http_client(settings: Settings = Depends(get_settings)):
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        yield client


def get_backend(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> SupabaseClient:
    return SupabaseClient(http, settings.supabase_url, settings.supabase_key)


def require_backend(backend: SupabaseClient = Depends(get_backend)) -> SupabaseClient:
    if not backend.is_configured:
        raise HTTPException(status_code=503, detail="Supabase is not configured")
    return backend
