# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from dataclasses import dataclass
from typing import Optional

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()


ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
EMBEDDING_MODEL = "text-embedding-004"
EMBEDDING_API_URL = (
    f"https://generativelanguage.googleapis.com/v1beta/models/{EMBEDDING_MODEL}:embedContent"
)


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass
class Settings:
    anthropic_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    database_url: Optional[str] = None
    claude_model: str = "claude-3-5-haiku-20241022"
    max_tokens: int = 4096
    chat_rate_limit: str = "30/minute"
    http_timeout: float = 60.0
    log_level: str = "INFO"

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def load_settings() -> Settings:
    """
    Reads settings from the process environment.
    The VITE_* names are accepted so the same .env works for the frontend build.
    """
    return Settings(
        anthropic_api_key=_first_env("ANTHROPIC_API_KEY"),
        gemini_api_key=_first_env("GEMINI_API_KEY", "VITE_GEMINI_API_KEY"),
        supabase_url=_first_env("SUPABASE_URL", "VITE_SUPABASE_URL"),
        supabase_key=_first_env("SUPABASE_KEY", "VITE_SUPABASE_ANON_KEY"),
        database_url=_first_env("DATABASE_URL"),
        claude_model=os.getenv("CLAUDE_MODEL", "claude-3-5-haiku-20241022"),
        chat_rate_limit=os.getenv("CHAT_RATE_LIMIT", "30/minute"),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "60")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def get_settings() -> Settings:
    # FastAPI dependency, read per request
    return load_settings()
