# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from slowapi import Limiter
from slowapi.util import get_remote_address

from conciencia.config import load_settings

limiter = Limiter(key_func=get_remote_address)


def chat_rate_limit() -> str:
    return load_settings().chat_rate_limit
