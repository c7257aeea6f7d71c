# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Hosted backend (PostgREST) call failed or is not configured."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SupabaseClient:
    """
    Thin async wrapper over the hosted backend's REST table and RPC endpoints.
    Storage, constraints and vector search all live on the backend; this only
    builds requests and raises BackendError on anything that is not a 2xx.
    """

    def __init__(self, http: httpx.AsyncClient, url: Optional[str], key: Optional[str]):
        self.http = http
        self.url = (url or "").rstrip("/")
        self.key = key

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.key)

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "apikey": self.key or "",
            "Authorization": f"Bearer {self.key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        if not self.is_configured:
            raise BackendError("Supabase URL/key not configured")

        try:
            response = await self.http.request(
                method,
                f"{self.url}/rest/v1/{path}",
                params=params,
                json=json,
                headers=self._headers(prefer),
            )
        except httpx.HTTPError as e:
            raise BackendError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            logger.warning(f"[Supabase] {method} {path} -> {response.status_code}")
            raise BackendError(
                f"{method} {path} -> {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"[Supabase] {method} {path} returned a non-JSON body")
            raise BackendError(
                f"{method} {path} -> invalid JSON body: {e}",
                status_code=response.status_code,
            ) from e

    # -------------------------
    # Tables
    # -------------------------

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, str]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        filters are PostgREST operator strings, e.g. {"user_id": "eq.<uuid>"}.
        order is "<column>.asc" or "<column>.desc".
        """
        params = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        return await self._request("GET", table, params=params) or []

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        rows = await self._request("POST", table, json=row, prefer="return=representation")
        return rows[0] if rows else {}

    async def update(self, table: str, row_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        rows = await self._request(
            "PATCH",
            table,
            params={"id": f"eq.{row_id}"},
            json=changes,
            prefer="return=representation",
        )
        return rows[0] if rows else None

    async def delete(self, table: str, row_id: str) -> bool:
        rows = await self._request(
            "DELETE",
            table,
            params={"id": f"eq.{row_id}"},
            prefer="return=representation",
        )
        return bool(rows)

    # -------------------------
    # RPC
    # -------------------------

    async def rpc(self, function: str, payload: Dict[str, Any]) -> Any:
        return await self._request("POST", f"rpc/{function}", json=payload)


def eq(value: Any) -> str:
    return f"eq.{value}"
