"""Turso HTTP client: executes one SQL statement per request over the libSQL v2 pipeline API.

Used on the serverless host where the native driver's connection mechanism is unreliable.
"""
import base64
import logging
from typing import Any

import httpx

from hello_ai.core.constants import TURSO_PIPELINE_PATH, TURSO_TIMEOUT_SECONDS
from hello_ai.core.errors import BackendUnavailableError, SqlExecutionError, redact
from hello_ai.db.executor import SqlParams, SqlResult

logger = logging.getLogger(__name__)


def normalize_base_url(url: str) -> str:
    """libsql://host -> https://host; https URLs kept; anything else (file:, sqlite:) -> ''."""
    url = (url or "").strip().strip("\"'")
    if url.startswith("https://"):
        return url.rstrip("/")
    if url.startswith("libsql://"):
        return "https://" + url[len("libsql://"):].rstrip("/")
    return ""


def encode_arg(value: Any) -> dict[str, Any]:
    """Encode a Python value as a pipeline API typed value."""
    if value is None:
        return {"type": "null"}
    if isinstance(value, bool):
        return {"type": "integer", "value": "1" if value else "0"}
    if isinstance(value, int):
        return {"type": "integer", "value": str(value)}
    if isinstance(value, float):
        return {"type": "float", "value": value}
    if isinstance(value, (bytes, bytearray)):
        return {"type": "blob", "base64": base64.b64encode(bytes(value)).decode("ascii")}
    return {"type": "text", "value": str(value)}


def decode_value(cell: Any) -> Any:
    """Decode a typed value from a pipeline result row. Integers arrive as strings."""
    if not isinstance(cell, dict) or "type" not in cell:
        return cell
    kind = cell["type"]
    if kind == "null":
        return None
    if kind == "integer":
        return int(cell["value"])
    if kind == "float":
        return float(cell["value"])
    if kind == "blob":
        return base64.b64decode(cell.get("base64") or "")
    return cell.get("value")


def build_statement(sql: str, params: SqlParams | None = None) -> dict[str, Any]:
    stmt: dict[str, Any] = {"sql": sql}
    if params:
        stmt["named_args"] = [{"name": name, "value": encode_arg(value)} for name, value in params.items()]
    return stmt


def parse_pipeline_response(data: dict[str, Any]) -> SqlResult:
    """Turn the pipeline JSON body into a SqlResult. Raises SqlExecutionError on statement errors."""
    results = data.get("results") or []
    if not results:
        return SqlResult()
    first = results[0] or {}
    if first.get("type") == "error":
        err = first.get("error") or {}
        raise SqlExecutionError(err.get("message") or "Unknown Turso error")
    result = ((first.get("response") or {}).get("result")) or {}
    cols = [c if isinstance(c, str) else (c or {}).get("name") or "" for c in result.get("cols") or []]
    rows = []
    for raw_row in result.get("rows") or []:
        row = {}
        for i, col in enumerate(cols):
            if col and i < len(raw_row):
                row[col] = decode_value(raw_row[i])
        rows.append(row)
    return SqlResult(
        columns=[c for c in cols if c],
        rows=rows,
        rows_affected=int(result.get("affected_row_count") or 0),
    )


class TursoHttpExecutor:
    """Remote backend: single POST per statement, synchronous request/response, no batching."""

    name = "turso-http"

    def __init__(
        self,
        database_url: str,
        auth_token: str,
        *,
        timeout: float = TURSO_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = normalize_base_url(database_url)
        self._auth_token = (auth_token or "").strip().strip("\"'")
        self._timeout = timeout
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self.base_url and self._auth_token)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._auth_token}",
            "Content-Type": "application/json",
        }

    def execute(self, sql: str, params: SqlParams | None = None) -> SqlResult:
        if not self.is_configured():
            raise BackendUnavailableError("Turso config missing")
        url = f"{self.base_url}{TURSO_PIPELINE_PATH}"
        body = {
            "requests": [
                {"type": "execute", "stmt": build_statement(sql, params)},
                {"type": "close"},
            ]
        }
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as c:
                r = c.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise BackendUnavailableError(redact(str(e), self._auth_token)) from e
        if not r.is_success:
            detail = redact(r.text[:200] if r.text else "", self._auth_token)
            # Outages and rejected credentials say nothing about the statement itself.
            if r.status_code >= 500 or r.status_code in (401, 403):
                raise BackendUnavailableError(f"HTTP {r.status_code}: {detail}")
            raise SqlExecutionError(f"HTTP {r.status_code}: {detail}")
        try:
            data = r.json() if r.content else {}
        except ValueError as e:
            raise SqlExecutionError(f"Invalid pipeline response: {r.text[:200]}") from e
        return parse_pipeline_response(data)
