"""Response envelope helpers: meta block, data provenance and errors."""

from datetime import datetime
from typing import Any

from valuation_mcp import SCHEMA_VERSION, SERVER_VERSION

# Every error_type a tool may return
ERROR_TYPES = ("invalid_symbol", "invalid_parameters", "data_unavailable")


def build_meta(tool: str, duration_ms: float | None = None) -> dict[str, Any]:
    """
    Meta block stamped on every tool response.

    Args:
        tool: Tool name (e.g. "bazin_valuation")
        duration_ms: Wall time spent in the tool, if measured

    Returns:
        Dict with server_version, schema_version, tool and optional duration_ms
    """
    meta: dict[str, Any] = {
        "server_version": SERVER_VERSION,
        "schema_version": SCHEMA_VERSION,
        "tool": tool,
    }
    if duration_ms is not None:
        meta["duration_ms"] = round(duration_ms, 1)
    return meta


def build_provenance(
    source: str,
    as_of: datetime | str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """
    Provenance entry for one input (fundamentals or dividends).

    Extra fields are typically RetryResult.to_provenance() output: attempts,
    cache_hit, total_backoff_seconds and retry_errors.
    """
    prov: dict[str, Any] = {"source": source}
    if as_of is not None:
        prov["as_of"] = as_of.isoformat() if isinstance(as_of, datetime) else as_of
    prov.update(fields)
    prov.setdefault("warnings", [])
    return prov


def build_error_response(
    error_type: str,
    message: str,
    symbol: str | None = None,
) -> dict[str, Any]:
    """
    Error envelope returned in place of a tool result.

    Tools never raise to the MCP client; bad input and provider failures come
    back as {"error": True, ...} so the caller can branch on error_type.

    Args:
        error_type: One of ERROR_TYPES
        message: Human-readable explanation
        symbol: Offending symbol, when there is one

    Returns:
        Error response dict
    """
    if error_type not in ERROR_TYPES:
        raise ValueError(f"Unknown error_type '{error_type}'")

    response: dict[str, Any] = {
        "error": True,
        "error_type": error_type,
        "message": message,
        "meta": build_meta("error"),
    }
    if symbol is not None:
        response["symbol"] = symbol
    return response
