# =============================================================================
# tools/contracts.py : Tool contracts, argument validation and dispatch
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares the three tools the agent can call, validates the arguments it
#   sends, calls the NPS gateway and hands back an LLM-friendly dict:
#
#     findParks       → {total, limit, start, parks}
#     getParkDetails  → one park's detail view
#     getAlerts       → {total, limit, start, alerts, alertsByPark}
#
# ARGUMENT SCHEMAS:
#   Each tool's arguments are a pydantic model whose aliases are the camelCase
#   names the agent sends.  model_json_schema(by_alias=True) on the same model
#   is the inputSchema published during discovery, so the published contract
#   and the validation rules cannot drift apart.
#
# ERROR ENVELOPES:
#   call_tool() never raises for a single invocation.  Every failure comes
#   back as a normal payload shaped {"error": ..., "message"/"details": ...}:
#     - bad arguments            → "Validation error" + pydantic error list
#     - unknown state code(s)    → "Invalid state code(s): ..." + valid list
#     - park code with no match  → "Park not found"
#     - upstream/HTTP failure    → "Server error" + the failure's message
#     - unknown tool name        → "Server error" + "Unknown tool: <name>"
# =============================================================================

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nps import client as nps_client
from nps.config import NPSConfig
from nps.formatters import (
    format_alert_data,
    format_park_data,
    format_park_details,
    group_alerts_by_park,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

# 50 states, DC, and the five inhabited territories (AS, GU, MP, PR, VI).
STATE_CODES: tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC", "AS", "GU", "MP", "PR", "VI",
)
_VALID_STATE_CODES = frozenset(STATE_CODES)


class UpstreamResponseError(ValueError):
    """The NPS API answered 2xx but with a body we cannot use."""


# =============================================================================
# Argument models
# =============================================================================
class _ToolArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def upstream_params(self) -> dict[str, Any]:
        """Provided arguments under their wire names, with None left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FindParksArguments(_ToolArguments):
    model_config = ConfigDict(title="findParks")

    state_code: str | None = Field(
        default=None,
        alias="stateCode",
        description=(
            'Filter parks by state code (e.g., "CA" for California, "NY" for New York). '
            'Multiple states can be comma-separated (e.g., "CA,OR,WA")'
        ),
    )
    q: str | None = Field(
        default=None,
        description="Search term to filter parks by name or description",
    )
    limit: int | None = Field(
        default=None,
        ge=1,
        strict=True,
        description=f"Maximum number of parks to return (default: {DEFAULT_LIMIT}, max: {MAX_LIMIT})",
    )
    start: int | None = Field(
        default=None,
        ge=0,
        strict=True,
        description="Start position for results (useful for pagination)",
    )
    activities: str | None = Field(
        default=None,
        description='Filter by available activities (e.g., "hiking,camping")',
    )


class GetParkDetailsArguments(_ToolArguments):
    model_config = ConfigDict(title="getParkDetails")

    park_code: str = Field(
        alias="parkCode",
        description=(
            'The park code of the national park (e.g., "yose" for Yosemite, '
            '"grca" for Grand Canyon)'
        ),
    )


class GetAlertsArguments(_ToolArguments):
    model_config = ConfigDict(title="getAlerts")

    park_code: str | None = Field(
        default=None,
        alias="parkCode",
        description=(
            'Filter alerts by park code (e.g., "yose" for Yosemite). '
            'Multiple parks can be comma-separated (e.g., "yose,grca").'
        ),
    )
    limit: int | None = Field(
        default=None,
        ge=1,
        strict=True,
        description=f"Maximum number of alerts to return (default: {DEFAULT_LIMIT}, max: {MAX_LIMIT})",
    )
    start: int | None = Field(
        default=None,
        ge=0,
        strict=True,
        description="Start position for results (useful for pagination)",
    )
    q: str | None = Field(
        default=None,
        description="Search term to filter alerts by title or description",
    )


# =============================================================================
# Validation helpers
# =============================================================================
def clamp_limit(limit: int | None) -> int:
    """Absent → 10, anything above 50 → 50, otherwise unchanged."""
    if limit is None:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def find_invalid_state_codes(state_code: str) -> list[str]:
    """Return the comma-separated segments that are not known jurisdictions."""
    requested = [segment.strip().upper() for segment in state_code.split(",")]
    return [code for code in requested if code not in _VALID_STATE_CODES]


def error_envelope(error: str, **detail: Any) -> dict[str, Any]:
    return {"error": error, **detail}


def _parse_counter(response: Mapping[str, Any], field: str) -> int:
    raw = response.get(field)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise UpstreamResponseError(
            f"NPS API returned a non-numeric {field!r}: {raw!r}"
        ) from None


def _page(response: Mapping[str, Any]) -> dict[str, int]:
    # The API echoes total/limit/start back as strings.
    return {field: _parse_counter(response, field) for field in ("total", "limit", "start")}


def _records(response: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    data = response.get("data")
    if not isinstance(data, list):
        raise UpstreamResponseError("NPS API response is missing its 'data' array")
    return data


# =============================================================================
# Tool handlers
# =============================================================================
async def find_parks(args: FindParksArguments, config: NPSConfig) -> dict[str, Any]:
    if args.state_code:
        invalid = find_invalid_state_codes(args.state_code)
        if invalid:
            logger.info("  → rejected state code(s): %s", ", ".join(invalid))
            return error_envelope(
                f"Invalid state code(s): {', '.join(invalid)}",
                validStateCodes=list(STATE_CODES),
            )

    params = args.upstream_params()
    params["limit"] = clamp_limit(args.limit)

    response = await nps_client.get_parks(config, params)
    result = _page(response)
    result["parks"] = format_park_data(_records(response))
    logger.info("  → found %d of %d parks", len(result["parks"]), result["total"])
    return result


async def get_park_details(args: GetParkDetailsArguments, config: NPSConfig) -> dict[str, Any]:
    response = await nps_client.get_park_by_code(config, args.park_code)
    parks = response.get("data") or []
    if not parks:
        logger.info("  → no park matches %r", args.park_code)
        return error_envelope(
            "Park not found",
            message=f"No park found with park code: {args.park_code}",
        )
    return format_park_details(parks[0])


async def get_alerts(args: GetAlertsArguments, config: NPSConfig) -> dict[str, Any]:
    params = args.upstream_params()
    params["limit"] = clamp_limit(args.limit)

    response = await nps_client.get_alerts(config, params)
    result = _page(response)
    alerts = format_alert_data(_records(response))
    result["alerts"] = alerts
    result["alertsByPark"] = group_alerts_by_park(alerts)
    logger.info("  → %d alerts across %d parks", len(alerts), len(result["alertsByPark"]))
    return result


# =============================================================================
# Tool definitions (discovery list)
# =============================================================================
Handler = Callable[[Any, NPSConfig], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    arguments: type[_ToolArguments]
    handler: Handler

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.arguments.model_json_schema(by_alias=True)

    def descriptor(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="findParks",
        description="Search for national parks based on state, name, activities, or other criteria",
        arguments=FindParksArguments,
        handler=find_parks,
    ),
    ToolDefinition(
        name="getParkDetails",
        description="Get detailed information about a specific national park",
        arguments=GetParkDetailsArguments,
        handler=get_park_details,
    ),
    ToolDefinition(
        name="getAlerts",
        description=(
            "Get current alerts for national parks including closures, hazards, "
            "and important information"
        ),
        arguments=GetAlertsArguments,
        handler=get_alerts,
    ),
)

TOOLS_BY_NAME: Mapping[str, ToolDefinition] = MappingProxyType(
    {tool.name: tool for tool in TOOL_DEFINITIONS}
)


def list_tools() -> list[dict[str, Any]]:
    return [tool.descriptor() for tool in TOOL_DEFINITIONS]


# =============================================================================
# Dispatch
# =============================================================================
async def call_tool(
    name: str,
    arguments: Mapping[str, Any] | None,
    config: NPSConfig,
) -> dict[str, Any]:
    """Run one tool invocation and return its payload or an error envelope."""
    tool = TOOLS_BY_NAME.get(name)
    if tool is None:
        return error_envelope("Server error", message=f"Unknown tool: {name}")

    try:
        args = tool.arguments.model_validate(dict(arguments or {}))
        return await tool.handler(args, config)
    except ValidationError as exc:
        return error_envelope(
            "Validation error",
            details=json.loads(exc.json(include_url=False)),
        )
    except Exception as exc:
        logger.error("Error executing tool %s: %s", name, exc)
        return error_envelope("Server error", message=str(exc) or type(exc).__name__)


def render(payload: Mapping[str, Any]) -> str:
    """Serialize a payload as the 2-space-indented JSON text the agent reads."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "STATE_CODES",
    "UpstreamResponseError",
    "FindParksArguments",
    "GetParkDetailsArguments",
    "GetAlertsArguments",
    "clamp_limit",
    "find_invalid_state_codes",
    "error_envelope",
    "find_parks",
    "get_park_details",
    "get_alerts",
    "ToolDefinition",
    "TOOL_DEFINITIONS",
    "TOOLS_BY_NAME",
    "list_tools",
    "call_tool",
    "render",
]
