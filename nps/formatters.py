# =============================================================================
# nps/formatters.py : Response Normalizer
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reshapes raw NPS records into the flatter, renamed JSON the agent reads.
#   Every function here is pure: dict in, dict out, no I/O, no logging.
#
#     park record  → format_park_summary()   (search results)
#                  → format_park_details()   (single-park lookup, richer)
#     alert record → format_alert()
#
# SUMMARY vs DETAILS:
#   The detail view adds the physical address, phone extensions, entrance
#   passes, topics and directions, prefixes fee amounts with "$", and turns
#   the standardHours mapping into "Monday: 9:00AM - 5:00PM" lines.  The
#   summary view leaves fee amounts and hours exactly as the API sent them.
#
# TOTALITY:
#   Collection fields missing from a record default to empty, so a well-formed
#   record never raises here.
# =============================================================================

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Any, Iterable, Mapping

# Alert categories the NPS publishes, with the label the agent sees.
# Anything not listed passes through unchanged.
ALERT_CATEGORY_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "Information": "Information (non-emergency)",
        "Caution": "Caution (potential hazard)",
        "Danger": "Danger (significant hazard)",
        "Park Closure": "Park Closure (area inaccessible)",
    }
)

UNKNOWN_DATE = "Unknown"
PHYSICAL_ADDRESS_TYPE = "Physical"


# =============================================================================
# Shared field helpers
# =============================================================================
def parse_states(raw: str | None) -> list[str]:
    """Split the comma-joined ``states`` field ("CA,NV") into ordered codes."""
    if not raw:
        return []
    return [code.strip() for code in raw.split(",")]


def _names(items: Iterable[Mapping[str, Any]]) -> list[str]:
    return [item.get("name") for item in items]


def _images(park: Mapping[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "url": image.get("url"),
            "title": image.get("title"),
            "altText": image.get("altText"),
            "caption": image.get("caption"),
            "credit": image.get("credit"),
        }
        for image in park.get("images") or []
    ]


def _email_addresses(contacts: Mapping[str, Any]) -> list[dict[str, Any]]:
    return [
        {"address": email.get("emailAddress"), "description": email.get("description")}
        for email in contacts.get("emailAddresses") or []
    ]


def _with_currency(cost: Any) -> str:
    return f"${cost}"


def select_physical_address(addresses: list[Mapping[str, Any]]) -> Mapping[str, Any] | None:
    """Prefer the address tagged "Physical", else the first one, else None."""
    for address in addresses:
        if address.get("type") == PHYSICAL_ADDRESS_TYPE:
            return address
    return addresses[0] if addresses else None


def format_standard_hours(standard_hours: Mapping[str, str]) -> list[str]:
    """Render {"monday": "9:00AM - 5:00PM", "tuesday": ""} as day lines.

    Empty hours read as "Closed".
    """
    return [
        f"{day[:1].upper()}{day[1:]}: {hours or 'Closed'}"
        for day, hours in standard_hours.items()
    ]


def format_last_updated(timestamp: str | None) -> str:
    """Turn an ISO timestamp into M/D/YYYY.

    Empty or missing → "Unknown".  A value that is not ISO-8601 is returned
    as-is.
    """
    if not timestamp:
        return UNKNOWN_DATE
    try:
        parsed = datetime.fromisoformat(timestamp.strip())
    except ValueError:
        return timestamp
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


# =============================================================================
# Parks
# =============================================================================
def format_park_summary(park: Mapping[str, Any]) -> dict[str, Any]:
    """Summary view of one park record, used for search results."""
    contacts = park.get("contacts") or {}
    return {
        "name": park.get("fullName"),
        "code": park.get("parkCode"),
        "description": park.get("description"),
        "states": parse_states(park.get("states")),
        "url": park.get("url"),
        "designation": park.get("designation"),
        "activities": _names(park.get("activities") or []),
        "weatherInfo": park.get("weatherInfo"),
        "location": {
            "latitude": park.get("latitude"),
            "longitude": park.get("longitude"),
        },
        "entranceFees": [
            {
                "cost": fee.get("cost"),
                "description": fee.get("description"),
                "title": fee.get("title"),
            }
            for fee in park.get("entranceFees") or []
        ],
        "operatingHours": [
            {
                "name": hours.get("name"),
                "description": hours.get("description"),
                "standardHours": hours.get("standardHours") or {},
            }
            for hours in park.get("operatingHours") or []
        ],
        "contacts": {
            "phoneNumbers": [
                {
                    "type": phone.get("type"),
                    "number": phone.get("phoneNumber"),
                    "description": phone.get("description"),
                }
                for phone in contacts.get("phoneNumbers") or []
            ],
            "emailAddresses": _email_addresses(contacts),
        },
        "images": _images(park),
    }


def format_park_data(parks: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [format_park_summary(park) for park in parks]


def format_park_details(park: Mapping[str, Any]) -> dict[str, Any]:
    """Detail view of one park record, used for single-park lookups."""
    contacts = park.get("contacts") or {}
    address = select_physical_address(park.get("addresses") or [])

    return {
        "name": park.get("fullName"),
        "code": park.get("parkCode"),
        "url": park.get("url"),
        "description": park.get("description"),
        "designation": park.get("designation"),
        "states": parse_states(park.get("states")),
        "weatherInfo": park.get("weatherInfo"),
        "directionsInfo": park.get("directionsInfo"),
        "directionsUrl": park.get("directionsUrl"),
        "location": {
            "latitude": park.get("latitude"),
            "longitude": park.get("longitude"),
            "address": None if address is None else {
                "line1": address.get("line1"),
                "line2": address.get("line2"),
                "city": address.get("city"),
                "stateCode": address.get("stateCode"),
                "postalCode": address.get("postalCode"),
            },
        },
        "contacts": {
            "phoneNumbers": [
                {
                    "type": phone.get("type"),
                    "number": phone.get("phoneNumber"),
                    "extension": phone.get("extension"),
                    "description": phone.get("description"),
                }
                for phone in contacts.get("phoneNumbers") or []
            ],
            "emailAddresses": _email_addresses(contacts),
        },
        "entranceFees": [
            {
                "title": fee.get("title"),
                "cost": _with_currency(fee.get("cost")),
                "description": fee.get("description"),
            }
            for fee in park.get("entranceFees") or []
        ],
        "entrancePasses": [
            {
                "title": entrance_pass.get("title"),
                "cost": _with_currency(entrance_pass.get("cost")),
                "description": entrance_pass.get("description"),
            }
            for entrance_pass in park.get("entrancePasses") or []
        ],
        "operatingHours": [
            {
                "name": hours.get("name"),
                "description": hours.get("description"),
                "standardHours": format_standard_hours(hours.get("standardHours") or {}),
            }
            for hours in park.get("operatingHours") or []
        ],
        "topics": _names(park.get("topics") or []),
        "activities": _names(park.get("activities") or []),
        "images": _images(park),
    }


# =============================================================================
# Alerts
# =============================================================================
def label_alert_category(category: str | None) -> str | None:
    """Map an NPS alert category to its agent-facing label (pass-through if unknown)."""
    return ALERT_CATEGORY_LABELS.get(category, category)


def format_alert(alert: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "title": alert.get("title"),
        "description": alert.get("description"),
        "parkCode": alert.get("parkCode"),
        "type": label_alert_category(alert.get("category")),
        "url": alert.get("url"),
        "lastUpdated": format_last_updated(alert.get("lastIndexedDate")),
    }


def format_alert_data(alerts: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [format_alert(alert) for alert in alerts]


def group_alerts_by_park(alerts: Iterable[Mapping[str, Any]]) -> dict[str, list[Mapping[str, Any]]]:
    """Group formatted alerts by parkCode, keeping first-seen key order."""
    grouped: dict[str, list[Mapping[str, Any]]] = {}
    for alert in alerts:
        grouped.setdefault(alert.get("parkCode"), []).append(alert)
    return grouped


__all__ = [
    "ALERT_CATEGORY_LABELS",
    "UNKNOWN_DATE",
    "parse_states",
    "select_physical_address",
    "format_standard_hours",
    "format_last_updated",
    "format_park_summary",
    "format_park_data",
    "format_park_details",
    "label_alert_category",
    "format_alert",
    "format_alert_data",
    "group_alerts_by_park",
]
