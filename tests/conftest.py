"""Shared fixtures: a stub NPS config, a respx router and upstream records."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
import respx

from nps.config import NPSConfig

STUB_BASE_URL = "https://nps.test/api/v1"
STUB_API_KEY = "test-key"


@pytest.fixture
def config() -> NPSConfig:
    return NPSConfig(base_url=STUB_BASE_URL, api_key=STUB_API_KEY)


@pytest.fixture
def nps_api() -> Iterator[respx.MockRouter]:
    """Intercept every httpx request aimed at the stub NPS base URL."""
    with respx.mock(base_url=STUB_BASE_URL, assert_all_called=False) as router:
        yield router


def make_park(code: str = "yose", **overrides: Any) -> dict[str, Any]:
    """A park record shaped like GET /parks data entries."""
    park: dict[str, Any] = {
        "id": f"id-{code}",
        "url": f"https://www.nps.gov/{code}/index.htm",
        "fullName": "Yosemite National Park",
        "parkCode": code,
        "description": "Not just a great valley, but a shrine to human foresight.",
        "latitude": "37.84883288",
        "longitude": "-119.5571873",
        "activities": [
            {"id": "a1", "name": "Hiking"},
            {"id": "a2", "name": "Camping"},
        ],
        "topics": [{"id": "t1", "name": "Granite"}, {"id": "t2", "name": "Waterfalls"}],
        "states": "CA",
        "contacts": {
            "phoneNumbers": [
                {
                    "phoneNumber": "2093720200",
                    "description": "",
                    "extension": "",
                    "type": "Voice",
                }
            ],
            "emailAddresses": [
                {"description": "", "emailAddress": "yose_web_manager@nps.gov"}
            ],
        },
        "entranceFees": [
            {
                "cost": "35.00",
                "description": "Valid for 7 days.",
                "title": "Entrance - Private Vehicle",
            }
        ],
        "entrancePasses": [
            {
                "cost": "70.00",
                "description": "Valid for 12 months.",
                "title": "Yosemite Annual Pass",
            }
        ],
        "directionsInfo": "Yosemite is reachable via highways 41, 120 and 140.",
        "directionsUrl": "https://www.nps.gov/yose/planyourvisit/driving.htm",
        "operatingHours": [
            {
                "name": "Yosemite National Park",
                "description": "Open 24 hours a day, 365 days a year.",
                "standardHours": {
                    "sunday": "All Day",
                    "monday": "All Day",
                    "tuesday": "",
                },
            }
        ],
        "addresses": [
            {
                "postalCode": "95389",
                "city": "Yosemite National Park",
                "stateCode": "CA",
                "line1": "PO Box 577",
                "line2": "",
                "type": "Mailing",
            },
            {
                "postalCode": "95389",
                "city": "Yosemite National Park",
                "stateCode": "CA",
                "line1": "9035 Village Drive",
                "line2": "",
                "type": "Physical",
            },
        ],
        "images": [
            {
                "credit": "NPS Photo",
                "title": "Half Dome",
                "altText": "Half Dome at sunset",
                "caption": "Half Dome glows at sunset.",
                "url": "https://www.nps.gov/common/uploads/halfdome.jpg",
            }
        ],
        "weatherInfo": "Weather varies by elevation.",
        "designation": "National Park",
    }
    park.update(overrides)
    return park


def make_alert(park_code: str = "yose", title: str = "Road closed", **overrides: Any) -> dict[str, Any]:
    """An alert record shaped like GET /alerts data entries."""
    alert: dict[str, Any] = {
        "id": f"alert-{park_code}-{title}",
        "url": f"https://www.nps.gov/{park_code}/planyourvisit/conditions.htm",
        "title": title,
        "parkCode": park_code,
        "description": f"{title} until further notice.",
        "category": "Park Closure",
        "lastIndexedDate": "2024-03-15 13:23:51.0",
    }
    alert.update(overrides)
    return alert


def page(data: list[dict[str, Any]], total: int | None = None, limit: int = 10, start: int = 0) -> dict[str, Any]:
    """Wrap records the way the NPS API does, with string counters."""
    return {
        "total": str(len(data) if total is None else total),
        "limit": str(limit),
        "start": str(start),
        "data": data,
    }
