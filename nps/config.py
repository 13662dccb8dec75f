# =============================================================================
# nps/config.py : Upstream connection settings
# =============================================================================
#
# The gateway needs exactly two things: where the API lives and which key to
# send.  They travel together as an immutable NPSConfig value that is passed
# explicitly into every gateway call, so there is no client singleton to
# initialize before use and tests can point the gateway at any stub URL.
#
# ENVIRONMENT:
#   NPS_API_KEY   The developer.nps.gov API key, sent as the X-Api-Key header.
#                 Missing is tolerated: a warning is logged and requests are
#                 still attempted (the upstream will answer with an auth error).
#
#   main.py loads a .env file (python-dotenv) before from_env() is called.
# =============================================================================

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

NPS_API_BASE = "https://developer.nps.gov/api/v1"
API_KEY_SIGNUP_URL = "https://www.nps.gov/subjects/developer/get-started.htm"


@dataclass(frozen=True)
class NPSConfig:
    """Base URL and API key for the National Park Service API."""

    base_url: str = NPS_API_BASE
    api_key: str = ""

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "NPSConfig":
        """Build config from NPS_API_KEY, warning when the key is absent."""

        config = cls(api_key=os.getenv("NPS_API_KEY", "").strip())
        if not config.has_api_key:
            logger.warning("NPS_API_KEY is not set in environment variables.")
            logger.warning("Get your API key at: %s", API_KEY_SIGNUP_URL)
        return config


__all__ = ["NPSConfig", "NPS_API_BASE", "API_KEY_SIGNUP_URL"]
