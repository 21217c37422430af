"""Name lists the Xolo server proxies from Jamf Pro and the Title Editor."""

from __future__ import annotations

from typing import Any

from xadm.infrastructure.http import ServerError, XoloHttpClient
from xadm.infrastructure.observability import get_logger

_logger = get_logger(__name__)

JAMF_ROUTE_BASE = "/jamf"
PACKAGE_NAME_ROUTE = f"{JAMF_ROUTE_BASE}/package-names"
COMPUTER_GROUP_NAME_ROUTE = f"{JAMF_ROUTE_BASE}/computer-group-names"
CATEGORY_NAME_ROUTE = f"{JAMF_ROUTE_BASE}/category-names"

TITLE_EDITOR_ROUTE_BASE = "/title-editor"
TITLES_ROUTE = f"{TITLE_EDITOR_ROUTE_BASE}/titles"


def _as_name_list(payload: Any, route: str) -> list[str]:
    if not isinstance(payload, list):
        raise ServerError(f"Expected a list from {route}, got {type(payload).__name__}")
    return [str(item) for item in payload]


class ServerListService:
    """Read-only listing calls against a logged-in :class:`XoloHttpClient`.

    Jamf Pro name lists rarely change during one run, so they are fetched once
    per service instance.
    """

    def __init__(self, client: XoloHttpClient) -> None:
        self._client = client
        self._cache: dict[str, list[str]] = {}

    def _cached_names(self, route: str) -> list[str]:
        if route not in self._cache:
            self._cache[route] = self._fetch_names(route)
        return list(self._cache[route])

    def _fetch_names(self, route: str) -> list[str]:
        names = _as_name_list(self._client.get_json(route), route)
        _logger.debug(f"Fetched {len(names)} names from {route}")
        return names

    def jamf_package_names(self) -> list[str]:
        """Names of all packages in Jamf Pro."""
        return self._cached_names(PACKAGE_NAME_ROUTE)

    def jamf_computer_group_names(self) -> list[str]:
        """Names of all computer groups in Jamf Pro."""
        return self._cached_names(COMPUTER_GROUP_NAME_ROUTE)

    def jamf_category_names(self) -> list[str]:
        """Names of all categories in Jamf Pro."""
        return self._cached_names(CATEGORY_NAME_ROUTE)

    def title_editor_titles(self) -> list[str]:
        """Titles defined in the Title Editor; always fetched fresh."""
        return self._fetch_names(TITLES_ROUTE)


__all__ = ["ServerListService"]
