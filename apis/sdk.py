"""
Python client for the plugin class loader diagnostics API.
"""

import requests
from typing import Any, Dict, List
from dataclasses import dataclass

@dataclass
class PluginInfo:
    """Declared plugin class as reported by the API."""
    qualified_name: str
    short_name: str
    implementation_type: str
    base_capability_type: str
    description: str
    declaring_package: str
    library_name: str
    manifest_path: str
    loaded: bool

class PluginApiError(Exception):
    """Raised when the diagnostics API cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)

class PluginApiClient:
    """Client for a running plugin diagnostics server."""

    def __init__(self, base_url: str = "http://localhost:8000", session: requests.Session = None):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the diagnostics server
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Any:
        """Make HTTP request to the API."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise PluginApiError(f"API request failed: {e}") from e
        if not response.ok:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise PluginApiError(f"{method} {endpoint} returned {response.status_code}: {detail}",
                                 response.status_code)
        return response.json()

    def list_plugins(self) -> List[str]:
        """List declared plugin classes."""
        return self._make_request("GET", "/plugins")["plugins"]

    def describe(self, name: str) -> PluginInfo:
        """
        Describe one declared plugin class.

        Args:
            name: Qualified plugin name

        Returns:
            PluginInfo for the class
        """
        return PluginInfo(**self._make_request("GET", f"/plugins/{name}"))

    def libraries(self) -> List[Dict[str, Any]]:
        """Get lifecycle state of every library the server has touched."""
        return self._make_request("GET", "/libraries")

    def refresh(self) -> int:
        """
        Ask the server to rediscover plugins.

        Returns:
            Number of declared classes after the refresh
        """
        return self._make_request("POST", "/plugins/refresh")["declared"]
