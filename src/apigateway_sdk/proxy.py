"""
Forward proxy resolution

Turns user-supplied proxy properties into the settings handed to the
transport. A missing or disabled proxy configuration yields a direct
connection that ignores any proxy found in the environment.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import quote

from .config.client_config import ProxyProperties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxySettings:
    """
    Transport-level proxy settings

    Attributes:
        endpoint: Proxy endpoint as host:port, None for a direct connection
        username: Optional proxy user
        password: Optional proxy password
    """
    endpoint: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    @classmethod
    def direct(cls) -> 'ProxySettings':
        """No proxy and no environment or system proxy auto-detection."""
        return cls(endpoint=None)

    @property
    def enabled(self) -> bool:
        return self.endpoint is not None

    def proxy_url(self) -> Optional[str]:
        """
        Proxy URL with credentials embedded as userinfo.

        The endpoint itself stays host:port; the URL gets the http scheme
        when the endpoint has none.
        """
        if self.endpoint is None:
            return None

        scheme, separator, location = self.endpoint.rpartition("://")
        if not separator:
            scheme, separator = "http", "://"

        if not self.username:
            return f"{scheme}{separator}{location}"

        userinfo = quote(self.username, safe="")
        if self.password:
            userinfo += ":" + quote(self.password, safe="")
        return f"{scheme}{separator}{userinfo}@{location}"

    def as_requests_proxies(self) -> Dict[str, str]:
        """
        Proxies mapping for ``requests``.

        An empty mapping means a direct connection.
        """
        url = self.proxy_url()
        if url is None:
            return {}
        return {"http": url, "https": url}


def resolve_proxy_settings(proxy_properties: Optional[ProxyProperties]) -> ProxySettings:
    """
    Derive transport proxy settings from proxy properties.

    The proxy is used if and only if the properties are present and enabled.

    Args:
        proxy_properties: Optional proxy configuration

    Returns:
        ProxySettings: Settings for the transport
    """
    if proxy_properties is None or not proxy_properties.enabled:
        return ProxySettings.direct()

    endpoint = f"{proxy_properties.host}:{proxy_properties.port}"
    logger.debug(f"Routing requests through proxy {endpoint}")

    return ProxySettings(
        endpoint=endpoint,
        username=proxy_properties.username,
        password=proxy_properties.password,
    )
