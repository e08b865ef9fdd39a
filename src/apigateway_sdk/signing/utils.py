"""
Utility functions for SigV4 request signing
"""

import re
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

from .types import SIGV4_TIMESTAMP_FORMAT


_AUTHORIZATION_RE = re.compile(
    r"^(?P<algorithm>\S+)\s+"
    r"Credential=(?P<access_key_id>[^/]+)/(?P<scope>[^,]+),\s*"
    r"SignedHeaders=(?P<signed_headers>[^,]+),\s*"
    r"Signature=(?P<signature>[0-9a-f]+)$"
)


def utc_now() -> datetime:
    """
    Current time in UTC.

    Returns:
        datetime: Timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)


def format_sigv4_timestamp(moment: datetime) -> str:
    """
    Format a datetime as a SigV4 timestamp (e.g. 20240101T120000Z).

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(SIGV4_TIMESTAMP_FORMAT)


def build_credential_scope(timestamp: str, region: str, service_name: str) -> str:
    """
    Build the SigV4 credential scope for a timestamp.

    Args:
        timestamp: SigV4 timestamp
        region: Signing region
        service_name: Service signing name

    Returns:
        str: Scope in the form date/region/service/aws4_request
    """
    return f"{timestamp[:8]}/{region}/{service_name}/aws4_request"


def diff_headers(before: Mapping[str, str], after: Mapping[str, str]) -> Dict[str, str]:
    """
    Return headers present in ``after`` that are new or changed.

    Header names are compared case-insensitively.
    """
    original = {name.lower(): value for name, value in before.items()}
    return {
        name: value
        for name, value in after.items()
        if original.get(name.lower()) != value
    }


def parse_authorization_header(value: str) -> Optional[Dict[str, str]]:
    """
    Split a SigV4 Authorization header into its parts.

    Returns:
        dict: algorithm, access_key_id, scope, signed_headers, signature
        or None if the value is not a SigV4 authorization header
    """
    match = _AUTHORIZATION_RE.match(value.strip())
    if not match:
        return None
    return match.groupdict()

