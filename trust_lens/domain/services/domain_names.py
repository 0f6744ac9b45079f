"""Domain name normalization and validation."""

import re
from typing import Optional
from urllib.parse import urlsplit

from ..errors import ValidationError

# Shared by every boundary that accepts a domain.
DOMAIN_PATTERN = re.compile(
    r"^[a-zA-Z0-9][a-zA-Z0-9-]{0,61}[a-zA-Z0-9]?\.([a-zA-Z]{2,}|xn--[a-zA-Z0-9-]+)$"
)


def normalize_domain(value: Optional[str]) -> Optional[str]:
    """Reduce a URL or hostname to a normalized domain.

    ``https://www.Example.com/path`` and ``http://example.com`` both become
    ``example.com``.

    Args:
        value: URL or bare hostname

    Returns:
        Lowercase hostname without a leading ``www.``, or None if no host
        can be extracted
    """
    if not value or not isinstance(value, str):
        return None

    candidate = value.strip()
    if not candidate:
        return None
    if "://" not in candidate:
        candidate = f"//{candidate}"

    try:
        host = urlsplit(candidate).hostname
    except ValueError:
        return None
    if not host:
        return None

    host = host.lower().rstrip(".")
    if host.startswith("www."):
        host = host[4:]
    return host or None


def is_valid_domain(domain: Optional[str]) -> bool:
    """Check a domain against the shared domain pattern."""
    return bool(domain) and DOMAIN_PATTERN.match(domain) is not None


def require_domain(value: Optional[str]) -> str:
    """Normalize and validate a domain.

    Raises:
        ValidationError: If the value is not a valid domain
    """
    domain = normalize_domain(value)
    if not is_valid_domain(domain):
        raise ValidationError("Invalid domain format")
    return domain
