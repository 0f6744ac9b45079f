"""Tests for domain normalization and validation."""

import pytest

from trust_lens.domain.errors import ValidationError
from trust_lens.domain.services.domain_names import (
    is_valid_domain,
    normalize_domain,
    require_domain,
)


@pytest.mark.parametrize(
    "value",
    [
        "https://www.Example.com/path",
        "http://example.com",
        "example.com",
        "WWW.EXAMPLE.COM",
        "https://user:pw@example.com:8443/a?b=c#d",
        "example.com.",
    ],
)
def test_normalize_domain(value):
    """Test URLs and hostnames reduce to the same domain."""
    assert normalize_domain(value) == "example.com"


@pytest.mark.parametrize("value", [None, "", "   ", "http://", 123])
def test_normalize_domain_unparseable(value):
    """Test unparseable input yields None."""
    assert normalize_domain(value) is None


@pytest.mark.parametrize(
    "domain",
    ["bbc.com", "a.io", "my-site.org", "example.xn--p1ai", "gov.uk"],
)
def test_valid_domains(domain):
    """Test accepted domains."""
    assert is_valid_domain(domain)


@pytest.mark.parametrize(
    "domain",
    [None, "", "localhost", "-bad.com", "bad_domain.com", "news.bbc.co.uk", "a.c", "1.2.3.4"],
)
def test_invalid_domains(domain):
    """Test rejected domains, including multi-label hosts."""
    assert not is_valid_domain(domain)


def test_require_domain():
    """Test normalization plus validation."""
    assert require_domain("https://www.bbc.com/news") == "bbc.com"
    with pytest.raises(ValidationError, match="Invalid domain format"):
        require_domain("not a domain")
