"""Exception hierarchy shared by the service layer."""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "ScholarFeedError",
    "TransportError",
    "UpstreamEmptyError",
    "UpstreamMalformedError",
]


class ScholarFeedError(Exception):
    """Base class for errors raised by Scholar Feed components."""


class ConfigurationError(ScholarFeedError):
    """A required credential or setting is missing or invalid."""


class UpstreamEmptyError(ScholarFeedError):
    """An upstream service answered but returned nothing usable."""


class UpstreamMalformedError(ScholarFeedError):
    """An upstream service returned a payload in an unexpected shape."""


class TransportError(ScholarFeedError):
    """The request to an upstream service failed at the network or HTTP level."""
