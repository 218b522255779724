#!/usr/bin/env python3
"""
Exception hierarchy for the movie finder

Only SeedNotFound and MovieNotFound are meant to reach a caller. Provider
errors are raised by the OMDb client and absorbed by the collection layer.
"""


class FinderError(Exception):
    """Base class for all movie finder errors"""


class ConfigError(FinderError):
    """Missing API key or invalid configuration value"""


class ProviderError(FinderError):
    """Any failure reported by or while talking to the metadata provider"""


class NotFound(ProviderError):
    """Provider has no entity for the given title or id"""


class NoMoreResults(ProviderError):
    """Provider has no (more) search hits for a term"""


class TransportError(ProviderError):
    """Network failure, timeout, HTTP error or undecodable response"""


class SeedNotFound(FinderError):
    """Seed movie of a relation search could not be resolved"""

    def __init__(self, seed_title: str, reason: str = ''):
        self.seed_title = seed_title
        self.reason = reason
        message = f"Seed movie not found: '{seed_title}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MovieNotFound(FinderError):
    """Single movie lookup found nothing"""
