"""
Alias generation strategies for the URL shortener.
Uses Strategy Pattern so the service does not care how aliases are made.
"""

import re
import secrets
import string
from abc import ABC, abstractmethod


# nanoid alphabet: letters, digits, '_' and '-'
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"

_ALIAS_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

# Top-level paths served by the app itself; an alias with one of these
# names could never be reached through GET /{alias}.
RESERVED_ALIASES = frozenset({"api", "docs", "redoc", "health", "openapi"})


def is_reserved_alias(alias: str) -> bool:
    return alias.lower() in RESERVED_ALIASES


def is_valid_alias(alias: str, max_length: int = 64) -> bool:
    """True if ``alias`` is non-empty, URL-safe, not reserved and at most ``max_length`` long"""
    return (
        0 < len(alias) <= max_length
        and bool(_ALIAS_PATTERN.match(alias))
        and not is_reserved_alias(alias)
    )


class AliasStrategy(ABC):
    """Abstract base class for alias generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate alias.

        Candidates are not guaranteed unique; the caller checks the store
        and asks again on collision.
        """
        pass


class RandomAliasStrategy(AliasStrategy):
    """
    Fixed-length random alias over the URL-safe alphabet.

    64^6 (about 6.9e10) aliases at the default length, so collisions are
    rare but possible.
    """

    def __init__(self, length: int = 6, alphabet: str = URL_SAFE_ALPHABET):
        if length < 1:
            raise ValueError("Alias length must be at least 1")
        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))
