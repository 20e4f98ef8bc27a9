"""Identity – derive redundant lookup keys from a request's identity signals.

Each key hashes a different subset of the caller's signals, so changing
any single signal (user agent, network address, fingerprint) still leaves
at least one key unchanged::

    primary   = digest(address, user_agent[:50], fingerprint)
    secondary = digest(address, fingerprint)
    tertiary  = digest(user_agent[:30], fingerprint)

The digest exists to compact and lightly obscure the material, not to
authenticate anyone.
"""
from __future__ import annotations

import dataclasses
import hashlib
from typing import Iterator, Union

Signal = Union[str, bytes, None]

DEFAULT_DIGEST_LENGTH = 16
PRIMARY_USER_AGENT_PREFIX = 50
TERTIARY_USER_AGENT_PREFIX = 30
_SEPARATOR = b"-"


def _to_bytes(part: Signal) -> bytes:
    if part is None:
        return b""
    if isinstance(part, bytes):
        return part
    return part.encode("utf-8", errors="surrogatepass")


def digest(*parts: Signal, length: int = DEFAULT_DIGEST_LENGTH) -> str:
    """SHA-256 over ``parts`` joined by ``-``, hex-encoded and truncated."""
    material = _SEPARATOR.join(_to_bytes(p) for p in parts)
    return hashlib.sha256(material).hexdigest()[:length]


@dataclasses.dataclass(frozen=True)
class IdentityKeys:
    """Ordered redundant keys, most specific first."""

    keys: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.keys:
            raise ValueError("IdentityKeys needs at least one key")

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    @property
    def primary(self) -> str:
        return self.keys[0]

    @property
    def secondary(self) -> str:
        return self.keys[1]

    @property
    def tertiary(self) -> str:
        return self.keys[2]


class IdentityDeriver:
    """Turns raw request signals into :class:`IdentityKeys`. Never fails."""

    def __init__(self, digest_length: int = DEFAULT_DIGEST_LENGTH) -> None:
        self._length = digest_length

    def derive(
        self,
        network_address: Signal,
        user_agent: Signal,
        device_fingerprint: Signal,
    ) -> IdentityKeys:
        ua = user_agent or ""
        return IdentityKeys(
            keys=(
                digest(network_address, ua[:PRIMARY_USER_AGENT_PREFIX], device_fingerprint, length=self._length),
                digest(network_address, device_fingerprint, length=self._length),
                digest(ua[:TERTIARY_USER_AGENT_PREFIX], device_fingerprint, length=self._length),
            )
        )


__all__ = ["DEFAULT_DIGEST_LENGTH", "IdentityDeriver", "IdentityKeys", "digest"]
