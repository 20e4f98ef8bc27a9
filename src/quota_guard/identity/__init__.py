"""Identity – redundant identity-key derivation."""
from quota_guard.identity.deriver import DEFAULT_DIGEST_LENGTH, IdentityDeriver, IdentityKeys, digest

__all__ = ["DEFAULT_DIGEST_LENGTH", "IdentityDeriver", "IdentityKeys", "digest"]
