"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   └── InputError
    │       └── UnknownActionError
    └── InfrastructureError  (infrastructure.py)
        └── StoreError
            └── StoreTimeoutError
"""

from quota_guard.kernel.errors.application import (
    ApplicationError,
    InputError,
    UnknownActionError,
)
from quota_guard.kernel.errors.base import BaseError
from quota_guard.kernel.errors.infrastructure import (
    InfrastructureError,
    StoreError,
    StoreTimeoutError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "InputError",
    "StoreError",
    "StoreTimeoutError",
    "UnknownActionError",
]
