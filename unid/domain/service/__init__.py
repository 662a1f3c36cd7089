"""Domain services."""

from .base import Service
from .binding_service import BindingService
from .identity_service import IdentityService
from .jwt_service import JWTService
from .login_service import CredentialVerifier, LoginService
from .merge_service import MergeService, authorize_merge

__all__ = [
    "BindingService",
    "CredentialVerifier",
    "IdentityService",
    "JWTService",
    "LoginService",
    "MergeService",
    "Service",
    "authorize_merge",
]
