"""Identity use cases."""

from .bind_auth_method import BindAuthMethodUseCase
from .get_identity_info import GetIdentityInfoUseCase
from .merge_identities import MergeIdentitiesUseCase
from .register_identity import RegisterIdentityUseCase
from .unbind_auth_method import UnbindAuthMethodUseCase

__all__ = [
    "BindAuthMethodUseCase",
    "GetIdentityInfoUseCase",
    "MergeIdentitiesUseCase",
    "RegisterIdentityUseCase",
    "UnbindAuthMethodUseCase",
]
