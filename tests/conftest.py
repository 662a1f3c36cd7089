"""Test configuration and fixtures."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from dishka import AsyncContainer

from unid.domain.model import Binding, Identity
from unid.domain.service import IdentityService
from unid.domain.value import (
    AuthMethod,
    AuthType,
    BindingId,
    IdentityClaim,
    UniversalId,
)
from unid.persistence.repository.inmemory import InMemoryStore

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)


def method(shorthand: str) -> AuthMethod:
    """Build an auth method from ``type:value`` shorthand.

    Example: ``method("email:a@x.com")``.
    """
    auth_type, _, auth_value = shorthand.partition(":")
    return AuthMethod(auth_type=AuthType(auth_type), auth_value=auth_value)


async def make_identity(
    container: AsyncContainer, owner: str, name: str, *methods: str
) -> Identity:
    """Register an identity bound to the given ``type:value`` methods."""
    identity_service = await container.get(IdentityService)
    identity, _ = await identity_service.register_identity(
        owner, name, [method(m) for m in methods]
    )
    return identity


def seed_binding(
    store: InMemoryStore, universal_id: UniversalId, shorthand: str
) -> Binding:
    """Write a binding straight into the store, bypassing uniqueness checks.

    Only for reproducing legacy data that predates the unique constraint.
    """
    m = method(shorthand)
    binding = Binding(
        id=BindingId(uuid4()),
        universal_id=universal_id,
        auth_type=m.auth_type,
        auth_value=m.auth_value,
        created_at=datetime.now(timezone.utc),
    )
    store.bindings.append(binding)
    return binding


def bound_methods(store: InMemoryStore, universal_id: UniversalId) -> set[str]:
    """``type:value`` strings of an identity's bindings, read from the store."""
    return {str(b.method) for b in store.bindings if b.universal_id == universal_id}


def seed_identity(store: InMemoryStore, owner: str, name: str, *methods: str) -> Identity:
    """Write an identity and its bindings straight into the store."""
    identity = Identity(universal_id=UniversalId(uuid4()), owner=owner, name=name)
    store.identities[identity.universal_id] = identity
    for shorthand in methods:
        seed_binding(store, identity.universal_id, shorthand)
    return identity


def claim_for(identity: Identity) -> IdentityClaim:
    """The claim a valid token for the identity would carry."""
    return IdentityClaim(
        universal_id=identity.universal_id, owner=identity.owner, name=identity.name
    )
