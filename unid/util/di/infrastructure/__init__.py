"""Infrastructure providers."""

# Import bases
from .credential import CredentialProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .credential import ProdCredentialProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CredentialProvider",
    "PersistenceProvider",
    "ProdCredentialProvider",
    "ProdPersistenceProvider",
]
