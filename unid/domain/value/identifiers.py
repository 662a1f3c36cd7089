"""Strongly typed identifiers for identity entities.

NewType keeps a universal id from being passed where a binding id is
expected.
"""

from typing import NewType
from uuid import UUID

UniversalId = NewType("UniversalId", UUID)
BindingId = NewType("BindingId", UUID)
