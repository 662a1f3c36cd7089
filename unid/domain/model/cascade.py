"""Cascade plan for removing a merged-away identity from dependent domains.

The plan is data: adding a dependent domain means adding a step, not
changing the merge flow.
"""

from pydantic import Field

from unid.domain.model.common import DomainModel
from unid.domain.value import IdentityKey


class CascadeStep(DomainModel):
    """Bulk delete of one dependent table, keyed by identity attributes.

    ``keys`` maps each column to match onto the identity attribute it
    stores. All columns must match for a row to be deleted.
    """

    table: str
    keys: dict[str, IdentityKey] = Field(min_length=1)


class CascadePlan(DomainModel):
    """Ordered cascade steps executed during a merge."""

    steps: tuple[CascadeStep, ...]

    @classmethod
    def default(cls) -> "CascadePlan":
        """Dependent domains cleared when an identity is merged away.

        Operation and audit records are not listed: they follow their own
        retention rules and keep referencing the deleted identity.
        """
        return cls(
            steps=(
                CascadeStep(table="tokens", keys={"user": IdentityKey.NAME}),
                CascadeStep(
                    table="sessions",
                    keys={"owner": IdentityKey.OWNER, "name": IdentityKey.NAME},
                ),
                CascadeStep(
                    table="verification_records",
                    keys={"user": IdentityKey.QUALIFIED_NAME},
                ),
                CascadeStep(table="resources", keys={"user": IdentityKey.NAME}),
                CascadeStep(table="payments", keys={"user": IdentityKey.NAME}),
                CascadeStep(table="transactions", keys={"user": IdentityKey.NAME}),
                CascadeStep(table="subscriptions", keys={"user": IdentityKey.NAME}),
            )
        )
