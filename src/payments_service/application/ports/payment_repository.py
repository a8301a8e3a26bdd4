from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Any

from payments_service.application.ports.repository import Repository
from payments_service.domain.entities import Payment, Persisted

if TYPE_CHECKING:
    from uuid import UUID


class PaymentRepository(Repository[Payment[Any], Payment[Persisted]], ABC):
    """Port for payment persistence.

    Contract (in addition to Repository):
    - get() returns None if payment does not exist (no exception)
    - Returned payments are detached: mutating one does not change the
      stored row until it is passed to save()
    - No locking; concurrent saves of the same payment are last-writer-wins
    """

    async def get(self, payment_id: UUID) -> Payment[Persisted] | None:
        """Retrieve a payment by ID.

        Args:
            payment_id: The payment identifier.

        Returns:
            The loaded Payment if found and not soft-deleted, None otherwise.
        """
        return await self.find_one({"id": payment_id})
