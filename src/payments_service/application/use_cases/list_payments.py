from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from payments_service.application.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Pagination
from payments_service.domain.exceptions import InvalidPaginationError

if TYPE_CHECKING:
    from payments_service.application.pagination import Page
    from payments_service.application.ports import PaymentRepository
    from payments_service.domain.entities import Payment, Persisted


@dataclass(frozen=True, slots=True)
class ListPaymentsQuery:
    """Input DTO for list payments use case.

    customer_id narrows the listing to one customer; None lists everything.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    customer_id: str | None = None


class ListPaymentsUseCase:
    """Returns one page of loaded payments, newest first."""

    def __init__(self, payment_repository: PaymentRepository, max_limit: int | None = None) -> None:
        self._payment_repo = payment_repository
        self._max_limit = max_limit

    async def execute(self, query: ListPaymentsQuery) -> Page[Payment[Persisted]]:
        """Execute the list payments query.

        Raises:
            InvalidPaginationError: page or limit below 1, or limit above
                the configured maximum.
        """
        pagination = Pagination(page=query.page, limit=query.limit)
        if self._max_limit is not None and pagination.limit > self._max_limit:
            raise InvalidPaginationError(
                f"limit must be at most {self._max_limit}, got {pagination.limit}"
            )

        criteria: dict[str, Any] = {}
        if query.customer_id is not None:
            criteria["customer_id"] = query.customer_id

        return await self._payment_repo.find_with_pagination(criteria, pagination)
