"""Composition root.

All wiring is explicit constructor injection; nothing is registered in a
container. Tests pass their own engine, processor and clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from payments_service.application.use_cases import (
    CreatePaymentUseCase,
    GetPaymentUseCase,
    ListPaymentsUseCase,
)
from payments_service.config import get_settings
from payments_service.infrastructure import (
    RandomPaymentProcessor,
    SqlPaymentRepository,
    SystemTimeProvider,
)
from payments_service.infrastructure.persistence import create_engine

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from payments_service.application.ports import PaymentProcessor, PaymentRepository, TimeProvider
    from payments_service.config import Settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Application:
    settings: Settings
    engine: AsyncEngine
    payment_repository: PaymentRepository
    create_payment: CreatePaymentUseCase
    get_payment: GetPaymentUseCase
    list_payments: ListPaymentsUseCase

    async def dispose(self) -> None:
        """Release pooled database connections."""
        await self.engine.dispose()


def build_application(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    processor: PaymentProcessor | None = None,
    time_provider: TimeProvider | None = None,
) -> Application:
    """Wire the SQL repository, processor and use cases.

    Args:
        settings: Defaults to get_settings().
        engine: Reuse an existing engine instead of creating one from
            settings.database_url.
        processor: Defaults to RandomPaymentProcessor at
            settings.processing_success_rate.
        time_provider: Defaults to the system clock.

    The schema is not created here; call create_schema() for local runs.
    """
    settings = settings or get_settings()
    engine = engine or create_engine(settings)
    processor = processor or RandomPaymentProcessor(settings.processing_success_rate)
    repository = SqlPaymentRepository(engine, time_provider or SystemTimeProvider())

    logger.info(
        "application_built",
        app_env=settings.app_env,
        processor=type(processor).__name__,
    )
    return Application(
        settings=settings,
        engine=engine,
        payment_repository=repository,
        create_payment=CreatePaymentUseCase(repository, processor),
        get_payment=GetPaymentUseCase(repository),
        list_payments=ListPaymentsUseCase(repository, max_limit=settings.max_page_size),
    )
