"""Persistence adapters: row shapes, mappers, tables and repositories.

Two repository families implement the same port: InMemory* for tests and
local runs, Sql* for SQLAlchemy-backed storage.
"""

from payments_service.infrastructure.persistence.database import create_engine, create_schema, drop_schema
from payments_service.infrastructure.persistence.in_memory import InMemoryPaymentRepository, InMemoryRepository
from payments_service.infrastructure.persistence.mapper import Mapper
from payments_service.infrastructure.persistence.payment_mapper import PaymentMapper
from payments_service.infrastructure.persistence.rows import BaseRow, PaymentRow
from payments_service.infrastructure.persistence.sql_repository import SqlPaymentRepository, SqlRepository
from payments_service.infrastructure.persistence.tables import payments_table

__all__ = [
    "BaseRow",
    "InMemoryPaymentRepository",
    "InMemoryRepository",
    "Mapper",
    "PaymentMapper",
    "PaymentRow",
    "SqlPaymentRepository",
    "SqlRepository",
    "create_engine",
    "create_schema",
    "drop_schema",
    "payments_table",
]
