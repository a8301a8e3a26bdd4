from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class TimeProvider(ABC):
    """Port for the clock used to stamp stored rows.

    Contract:
    - now() MUST return a datetime with tzinfo=datetime.UTC
    - now() MUST NOT return naive datetimes under any circumstance

    Repository adapters call now() for created_at/updated_at; the domain
    never reads the clock.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current UTC datetime (tzinfo=datetime.UTC)."""
        ...
