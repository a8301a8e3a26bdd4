"""Entrypoints layer - Composition and response presentation.

This layer contains:
- Bootstrap: builds the Application (engine, repository, processor, use cases)
- Presenters: turn loaded payments and pages into wire-ready dictionaries

No HTTP or CLI surface ships here; a delivery mechanism calls the use cases
on an Application and renders results with the presenters.
"""

from payments_service.entrypoints.bootstrap import Application, build_application
from payments_service.entrypoints.presenters import PaymentListResponse, PaymentResponse

__all__ = [
    "Application",
    "PaymentListResponse",
    "PaymentResponse",
    "build_application",
]
