# backend/portfolio_api/services/exceptions.py
"""
Service layer exceptions.

These exceptions carry NO HTTP knowledge. Each one exposes `details`, the
structured context the global handlers in main.py put in the error body;
choosing the status code is the handlers' job.

Exception Hierarchy:
    ServiceError (base)
    └── NotFoundError
        └── PortfolioNotFoundError

Note:
    PerformanceService itself signals a missing portfolio by returning None.
    The router turns that into PortfolioNotFoundError.
"""

from typing import Any


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    @property
    def details(self) -> dict[str, Any] | None:
        """Structured context for the error body (None if there is none)."""
        return None


class NotFoundError(ServiceError):
    """A requested resource does not exist."""

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)

    @property
    def details(self) -> dict[str, Any] | None:
        if self.resource_type is None:
            return None
        return {"resource_type": self.resource_type, "resource_id": self.resource_id}


class PortfolioNotFoundError(NotFoundError):
    """No portfolio with the given ID."""

    def __init__(self, portfolio_id: int) -> None:
        self.portfolio_id = portfolio_id
        super().__init__(
            f"Portfolio {portfolio_id} not found",
            resource_type="Portfolio",
            resource_id=portfolio_id,
        )

    @property
    def details(self) -> dict[str, Any]:
        return {"portfolio_id": self.portfolio_id}


__all__ = [
    "ServiceError",
    "NotFoundError",
    "PortfolioNotFoundError",
]
