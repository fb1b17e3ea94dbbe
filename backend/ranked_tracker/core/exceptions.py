"""Service-level exception hierarchy.

Riot API errors live in ``core.riot_api.errors``; the classes here describe
failures of our own services so routers can map them to HTTP responses.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for service layer failures."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize ServiceException.

        Args:
            message: Human readable error message
            operation: Service operation that failed
            context: Extra structured context for logging
        """
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context: Dict[str, Any] = context or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class PlayerServiceError(ServiceException):
    """Generic player service failure."""

    pass


class PlayerNotFoundError(PlayerServiceError):
    """Player does not exist in our database or upstream."""

    pass


class PlayerAlreadyTrackedError(PlayerServiceError):
    """A player with the same PUUID is already tracked."""

    pass


class ValidationError(ServiceException):
    """Invalid user input (e.g. malformed Riot ID)."""

    pass


class ExternalServiceError(ServiceException):
    """Upstream (Riot API) failure surfaced to a caller."""

    pass
