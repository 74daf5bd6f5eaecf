"""
ChartSignal Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from chartsignal.services.base import BaseService, InvalidInputError, ServiceError

__all__ = ["BaseService", "InvalidInputError", "ServiceError"]
