"""
Oracle Vision Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from app.services.base import BaseService

__all__ = ["BaseService"]
