"""Application ports - interfaces for external adapters."""

from erpaccess.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "UnitOfWork",
    "UnitOfWorkFactory",
]
