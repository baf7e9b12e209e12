"""BaseService — shared foundation for visitctl services.

Every service receives a :class:`Journal` at construction time and owns
its transaction boundaries via ``self._journal.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from visitctl.domain.errors import VisitError
from visitctl.services.result import ServiceResult

if TYPE_CHECKING:
    from visitctl.infrastructure.journal import Journal


class BaseService:
    """Base for service-layer classes.

    Usage::

        class VisitService(BaseService):
            def add_visits(self, ...) -> ServiceResult:
                with self._journal.transaction() as txn:
                    ...
    """

    def __init__(self, journal: Journal) -> None:
        self._journal = journal

    @staticmethod
    def _rejected(op: str, exc: VisitError) -> ServiceResult:
        """Translate a domain validation error into a failed result."""
        return ServiceResult.failure(op, exc.code, exc.message, exc.detail)
