from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EditRequestStatus
from .model import EditRequest, NewEditRequest


class EditRequestRepository(Protocol):
    def create(self, request: NewEditRequest) -> str:
        raise NotImplementedError

    def get(self, *, request_id: str) -> Optional[EditRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[EditRequestStatus] = None,
        employee_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[EditRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: str,
        status: EditRequestStatus,
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> bool:
        """Move a PENDING request to ``status``; False when it is no longer pending."""

        raise NotImplementedError
