from __future__ import annotations

import enum


class LeaveUnit(enum.StrEnum):
    """Unit a leave type, policy, balance or request is measured in."""

    HOUR = "HOUR"
    DAY = "DAY"


class RenewalPeriod(enum.StrEnum):
    """Cadence at which a policy's entitlement is granted again."""

    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class LeaveRequestStatus(enum.StrEnum):
    """State machine for leave requests."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReviewDecision(enum.StrEnum):
    """Admin decision on a leave request."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"

    @property
    def target_status(self) -> LeaveRequestStatus:
        if self is ReviewDecision.APPROVE:
            return LeaveRequestStatus.APPROVED
        return LeaveRequestStatus.REJECTED
