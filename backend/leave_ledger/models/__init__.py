from sqlmodel import SQLModel

from leave_ledger.models.balance import LeaveBalance
from leave_ledger.models.base import TimestampMixin, UUIDBase
from leave_ledger.models.enums import LeaveRequestStatus, LeaveUnit, RenewalPeriod, ReviewDecision
from leave_ledger.models.leave_type import LeaveType
from leave_ledger.models.policy import EmployeeLeaveSetting, LeavePolicy
from leave_ledger.models.request import LeaveRequest

__all__ = [
    "EmployeeLeaveSetting",
    "LeaveBalance",
    "LeavePolicy",
    "LeaveRequest",
    "LeaveRequestStatus",
    "LeaveType",
    "LeaveUnit",
    "RenewalPeriod",
    "ReviewDecision",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
