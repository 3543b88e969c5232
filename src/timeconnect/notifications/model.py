from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class OutgoingEmail:
    to_email: str
    to_name: str
    subject: str
    body: str


@dataclass(frozen=True)
class AttendanceNotification:
    """Payload queued after every clock-in/clock-out."""

    employee_email: str
    employee_name: str
    date: str
    clock_in: str
    clock_out: str
    active_hours: Decimal
    status: str

    def to_email(self) -> OutgoingEmail:
        body = (
            f"Hello {self.employee_name},\n\n"
            f"Please find the generated Attendance for {self.date}.\n\n"
            f"Clock in: {self.clock_in}\n"
            f"Clock out: {self.clock_out}\n"
            f"Active hours: {self.active_hours:.2f}\n"
            f"Status: {self.status}\n\n"
            "Regards,\n"
            "TimeConnect\n"
        )
        return OutgoingEmail(
            to_email=self.employee_email,
            to_name=self.employee_name,
            subject=f"{self.employee_email} Attendance Report",
            body=body,
        )


@dataclass(frozen=True)
class PasswordResetNotification:
    employee_email: str
    employee_name: str
    token: str
    valid_minutes: int

    def to_email(self) -> OutgoingEmail:
        body = (
            f"Hello {self.employee_name},\n\n"
            f"Your password reset token is: {self.token}\n\n"
            f"It is valid for {self.valid_minutes} minutes and can be used once.\n"
            "If you did not request a reset, you can ignore this email.\n\n"
            "Regards,\n"
            "TimeConnect\n"
        )
        return OutgoingEmail(
            to_email=self.employee_email,
            to_name=self.employee_name,
            subject="TimeConnect Password Reset",
            body=body,
        )
