from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.locks import KeyedLock
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.state import AttendanceStateMachine
from .auth.service import AuthService
from .auth.tokens import TokenService
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .notifications.dispatcher import NotificationDispatcher
from .notifications.sender import build_mail_sender
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    dispatcher: NotificationDispatcher
    tokens: TokenService

    employee_service: EmployeeService
    auth_service: AuthService
    attendance_service: AttendanceService
    report_service: ReportService


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    dispatcher: NotificationDispatcher,
    tokens: TokenService,
    policy: AttendancePolicy,
    reset_token_ttl_seconds: int = constants.DEFAULT_RESET_TOKEN_TTL_SECONDS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over already-built repositories and infrastructure."""
    employee_service = EmployeeService(employees_repo)
    auth_service = AuthService(
        employees_repo,
        employee_service,
        tokens,
        dispatcher,
        reset_token_ttl_seconds=reset_token_ttl_seconds,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        employee_service,
        dispatcher,
        state_machine=AttendanceStateMachine(policy),
        locks=KeyedLock(),
    )
    report_service = ReportService(attendance_repo, employee_service)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        dispatcher=dispatcher,
        tokens=tokens,
        employee_service=employee_service,
        auth_service=auth_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container(settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    dispatcher = NotificationDispatcher(
        build_mail_sender(getattr(settings, "MAIL_CONFIG", None)),
        attempts=getattr(settings, "NOTIFY_ATTEMPTS", constants.DEFAULT_NOTIFY_ATTEMPTS),
        backoff_seconds=getattr(settings, "NOTIFY_BACKOFF_SECONDS", constants.DEFAULT_NOTIFY_BACKOFF_SECONDS),
        max_workers=getattr(settings, "NOTIFY_WORKERS", constants.DEFAULT_NOTIFY_WORKERS),
    )
    tokens = TokenService(
        getattr(settings, "JWT_SECRET"),
        expires_seconds=getattr(settings, "JWT_EXPIRES_SECONDS", constants.DEFAULT_JWT_EXPIRES_SECONDS),
    )
    policy = AttendancePolicy.from_settings(
        getattr(settings, "ARRIVAL_TIME", constants.DEFAULT_ARRIVAL_TIME),
        getattr(settings, "STANDARD_WORK_HOURS", constants.DEFAULT_STANDARD_WORK_HOURS),
    )

    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        dispatcher=dispatcher,
        tokens=tokens,
        policy=policy,
        reset_token_ttl_seconds=getattr(
            settings, "RESET_TOKEN_TTL_SECONDS", constants.DEFAULT_RESET_TOKEN_TTL_SECONDS
        ),
        conn=conn,
    )
