from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.service import ChainAuditor
from .auth.claims import ClaimsDecoder
from .common.crypto import FernetFieldCipher, FieldCipher
from .database.connection import DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .ledger.mysql_ledger_repository import MySQLLedgerRepository
from .ledger.repository import LedgerRepository
from .ledger.service import LedgerService
from .ledger.validator import EventValidator
from .organization.mysql_employee_repository import MySQLEmployeeDirectory
from .organization.mysql_work_category_repository import MySQLWorkCategoryRepository
from .organization.repository import EmployeeDirectory, WorkCategoryRepository
from .organization.service import WorkCategoryService
from .payroll.service import TimesheetService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    decoder: ClaimsDecoder
    cipher: FieldCipher

    ledger_repo: LedgerRepository
    attendance_repo: AttendanceRepository
    employees_repo: EmployeeDirectory
    categories_repo: WorkCategoryRepository
    leaves_repo: LeaveRepository

    work_category_service: WorkCategoryService
    ledger_service: LedgerService
    attendance_service: AttendanceService
    timesheet_service: TimesheetService
    chain_auditor: ChainAuditor

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    decoder: ClaimsDecoder,
    cipher: FieldCipher,
    ledger_repo: LedgerRepository,
    attendance_repo: AttendanceRepository,
    employees_repo: EmployeeDirectory,
    categories_repo: WorkCategoryRepository,
    leaves_repo: LeaveRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services onto any set of repositories (MySQL or in-memory)."""
    work_category_service = WorkCategoryService(categories_repo, employees_repo, cipher)
    ledger_service = LedgerService(
        ledger_repo,
        employees_repo,
        work_category_service,
        cipher,
        validator=EventValidator(work_category_service),
    )
    attendance_service = AttendanceService(
        attendance_repo,
        ledger_repo,
        employees_repo,
        leaves_repo,
        work_category_service,
        cipher,
    )
    timesheet_service = TimesheetService(ledger_repo, employees_repo)
    chain_auditor = ChainAuditor(ledger_repo, employees_repo)

    return Container(
        decoder=decoder,
        cipher=cipher,
        ledger_repo=ledger_repo,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        categories_repo=categories_repo,
        leaves_repo=leaves_repo,
        work_category_service=work_category_service,
        ledger_service=ledger_service,
        attendance_service=attendance_service,
        timesheet_service=timesheet_service,
        chain_auditor=chain_auditor,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    encryption_key: str = "",
    debug: bool = False,
) -> Container:
    if not encryption_key:
        if not debug:
            raise RuntimeError("FIELD_ENCRYPTION_KEY must be set")
        # Ciphertext written with a throwaway key is unreadable after restart.
        logger.warning("FIELD_ENCRYPTION_KEY not set, using a temporary key")
        encryption_key = FernetFieldCipher.generate_key()

    conn = DatabaseConnection.from_dict(db_config)

    return assemble(
        decoder=ClaimsDecoder(jwt_secret, jwt_algorithm),
        cipher=FernetFieldCipher(encryption_key),
        ledger_repo=MySQLLedgerRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        employees_repo=MySQLEmployeeDirectory(conn),
        categories_repo=MySQLWorkCategoryRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        conn=conn,
    )
