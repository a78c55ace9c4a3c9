from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import AccountService
from .banking.mysql_banking_repository import MySQLBankingRepository
from .banking.repository import BankingRepository
from .banking.service import BankingService
from .common.datetime_utils import now_ts
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payslips.mysql_payslip_repository import MySQLPayslipRepository
from .payslips.repository import PayslipRepository
from .payslips.service import PayslipRenderer, PayslipService
from .pdf.generator import PayslipPdfRenderer
from .security.auth_gate import AuthGate
from .security.cors import CORSPolicy
from .security.csrf import CSRFGate
from .security.token_codec import TokenCodec
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .settings import AppSettings
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    settings: AppSettings
    conn: Optional[DatabaseConnection]

    codec: TokenCodec
    auth_gate: AuthGate
    csrf_gate: CSRFGate
    cors: CORSPolicy

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    accounts_repo: AccountRepository
    banking_repo: BankingRepository
    payslips_repo: PayslipRepository
    sessions_repo: SessionRepository

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    account_service: AccountService
    banking_service: BankingService
    payslip_service: PayslipService


def assemble(
    settings: AppSettings,
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    accounts_repo: AccountRepository,
    banking_repo: BankingRepository,
    payslips_repo: PayslipRepository,
    sessions_repo: SessionRepository,
    renderer: Optional[PayslipRenderer] = None,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], int] = now_ts,
) -> Container:
    """Wire services and gates around the given repositories."""
    codec = TokenCodec(settings.jwt_secret, csrf_ttl=settings.csrf_token_expiry, clock=clock)
    if renderer is None:
        renderer = PayslipPdfRenderer(
            base_path=settings.pdf_path,
            company_name=settings.company_name,
            company_logo=settings.company_logo,
        )

    return Container(
        settings=settings,
        conn=conn,
        codec=codec,
        auth_gate=AuthGate(codec, sessions_repo, session_timeout=settings.session_timeout, clock=clock),
        csrf_gate=CSRFGate(codec, sessions=sessions_repo, enabled=settings.csrf_enabled),
        cors=CORSPolicy(
            allowed_origins=settings.cors_allowed_origins,
            frontend_url=settings.frontend_url,
            development=settings.is_development,
        ),
        users_repo=users_repo,
        employees_repo=employees_repo,
        accounts_repo=accounts_repo,
        banking_repo=banking_repo,
        payslips_repo=payslips_repo,
        sessions_repo=sessions_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        employee_service=EmployeeService(employees_repo, accounts_repo, banking_repo),
        account_service=AccountService(accounts_repo, employees_repo),
        banking_service=BankingService(banking_repo, employees_repo),
        payslip_service=PayslipService(payslips_repo, employees_repo, banking_repo, renderer),
    )


def build_container(settings: AppSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.db_config))
    return assemble(
        settings,
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        accounts_repo=MySQLAccountRepository(conn),
        banking_repo=MySQLBankingRepository(conn),
        payslips_repo=MySQLPayslipRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
    )
