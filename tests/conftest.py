from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from payroll_api.accounts.model import EmployeeAccount
from payroll_api.banking.model import BankingDetail
from payroll_api.container import assemble
from payroll_api.employees.model import Employee
from payroll_api.main import create_app
from payroll_api.payslips.model import Payslip, PayslipFilter
from payroll_api.security.token_codec import TokenCodec
from payroll_api.settings import AppSettings
from payroll_api.users.model import User


class FakeClock:
    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


def _contains(term: str, *values) -> bool:
    term = term.lower()
    return any(term in str(v or "").lower() for v in values)


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def _matching(self, search: str):
        items = sorted(self._users.values(), key=lambda u: u.id)
        if search:
            items = [u for u in items if _contains(search, u.firstname, u.lastname, u.username, u.email)]
        return items

    def list_paginated(self, *, search: str, limit: int, offset: int):
        return self._matching(search)[offset : offset + limit]

    def count(self, *, search: str = "") -> int:
        return len(self._matching(search))

    def count_by_role(self, role) -> int:
        return sum(1 for u in self._users.values() if u.role == role)

    def create_user(self, *, firstname, lastname, username, password_hash, email, role, status) -> int:
        uid = self._next_id
        self._next_id += 1
        self._users[uid] = User(
            id=uid,
            firstname=firstname,
            lastname=lastname,
            username=username,
            password_hash=password_hash,
            email=email,
            role=role,
            status=status,
        )
        return uid

    def update_user(self, user_id, *, firstname, lastname, username, email, role, status, password_hash=None) -> bool:
        current = self._users[int(user_id)]
        self._users[int(user_id)] = replace(
            current,
            firstname=firstname,
            lastname=lastname,
            username=username,
            email=email,
            role=role,
            status=status,
            password_hash=password_hash or current.password_hash,
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self._users.pop(int(user_id), None) is not None


class InMemoryEmployees:
    def __init__(self):
        self._rows: dict[str, Employee] = {}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._rows.get(str(employee_id))

    def _matching(self, search: str):
        items = sorted(self._rows.values(), key=lambda e: e.employee_id)
        if search:
            items = [
                e
                for e in items
                if _contains(search, e.employee_id, e.firstname, e.lastname, e.email, e.contact_number)
            ]
        return items

    def list_paginated(self, *, search: str, limit: int, offset: int):
        return self._matching(search)[offset : offset + limit]

    def count(self, *, search: str = "") -> int:
        return len(self._matching(search))

    def last_id_with_prefix(self, prefix: str) -> Optional[str]:
        ids = sorted(i for i in self._rows if i.startswith(prefix))
        return ids[-1] if ids else None

    def create_employee(self, *, employee_id, firstname, lastname, contact_number, email) -> None:
        self._rows[employee_id] = Employee(employee_id, firstname, lastname, contact_number, email)

    def update_employee(self, employee_id, *, firstname, lastname, contact_number, email) -> bool:
        self._rows[employee_id] = Employee(employee_id, firstname, lastname, contact_number, email)
        return True

    def delete_by_id(self, employee_id: str) -> bool:
        return self._rows.pop(str(employee_id), None) is not None


class InMemoryAccounts:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: dict[int, EmployeeAccount] = {}
        self._next_id = 1

    def _joined(self, account: EmployeeAccount) -> EmployeeAccount:
        employee = self._employees.get_by_id(account.employee_id)
        return replace(account, employee_name=employee.full_name if employee else None)

    def get_by_id(self, account_id: int) -> Optional[EmployeeAccount]:
        account = self._rows.get(int(account_id))
        return self._joined(account) if account else None

    def _matching(self, search, account_type):
        items = [self._joined(a) for a in sorted(self._rows.values(), key=lambda a: a.account_id)]
        if search:
            items = [a for a in items if _contains(search, a.account_id, a.account_email, a.employee_id, a.employee_name)]
        if account_type is not None:
            items = [a for a in items if a.account_type == account_type]
        return items

    def list_paginated(self, *, search, account_type, limit, offset):
        return self._matching(search, account_type)[offset : offset + limit]

    def count(self, *, search: str = "", account_type=None) -> int:
        return len(self._matching(search, account_type))

    def list_for_employee(self, employee_id: str):
        return [a for a in self._matching("", None) if a.employee_id == employee_id]

    def create_account(self, *, employee_id, account_email, password_hash, account_type, account_status) -> int:
        aid = self._next_id
        self._next_id += 1
        self._rows[aid] = EmployeeAccount(
            account_id=aid,
            employee_id=employee_id,
            account_email=account_email,
            account_type=account_type,
            account_status=account_status,
            password_hash=password_hash,
        )
        return aid

    def update_account(
        self, account_id, *, employee_id, account_email, account_type, account_status, password_hash=None
    ) -> bool:
        current = self._rows[int(account_id)]
        self._rows[int(account_id)] = replace(
            current,
            employee_id=employee_id,
            account_email=account_email,
            account_type=account_type,
            account_status=account_status,
            password_hash=password_hash or current.password_hash,
        )
        return True

    def delete_by_id(self, account_id: int) -> bool:
        return self._rows.pop(int(account_id), None) is not None


class InMemoryBanking:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: dict[int, BankingDetail] = {}
        self._next_id = 1

    def _joined(self, detail: BankingDetail) -> BankingDetail:
        employee = self._employees.get_by_id(detail.employee_id)
        return replace(detail, employee_name=employee.full_name if employee else None)

    def get_by_id(self, banking_id: int) -> Optional[BankingDetail]:
        detail = self._rows.get(int(banking_id))
        return self._joined(detail) if detail else None

    def _matching(self, search):
        items = [self._joined(b) for b in sorted(self._rows.values(), key=lambda b: b.id)]
        if search:
            items = [
                b
                for b in items
                if _contains(
                    search, b.id, b.employee_id, b.preferred_bank, b.bank_account_number, b.bank_account_name
                )
            ]
        return items

    def list_paginated(self, *, search, limit, offset):
        return self._matching(search)[offset : offset + limit]

    def count(self, *, search: str = "") -> int:
        return len(self._matching(search))

    def list_for_employee(self, employee_id: str):
        return [b for b in self._matching("") if b.employee_id == employee_id]

    def account_number_exists(self, employee_id, bank_account_number, *, exclude_id=None) -> bool:
        return any(
            b.employee_id == employee_id and b.bank_account_number == bank_account_number and b.id != exclude_id
            for b in self._rows.values()
        )

    def create_detail(self, *, employee_id, preferred_bank, bank_account_number, bank_account_name) -> int:
        bid = self._next_id
        self._next_id += 1
        self._rows[bid] = BankingDetail(bid, employee_id, preferred_bank, bank_account_number, bank_account_name)
        return bid

    def update_detail(self, banking_id, *, employee_id, preferred_bank, bank_account_number, bank_account_name):
        self._rows[int(banking_id)] = BankingDetail(
            int(banking_id), employee_id, preferred_bank, bank_account_number, bank_account_name
        )
        return True

    def delete_by_id(self, banking_id: int) -> bool:
        return self._rows.pop(int(banking_id), None) is not None


class InMemoryPayslips:
    def __init__(self, employees: InMemoryEmployees, banking: InMemoryBanking):
        self._employees = employees
        self._banking = banking
        self._rows: dict[int, Payslip] = {}
        self._next_id = 1

    def _joined(self, p: Payslip) -> Payslip:
        employee = self._employees.get_by_id(p.employee_id)
        bank = self._banking.get_by_id(p.bank_account_id)
        return replace(
            p,
            employee_name=employee.full_name if employee else None,
            preferred_bank=bank.preferred_bank if bank else None,
            bank_account_number=bank.bank_account_number if bank else None,
            bank_account_name=bank.bank_account_name if bank else None,
        )

    def _ordered(self):
        items = [self._joined(p) for p in self._rows.values()]
        return sorted(items, key=lambda p: (p.payment_date, p.id), reverse=True)

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        p = self._rows.get(int(payslip_id))
        return self._joined(p) if p else None

    def get_by_no(self, payslip_no: str) -> Optional[Payslip]:
        return next((p for p in self._ordered() if p.payslip_no == payslip_no), None)

    def _matching(self, flt: PayslipFilter):
        items = self._ordered()
        if flt.search:
            items = [
                p
                for p in items
                if _contains(flt.search, p.payslip_no, p.employee_id, p.employee_name, p.person_in_charge)
            ]
        if flt.status is not None:
            items = [p for p in items if p.payment_status == flt.status]
        if flt.start_date is not None:
            items = [p for p in items if p.payment_date >= flt.start_date]
        if flt.end_date is not None:
            items = [p for p in items if p.payment_date <= flt.end_date]
        return items

    def list_paginated(self, flt, *, limit, offset):
        return self._matching(flt)[offset : offset + limit]

    def count(self, flt) -> int:
        return len(self._matching(flt))

    def list_for_employee(self, employee_id: str):
        return [p for p in self._ordered() if p.employee_id == employee_id]

    def last_payslip_no(self) -> Optional[str]:
        if not self._rows:
            return None
        return self._rows[max(self._rows)].payslip_no

    def create_payslip(self, *, payslip_no, **fields) -> int:
        pid = self._next_id
        self._next_id += 1
        self._rows[pid] = Payslip(id=pid, payslip_no=payslip_no, **fields)
        return pid

    def update_payslip(self, payslip_id, **fields) -> bool:
        self._rows[int(payslip_id)] = replace(self._rows[int(payslip_id)], **fields)
        return True

    def update_pdf_paths(self, payslip_id, *, agent_pdf_path, admin_pdf_path) -> bool:
        self._rows[int(payslip_id)] = replace(
            self._rows[int(payslip_id)], agent_pdf_path=agent_pdf_path, admin_pdf_path=admin_pdf_path
        )
        return True

    def delete_by_id(self, payslip_id: int) -> bool:
        return self._rows.pop(int(payslip_id), None) is not None


class InMemorySessions:
    def __init__(self):
        self.rows: dict[str, int] = {}

    def open_session(self, session_id, *, now) -> None:
        self.rows[session_id] = int(now)

    def last_seen(self, session_id):
        return self.rows.get(session_id)

    def touch(self, session_id, *, now) -> None:
        if session_id in self.rows:
            self.rows[session_id] = max(self.rows[session_id], int(now))

    def revoke(self, session_id) -> None:
        self.rows.pop(session_id, None)

    def purge_idle(self, *, older_than) -> int:
        stale = [sid for sid, seen in self.rows.items() if seen < older_than]
        for sid in stale:
            del self.rows[sid]
        return len(stale)


class FakeRenderer:
    def __init__(self):
        self.rendered: list[tuple[str, str]] = []
        self.removed: list[str] = []
        self._n = 0

    def _render(self, kind, record):
        self._n += 1
        filename = f"{kind}_{record['payslip_no']}_{self._n}.pdf"
        self.rendered.append((kind, record["payslip_no"]))
        return {"filename": filename, "path": f"/pdfs/{kind}/{filename}", "full_path": f"/tmp/{filename}"}

    def render_agent(self, record):
        return self._render("agent", record)

    def render_admin(self, record):
        return self._render("admin", record)

    def remove(self, public_path):
        if not public_path:
            return False
        self.removed.append(public_path)
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def codec(clock):
    return TokenCodec("test-jwt-secret", csrf_ttl=3600, clock=clock)


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def accounts_repo(employees_repo):
    return InMemoryAccounts(employees_repo)


@pytest.fixture
def banking_repo(employees_repo):
    return InMemoryBanking(employees_repo)


@pytest.fixture
def payslips_repo(employees_repo, banking_repo):
    return InMemoryPayslips(employees_repo, banking_repo)


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def sessions_repo():
    return InMemorySessions()


@pytest.fixture
def settings():
    return AppSettings(
        secret_key="test-secret",
        jwt_secret="test-jwt-secret",
        app_env="testing",
        log_level="WARNING",
        frontend_url="http://frontend.test",
        cors_allowed_origins=("http://localhost:3000",),
        default_page_size=2,
        max_page_size=5,
    )


@pytest.fixture
def container(
    settings, users_repo, employees_repo, accounts_repo, banking_repo, payslips_repo, sessions_repo, renderer, clock
):
    return assemble(
        settings,
        users_repo=users_repo,
        employees_repo=employees_repo,
        accounts_repo=accounts_repo,
        banking_repo=banking_repo,
        payslips_repo=payslips_repo,
        sessions_repo=sessions_repo,
        renderer=renderer,
        clock=clock,
    )


@pytest.fixture
def app(container):
    flask_app = create_app(container=container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed_employee(employees_repo, banking_repo):
    employees_repo.create_employee(
        employee_id="202600001",
        firstname="Jane",
        lastname="Doe",
        contact_number="555-0100",
        email="jane@example.com",
    )
    banking_repo.create_detail(
        employee_id="202600001",
        preferred_bank="First Bank",
        bank_account_number="111222333",
        bank_account_name="Jane Doe",
    )
    return "202600001"


@pytest.fixture
def payslip_payload(seed_employee):
    return {
        "employee_id": seed_employee,
        "bank_account_id": 1,
        "salary": "1000.50",
        "bonus": "200",
        "person_in_charge": "Pat Manager",
        "cutoff_date": "2026-01-15",
        "payment_date": "2026-01-20",
        "payment_status": "Pending",
    }

