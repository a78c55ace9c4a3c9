from __future__ import annotations

from datetime import datetime

import pytest
from werkzeug.security import check_password_hash

from payroll_api.accounts.service import AccountService
from payroll_api.banking.service import BankingService
from payroll_api.common.pagination import PageRequest
from payroll_api.core.enums import AccountStatus, AccountType
from payroll_api.core.exceptions import NotFoundError, ValidationError
from payroll_api.employees.service import EmployeeService

EMPLOYEE = {
    "firstname": "John",
    "lastname": "Roe",
    "contact_number": "555-0199",
    "email": "john@example.com",
}


@pytest.fixture
def employees(employees_repo, accounts_repo, banking_repo):
    return EmployeeService(
        employees_repo, accounts_repo, banking_repo, today=lambda: datetime(2026, 3, 1, 9, 0, 0)
    )


@pytest.fixture
def accounts(accounts_repo, employees_repo):
    return AccountService(accounts_repo, employees_repo)


@pytest.fixture
def banking(banking_repo, employees_repo):
    return BankingService(banking_repo, employees_repo)


def test_employee_ids_are_year_plus_sequence(employees):
    first = employees.create_employee(EMPLOYEE)
    second = employees.create_employee(EMPLOYEE)

    assert first.employee_id == "202600001"
    assert second.employee_id == "202600002"


def test_employee_id_sequence_ignores_other_years(employees, employees_repo):
    employees_repo.create_employee(employee_id="202500042", **EMPLOYEE)
    assert employees.generate_employee_id() == "202600001"


def test_explicit_employee_id_is_kept_and_must_be_unique(employees):
    created = employees.create_employee({**EMPLOYEE, "employee_id": "X1"})
    assert created.employee_id == "X1"

    with pytest.raises(ValidationError):
        employees.create_employee({**EMPLOYEE, "employee_id": "X1"})


def test_create_employee_requires_fields(employees):
    with pytest.raises(ValidationError) as exc:
        employees.create_employee({"firstname": "A", "email": "not-an-email"})
    assert set(exc.value.errors) == {"lastname", "contact_number", "email"}


def test_get_with_details_includes_accounts_and_banking(employees, accounts, banking, seed_employee):
    accounts.create_account(
        {
            "employee_id": seed_employee,
            "account_email": "jane@platform.test",
            "account_password": "pw123456",
            "account_type": "Overflow",
        }
    )

    data = employees.get_with_details(seed_employee)

    assert data["employee_id"] == seed_employee
    assert [a["account_type"] for a in data["accounts"]] == ["Overflow"]
    assert "account_password" not in data["accounts"][0]
    assert [b["bank_account_number"] for b in data["banking_details"]] == ["111222333"]


def test_missing_employee_is_404(employees):
    with pytest.raises(NotFoundError):
        employees.get_employee("nope")


def test_update_and_delete_employee(employees, seed_employee):
    updated = employees.update_employee(seed_employee, {**EMPLOYEE, "firstname": "Janet"})
    assert updated.firstname == "Janet"

    employees.delete_employee(seed_employee)
    with pytest.raises(NotFoundError):
        employees.get_employee(seed_employee)


def test_account_password_is_hashed(accounts, accounts_repo, seed_employee):
    account = accounts.create_account(
        {
            "employee_id": seed_employee,
            "account_email": "jane@platform.test",
            "account_password": "plain-secret",
            "account_type": "Team Leader",
        }
    )

    assert account.account_status == AccountStatus.ACTIVE
    stored = accounts_repo.get_by_id(account.account_id)
    assert stored.password_hash != "plain-secret"
    assert check_password_hash(stored.password_hash, "plain-secret")


def test_account_type_must_be_known(accounts, seed_employee):
    with pytest.raises(ValidationError) as exc:
        accounts.create_account(
            {
                "employee_id": seed_employee,
                "account_email": "jane@platform.test",
                "account_password": "pw",
                "account_type": "Intern",
            }
        )
    assert "account_type" in exc.value.errors


def test_account_for_unknown_employee_is_rejected(accounts):
    with pytest.raises(ValidationError):
        accounts.create_account(
            {
                "employee_id": "missing",
                "account_email": "x@platform.test",
                "account_password": "pw",
                "account_type": "Overflow",
            }
        )


def test_account_update_requires_status(accounts, seed_employee):
    account = accounts.create_account(
        {
            "employee_id": seed_employee,
            "account_email": "jane@platform.test",
            "account_password": "pw",
            "account_type": "Overflow",
        }
    )
    with pytest.raises(ValidationError):
        accounts.update_account(
            account.account_id,
            {"employee_id": seed_employee, "account_email": "jane@platform.test", "account_type": "Overflow"},
        )

    updated = accounts.update_account(
        account.account_id,
        {
            "employee_id": seed_employee,
            "account_email": "jane@platform.test",
            "account_type": "Commissions",
            "account_status": "SUSPENDED",
        },
    )
    assert updated.account_type == AccountType.COMMISSIONS
    assert updated.account_status == AccountStatus.SUSPENDED


def test_account_list_filters_by_type(accounts, seed_employee):
    for kind in ("Overflow", "Overflow", "Commissions"):
        accounts.create_account(
            {
                "employee_id": seed_employee,
                "account_email": "a@platform.test",
                "account_password": "pw",
                "account_type": kind,
            }
        )

    page = accounts.list_accounts(PageRequest(page=1, per_page=10), account_type="Overflow")
    assert page.total == 2
    assert all(a.account_type == AccountType.OVERFLOW for a in page.items)


def test_duplicate_bank_account_number_rejected(banking, seed_employee):
    with pytest.raises(ValidationError) as exc:
        banking.create_detail(
            {
                "employee_id": seed_employee,
                "preferred_bank": "Other Bank",
                "bank_account_number": "111222333",
                "bank_account_name": "Jane Doe",
            }
        )
    assert str(exc.value) == "Banking detail with this account number already exists for this employee"


def test_banking_update_may_keep_own_account_number(banking, seed_employee):
    updated = banking.update_detail(
        1,
        {
            "employee_id": seed_employee,
            "preferred_bank": "Renamed Bank",
            "bank_account_number": "111222333",
            "bank_account_name": "Jane Doe",
        },
    )
    assert updated.preferred_bank == "Renamed Bank"
    assert updated.employee_name == "Jane Doe"


def test_banking_for_unknown_employee_is_404(banking):
    with pytest.raises(NotFoundError):
        banking.list_for_employee("missing")
