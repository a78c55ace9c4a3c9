from __future__ import annotations

from flask import Flask

from ..container import Container
from ..http.context import json_payload, page_request, query_arg
from ..http.responses import created, paginated, success


def register(app: Flask, container: Container) -> None:
    prefix = container.settings.api_prefix
    employees = container.employee_service

    @app.route(f"{prefix}/employees", methods=["GET"], endpoint="employees_list")
    def list_employees():
        page = employees.list_employees(page_request(), search=query_arg("search"))
        return paginated(page, [e.to_dict() for e in page.items])

    @app.route(f"{prefix}/employees/<employee_id>", methods=["GET"], endpoint="employees_get")
    def get_employee(employee_id: str):
        return success("Employee retrieved successfully", employees.get_with_details(employee_id))

    @app.route(f"{prefix}/employees", methods=["POST"], endpoint="employees_create")
    def create_employee():
        return created("Employee created successfully", employees.create_employee(json_payload()).to_dict())

    @app.route(f"{prefix}/employees/<employee_id>", methods=["PUT"], endpoint="employees_update")
    def update_employee(employee_id: str):
        employee = employees.update_employee(employee_id, json_payload())
        return success("Employee updated successfully", employee.to_dict())

    @app.route(f"{prefix}/employees/<employee_id>", methods=["DELETE"], endpoint="employees_delete")
    def delete_employee(employee_id: str):
        employees.delete_employee(employee_id)
        return success("Employee deleted successfully")

    @app.route(f"{prefix}/employees/<employee_id>/accounts", methods=["GET"], endpoint="employees_accounts")
    def employee_accounts(employee_id: str):
        items = container.account_service.list_for_employee(employee_id)
        return success("Accounts retrieved successfully", [a.to_dict() for a in items])

    @app.route(f"{prefix}/employees/<employee_id>/accounts", methods=["POST"], endpoint="employees_add_account")
    def add_employee_account(employee_id: str):
        employees.get_employee(employee_id)
        data = {**json_payload(), "employee_id": employee_id}
        account = container.account_service.create_account(data)
        return created("Account created successfully", account.to_dict())

    @app.route(f"{prefix}/employees/<employee_id>/banking", methods=["GET"], endpoint="employees_banking")
    def employee_banking(employee_id: str):
        items = container.banking_service.list_for_employee(employee_id)
        return success("Banking details retrieved successfully", [b.to_dict() for b in items])

    @app.route(f"{prefix}/employees/<employee_id>/banking", methods=["POST"], endpoint="employees_add_banking")
    def add_employee_banking(employee_id: str):
        employees.get_employee(employee_id)
        data = {**json_payload(), "employee_id": employee_id}
        detail = container.banking_service.create_detail(data)
        return created("Banking detail created successfully", detail.to_dict())
