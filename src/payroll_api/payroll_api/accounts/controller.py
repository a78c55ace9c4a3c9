from __future__ import annotations

from flask import Flask

from ..container import Container
from ..http.context import json_payload, page_request, query_arg
from ..http.responses import created, paginated, success


def register(app: Flask, container: Container) -> None:
    prefix = container.settings.api_prefix
    accounts = container.account_service

    @app.route(f"{prefix}/accounts", methods=["GET"], endpoint="accounts_list")
    def list_accounts():
        page = accounts.list_accounts(page_request(), search=query_arg("search"), account_type=query_arg("type"))
        return paginated(page, [a.to_dict() for a in page.items])

    @app.route(f"{prefix}/accounts/meta/types", methods=["GET"], endpoint="accounts_types")
    def account_types():
        return success("Account types retrieved successfully", accounts.account_types())

    @app.route(f"{prefix}/accounts/meta/statuses", methods=["GET"], endpoint="accounts_statuses")
    def account_statuses():
        return success("Account statuses retrieved successfully", accounts.account_statuses())

    @app.route(f"{prefix}/accounts/<int:account_id>", methods=["GET"], endpoint="accounts_get")
    def get_account(account_id: int):
        return success("Account retrieved successfully", accounts.get_account(account_id).to_dict())

    @app.route(f"{prefix}/accounts", methods=["POST"], endpoint="accounts_create")
    def create_account():
        return created("Account created successfully", accounts.create_account(json_payload()).to_dict())

    @app.route(f"{prefix}/accounts/<int:account_id>", methods=["PUT"], endpoint="accounts_update")
    def update_account(account_id: int):
        account = accounts.update_account(account_id, json_payload())
        return success("Account updated successfully", account.to_dict())

    @app.route(f"{prefix}/accounts/<int:account_id>", methods=["DELETE"], endpoint="accounts_delete")
    def delete_account(account_id: int):
        accounts.delete_account(account_id)
        return success("Account deleted successfully")
