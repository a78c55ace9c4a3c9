from __future__ import annotations

from flask import Flask

from ..container import Container
from ..http.context import json_payload, page_request, query_arg
from ..http.responses import created, paginated, success


def register(app: Flask, container: Container) -> None:
    prefix = container.settings.api_prefix
    banking = container.banking_service

    @app.route(f"{prefix}/banking", methods=["GET"], endpoint="banking_list")
    def list_banking():
        page = banking.list_details(page_request(), search=query_arg("search"))
        return paginated(page, [b.to_dict() for b in page.items])

    @app.route(f"{prefix}/banking/<int:banking_id>", methods=["GET"], endpoint="banking_get")
    def get_banking(banking_id: int):
        return success("Banking detail retrieved successfully", banking.get_detail(banking_id).to_dict())

    @app.route(f"{prefix}/banking/<employee_id>/employee", methods=["GET"], endpoint="banking_for_employee")
    def banking_for_employee(employee_id: str):
        items = banking.list_for_employee(employee_id)
        return success("Banking details retrieved successfully", [b.to_dict() for b in items])

    @app.route(f"{prefix}/banking", methods=["POST"], endpoint="banking_create")
    def create_banking():
        return created("Banking detail created successfully", banking.create_detail(json_payload()).to_dict())

    @app.route(f"{prefix}/banking/<int:banking_id>", methods=["PUT"], endpoint="banking_update")
    def update_banking(banking_id: int):
        detail = banking.update_detail(banking_id, json_payload())
        return success("Banking detail updated successfully", detail.to_dict())

    @app.route(f"{prefix}/banking/<int:banking_id>", methods=["DELETE"], endpoint="banking_delete")
    def delete_banking(banking_id: int):
        banking.delete_detail(banking_id)
        return success("Banking detail deleted successfully")
