from __future__ import annotations

from flask import Flask

from ..container import Container
from ..http.context import admin_required, json_payload, page_request, query_arg
from ..http.responses import created, paginated, success


def register(app: Flask, container: Container) -> None:
    prefix = container.settings.api_prefix
    payslips = container.payslip_service

    @app.route(f"{prefix}/payslips", methods=["GET"], endpoint="payslips_list")
    def list_payslips():
        page = payslips.list_payslips(
            page_request(),
            search=query_arg("search"),
            status=query_arg("status"),
            start_date=query_arg("start_date"),
            end_date=query_arg("end_date"),
        )
        return paginated(page, [p.to_dict() for p in page.items])

    @app.route(f"{prefix}/payslips/meta/statuses", methods=["GET"], endpoint="payslips_statuses")
    def payslip_statuses():
        return success("Payment statuses retrieved successfully", payslips.payment_statuses())

    @app.route(f"{prefix}/payslips/<key>", methods=["GET"], endpoint="payslips_get")
    def get_payslip(key: str):
        return success("Payslip retrieved successfully", payslips.get_payslip(key).to_dict())

    @app.route(f"{prefix}/payslips/<employee_id>/employee", methods=["GET"], endpoint="payslips_for_employee")
    def payslips_for_employee(employee_id: str):
        items = payslips.list_for_employee(employee_id)
        return success("Payslips retrieved successfully", [p.to_dict() for p in items])

    @app.route(f"{prefix}/payslips", methods=["POST"], endpoint="payslips_create")
    def create_payslip():
        return created("Payslip created successfully", payslips.create_payslip(json_payload()).to_dict())

    @app.route(f"{prefix}/payslips/<int:payslip_id>", methods=["PUT"], endpoint="payslips_update")
    def update_payslip(payslip_id: int):
        payslip = payslips.update_payslip(payslip_id, json_payload())
        return success("Payslip updated successfully", payslip.to_dict())

    @app.route(f"{prefix}/payslips/<int:payslip_id>/generate-pdf", methods=["POST"], endpoint="payslips_pdf")
    def regenerate_pdf(payslip_id: int):
        return success("PDFs regenerated successfully", payslips.regenerate_pdfs(payslip_id))

    @app.route(f"{prefix}/payslips/<int:payslip_id>", methods=["DELETE"], endpoint="payslips_delete")
    @admin_required
    def delete_payslip(payslip_id: int):
        payslips.delete_payslip(payslip_id)
        return success("Payslip deleted successfully")
