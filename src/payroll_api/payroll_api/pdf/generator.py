from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping

from fpdf import FPDF, XPos, YPos

from ..common.datetime_utils import now_local, parse_iso_date
from ..core.enums import PaymentStatus
from ..core.logging import get_logger

log = get_logger(__name__)

PUBLIC_PREFIX = "/pdfs"
AGENT_DIR = "agent"
ADMIN_DIR = "admin"

_STATUS_COLOURS = {
    PaymentStatus.PAID.value: (0, 128, 0),
    PaymentStatus.PENDING.value: (255, 128, 0),
}
_DEFAULT_STATUS_COLOUR = (255, 0, 0)


def _latin1(value: Any) -> str:
    # Core PDF fonts only cover latin-1.
    return str(value if value is not None else "").encode("latin-1", "replace").decode("latin-1")


def _money(value: Any) -> str:
    return f"{float(value or 0):,.2f}"


def _long_date(value: Any) -> str:
    if not value:
        return ""
    day = value if not isinstance(value, str) else parse_iso_date(value[:10])
    return day.strftime("%B %d, %Y")


class PayslipPdfRenderer:
    """Writes the agent and admin copies of a payslip.

    Files go to `<base_path>/agent` and `<base_path>/admin`; the stored
    `path` is the public one (`/pdfs/agent/<file>`).
    """

    def __init__(
        self,
        *,
        base_path: str | Path,
        company_name: str,
        company_logo: str = "",
        clock: Callable[[], datetime] = now_local,
    ):
        self._base = Path(base_path)
        self._company_name = company_name
        self._company_logo = company_logo
        self._clock = clock

    def render_agent(self, record: Mapping[str, Any]) -> dict:
        pdf = self._start(record, "AGENT PAYSLIP", title="Agent Payslip")
        self._employee_block(pdf, record)
        self._line(pdf, "Payment Date:", _long_date(record.get("payment_date")))
        pdf.ln(5)
        self._heading(pdf, "Payment Information")
        self._amounts_table(pdf, record)
        pdf.ln(10)
        self._footer(pdf, "This is a system-generated document. No signature required.")
        return self._write(pdf, AGENT_DIR, record)

    def render_admin(self, record: Mapping[str, Any]) -> dict:
        pdf = self._start(record, "ADMIN PAYSLIP", title="Admin Payslip")
        self._employee_block(pdf, record)
        pdf.ln(5)

        bank = record.get("bank_details") or {}
        self._heading(pdf, "Banking Information")
        pdf.set_font("Helvetica", "", 10)
        self._line(pdf, "Bank Name:", bank.get("preferred_bank"))
        self._line(pdf, "Account Number:", bank.get("bank_account_number"))
        self._line(pdf, "Account Name:", bank.get("bank_account_name"))
        pdf.ln(5)

        self._heading(pdf, "Payment Information")
        pdf.set_font("Helvetica", "", 10)
        self._line(pdf, "Person In Charge:", record.get("person_in_charge"))
        self._line(pdf, "Payment Date:", _long_date(record.get("payment_date")))
        self._amounts_table(pdf, record)
        pdf.ln(5)

        status = str(record.get("payment_status") or "")
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(50, 8, "Payment Status:")
        pdf.set_text_color(*_STATUS_COLOURS.get(status, _DEFAULT_STATUS_COLOUR))
        pdf.cell(0, 8, _latin1(status), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_text_color(0)
        pdf.ln(10)

        pdf.cell(0, 8, "Authorized by: _________________________", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.cell(0, 8, "Date: _________________________", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(5)
        self._footer(pdf, "This is a system-generated document.")
        return self._write(pdf, ADMIN_DIR, record)

    def resolve(self, public_path: str) -> Path:
        """Map a stored `/pdfs/...` path back onto the filesystem."""
        rel = public_path
        if rel.startswith(PUBLIC_PREFIX + "/"):
            rel = rel[len(PUBLIC_PREFIX) + 1 :]
        return self._base / rel.lstrip("/")

    def remove(self, public_path: str | None) -> bool:
        if not public_path:
            return False
        target = self.resolve(public_path)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        log.info("payslip_pdf_removed", path=public_path)
        return True

    def _start(self, record: Mapping[str, Any], heading: str, *, title: str) -> FPDF:
        pdf = FPDF()
        pdf.add_page()
        pdf.set_title(_latin1(f"{title} - {record.get('payslip_no', '')}"))
        pdf.set_author(_latin1(self._company_name))
        pdf.set_creator("Pay Slip Generator")

        if self._company_logo and os.path.isfile(self._company_logo):
            pdf.image(self._company_logo, 10, 10, 30)

        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(0, 10, _latin1(self._company_name), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(10)

        pdf.set_font("Helvetica", "B", 14)
        pdf.cell(0, 10, heading, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(
            0, 5, _latin1(f"Payslip No: {record.get('payslip_no', '')}"), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(10)
        return pdf

    def _heading(self, pdf: FPDF, text: str) -> None:
        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(0, 10, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def _line(self, pdf: FPDF, label: str, value: Any) -> None:
        pdf.cell(50, 8, label)
        pdf.cell(0, 8, _latin1(value), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def _employee_block(self, pdf: FPDF, record: Mapping[str, Any]) -> None:
        self._heading(pdf, "Employee Information")
        pdf.set_font("Helvetica", "", 10)
        self._line(pdf, "Agent Name:", record.get("employee_name"))
        self._line(pdf, "Employee ID:", record.get("employee_id"))

    def _amounts_table(self, pdf: FPDF, record: Mapping[str, Any]) -> None:
        pdf.set_fill_color(240, 240, 240)
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(100, 8, "Description", border=1, align="L", fill=True)
        pdf.cell(60, 8, "Amount", border=1, align="R", fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "", 10)
        for label, key in (("Salary", "salary"), ("Bonus", "bonus")):
            pdf.cell(100, 8, label, border=1, align="L")
            pdf.cell(60, 8, _money(record.get(key)), border=1, align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(100, 8, "Total", border=1, align="L", fill=True)
        pdf.cell(
            60, 8, _money(record.get("total_salary")), border=1, align="R", fill=True,
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

    def _footer(self, pdf: FPDF, text: str) -> None:
        pdf.set_font("Helvetica", "I", 8)
        pdf.cell(0, 10, text, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def _write(self, pdf: FPDF, kind: str, record: Mapping[str, Any]) -> dict:
        folder = self._base / kind
        folder.mkdir(parents=True, exist_ok=True)
        filename = f"{kind}_{record.get('payslip_no', '')}_{self._clock().strftime('%Y%m%d_%H%M%S')}.pdf"
        full_path = folder / filename
        pdf.output(str(full_path))
        log.info("payslip_pdf_written", kind=kind, payslip_no=record.get("payslip_no"), filename=filename)
        return {
            "filename": filename,
            "path": f"{PUBLIC_PREFIX}/{kind}/{filename}",
            "full_path": str(full_path),
        }
