# services/report_service.py
"""
Lease report: one row per visible lease with what was paid against it,
rendered as a landscape A4 PDF.
"""
from datetime import date
from decimal import Decimal
from io import BytesIO
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy.orm import Session

from models import Lease, User
from services.authorization import Action, authorize
from services.lease_service import LeaseService

HEADERS = ["Tenant", "Local", "Start Date", "End Date", "Lease Amount", "Paid", "Balance", "Status"]

STATUS_COLORS = {
     "active": colors.HexColor("#228b22"),
     "expired": colors.HexColor("#ff4500"),
     "cancelled": colors.HexColor("#808080"),
}


def lease_report_rows(db: Session, user: User) -> List[dict]:
     authorize(user, "lease", Action.REPORT)
     leases: List[Lease] = LeaseService.list_query(db, user).all()
     rows = []
     for lease in leases:
          amount = Decimal(str(lease.lease_amount or 0))
          paid = LeaseService.total_paid(db, lease.id)
          rows.append({
               "tenant": lease.tenant.name if lease.tenant else "-",
               "local": lease.local.reference_code if lease.local else "-",
               "start_date": lease.start_date,
               "end_date": lease.end_date,
               "lease_amount": amount,
               "paid": paid,
               "balance": amount - paid,
               "status": lease.status.value,
          })
     return rows


def render_lease_report(rows: List[dict], generated_on: date = None) -> bytes:
     generated_on = generated_on or date.today()
     buffer = BytesIO()
     doc = SimpleDocTemplate(
          buffer,
          pagesize=landscape(A4),
          rightMargin=40,
          leftMargin=40,
          topMargin=40,
          bottomMargin=40,
          title="Lease Report",
     )
     styles = getSampleStyleSheet()
     elements = [
          Paragraph("Lease Report", styles["Title"]),
          Paragraph(f"Generated on: {generated_on.isoformat()}", styles["Normal"]),
          Spacer(1, 20),
     ]

     data = [HEADERS]
     for row in rows:
          data.append([
               row["tenant"],
               row["local"],
               row["start_date"].isoformat() if row["start_date"] else "-",
               row["end_date"].isoformat() if row["end_date"] else "-",
               f"{row['lease_amount']:.2f}",
               f"{row['paid']:.2f}",
               f"{row['balance']:.2f}",
               row["status"],
          ])

     table = Table(data, repeatRows=1)
     style = [
          ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4f81bd")),
          ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
          ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
          ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#b4c6e7")),
          ("ALIGN", (4, 1), (6, -1), "RIGHT"),
     ]
     for i, row in enumerate(rows, start=1):
          if i % 2 == 1:
               style.append(("BACKGROUND", (0, i), (-1, i), colors.HexColor("#d9e1f2")))
          color = STATUS_COLORS.get(row["status"])
          if color is not None:
               style.append(("TEXTCOLOR", (7, i), (7, i), color))
     table.setStyle(TableStyle(style))
     elements.append(table)

     doc.build(elements)
     return buffer.getvalue()
