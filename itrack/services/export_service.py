import io
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.lib import colors

from itrack.models.asset import AssetType
from itrack.models.assignment import AssignmentRecord, ActionType, TargetType
from itrack.models.organization import Department
from itrack.services import ledger_service
from itrack.services.refs import (
    ASSET_MODELS, TargetRef, find_target, asset_serial, asset_description, target_label,
)
from itrack.services.resolver import AVAILABILITY_STRATEGIES

_ACTION_LABELS = {
    ActionType.assignment: "Assignment",
    ActionType.return_: "Return",
}

_XLSX_HEADER_FILL = PatternFill(start_color="1C2D42", end_color="1C2D42", fill_type="solid")
_XLSX_HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)


def _write_header(ws, headers: list[str]) -> None:
    for col, h in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=h)
        cell.font = _XLSX_HEADER_FONT
        cell.fill = _XLSX_HEADER_FILL
        cell.alignment = Alignment(horizontal="center")
    ws.row_dimensions[1].height = 22
    ws.freeze_panes = "A2"


def export_assets_excel(db: Session) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Assets"
    _write_header(ws, ["Type", "ID", "Serial / Number", "Description", "State", "Held by", "Holder type"])

    row_num = 2
    for kind in (AssetType.computer, AssetType.device, AssetType.phone_line):
        model = ASSET_MODELS[kind]
        assets = db.scalars(select(model).order_by(model.id)).all()
        holders = AVAILABILITY_STRATEGIES[kind].holders(db, kind, assets)
        for asset in assets:
            holder = holders[asset.id]
            target = find_target(db, holder) if holder else None
            ws.cell(row=row_num, column=1, value=kind.value)
            ws.cell(row=row_num, column=2, value=asset.id)
            ws.cell(row=row_num, column=3, value=asset_serial(kind, asset))
            ws.cell(row=row_num, column=4, value=asset_description(kind, asset))
            ws.cell(row=row_num, column=5, value=asset.state.value)
            ws.cell(row=row_num, column=6, value=target_label(holder.target_type, target) if target else None)
            ws.cell(row=row_num, column=7, value=holder.target_type.value if holder else None)
            row_num += 1

    for i, w in enumerate([12, 8, 24, 36, 16, 30, 14], 1):
        ws.column_dimensions[get_column_letter(i)].width = w

    # History sheet
    ws2 = wb.create_sheet("Assignment history")
    _write_header(ws2, ["Date", "Action", "Type", "Serial / Number", "Target", "Manager", "Notes"])
    records = db.scalars(
        select(AssignmentRecord).order_by(AssignmentRecord.recorded_at, AssignmentRecord.id)
    ).all()
    for row_num, r in enumerate(records, 2):
        entry = ledger_service.describe_record(db, r)
        ws2.cell(row=row_num, column=1, value=r.recorded_at.strftime("%d/%m/%Y %H:%M"))
        ws2.cell(row=row_num, column=2, value=_ACTION_LABELS[r.action_type])
        ws2.cell(row=row_num, column=3, value=r.asset_type.value)
        ws2.cell(row=row_num, column=4, value=entry.asset.serial if entry.asset else f"#{r.asset_id}")
        ws2.cell(row=row_num, column=5, value=entry.target.name if entry.target else f"#{r.target_id}")
        ws2.cell(row=row_num, column=6, value=r.manager_name)
        ws2.cell(row=row_num, column=7, value=r.notes)

    for i, w in enumerate([18, 12, 12, 24, 30, 26, 40], 1):
        ws2.column_dimensions[get_column_letter(i)].width = w

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _delivery_rows(db: Session, record: AssignmentRecord) -> tuple[list[tuple], list[tuple]]:
    """(asset rows, delivery rows) shared by the spreadsheet and the PDF note."""
    asset = db.get(ASSET_MODELS[record.asset_type], record.asset_id)
    target_type = TargetType(record.target_type)
    target = find_target(db, TargetRef(target_type, record.target_id))

    department: Department | None = None
    if target is not None:
        department = target if target_type == TargetType.department else target.department
    area = department.management_area if department else None

    asset_rows = [
        ("Asset type:", record.asset_type.value),
        ("Description:", asset_description(record.asset_type, asset) if asset else "-"),
        ("Serial / Number:", asset_serial(record.asset_type, asset) if asset else "-"),
    ]
    if record.asset_type == AssetType.computer:
        asset_rows += [
            ("Charger model:", record.charger_model or "-"),
            ("Charger serial:", record.charger_serial or "-"),
        ]

    delivery_rows = [
        ("Action:", _ACTION_LABELS[record.action_type]),
        ("Date:", record.recorded_at.strftime("%d/%m/%Y %H:%M")),
        ("Delivered to:", target_label(target_type, target) if target else "-"),
        ("Department:", department.name if department else "-"),
        ("Management area:", area.name if area else "-"),
        ("Manager:", record.manager_name or "-"),
        ("Reason:", record.reason or "-"),
        ("Locality:", record.locality or "-"),
        ("Notes:", record.notes or "-"),
    ]
    return asset_rows, delivery_rows


def export_delivery_note_excel(db: Session, record_id: int) -> bytes:
    record = ledger_service.get_record(db, record_id)
    asset_rows, delivery_rows = _delivery_rows(db, record)

    wb = Workbook()
    ws = wb.active
    ws.title = "Delivery note"
    ws.cell(row=1, column=1, value=f"DELIVERY NOTE No. {record.id}").font = Font(bold=True, size=14)

    row_num = 3
    for title, rows in (("Asset", asset_rows), ("Delivery", delivery_rows)):
        cell = ws.cell(row=row_num, column=1, value=title)
        cell.font = _XLSX_HEADER_FONT
        cell.fill = _XLSX_HEADER_FILL
        ws.cell(row=row_num, column=2).fill = _XLSX_HEADER_FILL
        row_num += 1
        for label, value in rows:
            ws.cell(row=row_num, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row_num, column=2, value=value)
            row_num += 1
        row_num += 1

    row_num += 1
    ws.cell(row=row_num, column=1, value="Delivered by:")
    ws.cell(row=row_num, column=2, value="Received by:")

    ws.column_dimensions["A"].width = 22
    ws.column_dimensions["B"].width = 48

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_delivery_note_pdf(db: Session, record_id: int) -> bytes:
    record = ledger_service.get_record(db, record_id)
    asset_rows, delivery_rows = _delivery_rows(db, record)

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Delivery note {record.id}")
    pw, ph = A4
    margin = 20 * mm

    # ── Header ────────────────────────────────────────────────────────────────
    c.setFillColor(colors.HexColor("#1C2D42"))
    c.rect(0, ph - 35 * mm, pw, 35 * mm, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 18)
    title = "DELIVERY NOTE" if record.action_type == ActionType.assignment else "RETURN NOTE"
    c.drawString(margin, ph - 20 * mm, title)
    c.setFont("Helvetica", 10)
    c.drawString(margin, ph - 29 * mm, f"Record No. {record.id}")

    c.setFillColor(colors.black)
    c.setFont("Helvetica", 9)
    c.drawRightString(pw - margin, ph - 40 * mm,
                      f"Printed: {datetime.now(timezone.utc).strftime('%d/%m/%Y %H:%M')} UTC")

    y = ph - 50 * mm
    y = _pdf_section_header(c, "Asset", y, margin, pw)
    y = _pdf_table(c, asset_rows, y, margin, pw)
    y -= 8 * mm
    y = _pdf_section_header(c, "Delivery", y, margin, pw)
    y = _pdf_table(c, delivery_rows, y, margin, pw)

    # ── Signatures ────────────────────────────────────────────────────────────
    sig_y = y - 20 * mm
    sig_w = (pw - 2 * margin - 20 * mm) / 2
    for x, label in ((margin, "Delivered by:"), (pw - margin - sig_w, "Received by:")):
        c.setFillColor(colors.black)
        c.setFont("Helvetica", 10)
        c.drawString(x, sig_y, label)
        c.line(x, sig_y - 12 * mm, x + sig_w, sig_y - 12 * mm)
        c.setFont("Helvetica", 8)
        c.setFillColor(colors.gray)
        c.drawString(x, sig_y - 15 * mm, "Name, signature, date")

    c.save()
    return buf.getvalue()


def _pdf_section_header(c, title: str, y: float, margin: float, pw: float) -> float:
    c.setFillColor(colors.HexColor("#404040"))
    c.rect(margin, y - 6 * mm, pw - 2 * margin, 7 * mm, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 10)
    c.drawString(margin + 3 * mm, y - 3.5 * mm, title)
    c.setFillColor(colors.black)
    return y - 10 * mm


def _pdf_table(c, rows: list[tuple], y: float, margin: float, pw: float) -> float:
    col1_w = 55 * mm
    for i, (label, value) in enumerate(rows):
        bg = colors.HexColor("#f8f8f8") if i % 2 == 0 else colors.white
        c.setFillColor(bg)
        c.rect(margin, y - 6 * mm, pw - 2 * margin, 7 * mm, fill=True, stroke=False)
        c.setFillColor(colors.black)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(margin + 2 * mm, y - 3 * mm, label)
        c.setFont("Helvetica", 9)
        c.drawString(margin + col1_w, y - 3 * mm, str(value)[:70])
        y -= 7 * mm
    return y
