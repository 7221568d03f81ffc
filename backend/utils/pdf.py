# backend/utils/pdf.py
import math
from datetime import datetime
from io import BytesIO
from typing import Dict, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from models.movement import MovementLog, MovementType

FONT_REGULAR_NAME = "Helvetica"
FONT_BOLD_NAME = "Helvetica-Bold"

# Layout (mm, measured from the top edge)
MARGIN = 20
HEADER_HEIGHT = 8
ROW_HEIGHT = 7
FIRST_TABLE_TOP = 86
TABLE_HEADERS = ["Fecha/Hora", "Tipo", "Item", "Cantidad", "Usuario"]
COL_WIDTHS = [38, 22, 60, 22, 28]

# Every page holds as many rows as fit under the first page's table header
ROWS_PER_PAGE = int((297 - FIRST_TABLE_TOP - HEADER_HEIGHT - MARGIN) // ROW_HEIGHT)

TYPE_LABELS = {
    MovementType.ENTRADA: "Entrada",
    MovementType.SALIDA: "Salida",
    MovementType.AJUSTE: "Ajuste",
}

MONTHS = ["enero", "febrero", "marzo", "abril", "mayo", "junio", "julio",
          "agosto", "septiembre", "octubre", "noviembre", "diciembre"]


def page_count(rows: int) -> int:
    return max(1, math.ceil(rows / ROWS_PER_PAGE))


def truncate(text: str, limit: int) -> str:
    """Cut `text` to `limit` characters, ending in '...' when shortened."""
    text = text or ""
    if len(text) > limit:
        return text[:limit - 3] + "..."
    return text


def format_change(change: int) -> str:
    return f"+{change}" if change > 0 else str(change)


# Stored timestamps are naive UTC
def format_generated(dt: datetime) -> str:
    return f"{dt.day} de {MONTHS[dt.month - 1]} de {dt.year}, {dt:%H:%M} UTC"


def report_filename(dt: datetime) -> str:
    return f"reporte-movimientos-{dt:%Y-%m-%d}.pdf"


def generate_movements_pdf(
    logs: Sequence[MovementLog],
    summary: Dict[str, int],
    hours: int,
    generated_at: datetime,
) -> bytes:
    """
    Renders the movement report:
    - title, window and generation time
    - summary band (entradas / salidas / ajustes)
    - movement table, header repeated on every page
    - "Página i de N" footer
    """
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    content_width = width - 2 * MARGIN * mm
    total_pages = page_count(len(logs))

    def top(y_mm: float) -> float:
        return height - y_mm * mm

    # Helper for drawing text
    def draw_text(x, y, text, font=FONT_REGULAR_NAME, size=10, align="left", color=(0, 0, 0)):
        c.setFillColorRGB(*color)
        c.setFont(font, size)
        text_str = str(text) if text is not None else ""
        if align == "right":
            c.drawRightString(x, y, text_str)
        elif align == "center":
            c.drawCentredString(x, y, text_str)
        else:
            c.drawString(x, y, text_str)
        c.setFillColorRGB(0, 0, 0)

    def draw_table_header(y_mm: float) -> None:
        c.setFillColorRGB(60 / 255, 90 / 255, 150 / 255)
        c.rect(MARGIN * mm, top(y_mm + HEADER_HEIGHT), content_width, HEADER_HEIGHT * mm, fill=1, stroke=0)
        x = MARGIN + 2
        for header, col_width in zip(TABLE_HEADERS, COL_WIDTHS):
            draw_text(x * mm, top(y_mm + 5.5), header, font=FONT_BOLD_NAME, size=9, color=(1, 1, 1))
            x += col_width

    def draw_footer(page: int) -> None:
        draw_text(width / 2, 10 * mm, f"Página {page} de {total_pages}", size=8, align="center",
                  color=(150 / 255, 150 / 255, 150 / 255))

    # --- 1. HEADER ---
    draw_text(width / 2, top(20), "Reporte de Movimientos de Inventario", font=FONT_BOLD_NAME, size=20, align="center")
    draw_text(width / 2, top(28), f"Últimas {hours} horas", align="center")
    draw_text(width / 2, top(34), f"Generado: {format_generated(generated_at)}", align="center")

    # --- 2. SUMMARY BAND ---
    c.setFillColorRGB(245 / 255, 245 / 255, 245 / 255)
    c.rect(MARGIN * mm, top(68), content_width, 20 * mm, fill=1, stroke=0)
    third = (210 - 2 * MARGIN) / 3
    blocks = [
        ("ENTRADAS", f"+{summary['total_entradas']} unidades", (0, 100 / 255, 0)),
        ("SALIDAS", f"-{summary['total_salidas']} unidades", (200 / 255, 0, 0)),
        ("AJUSTES", f"{summary['total_ajustes']} movimientos", (0, 0, 0)),
    ]
    for idx, (label, value, color) in enumerate(blocks):
        x = (MARGIN + third * idx + 10) * mm
        draw_text(x, top(56), label, font=FONT_BOLD_NAME, size=9)
        draw_text(x, top(62), value, size=9, color=color)

    # --- 3. TABLE ---
    draw_text(MARGIN * mm, top(78), "Detalle de Movimientos", font=FONT_BOLD_NAME, size=12)
    draw_table_header(FIRST_TABLE_TOP)
    y = FIRST_TABLE_TOP + HEADER_HEIGHT
    page = 1

    if not logs:
        draw_text(width / 2, top(y + 10), f"No hay movimientos en las últimas {hours} horas",
                  align="center", color=(100 / 255, 100 / 255, 100 / 255))

    for index, log in enumerate(logs):
        # New page with repeated header
        if index > 0 and index % ROWS_PER_PAGE == 0:
            draw_footer(page)
            c.showPage()
            page += 1
            draw_table_header(MARGIN)
            y = MARGIN + HEADER_HEIGHT

        if index % 2 == 0:
            c.setFillColorRGB(250 / 255, 250 / 255, 250 / 255)
            c.rect(MARGIN * mm, top(y + ROW_HEIGHT), content_width, ROW_HEIGHT * mm, fill=1, stroke=0)

        movement_type = MovementType(log.type)
        cells = [
            f"{log.timestamp:%d/%m %H:%M}",
            TYPE_LABELS[movement_type],
            truncate(log.item_name, 30),
            format_change(log.quantity_change),
            truncate(log.username, 15),
        ]
        x = MARGIN + 2
        for col, (cell, col_width) in enumerate(zip(cells, COL_WIDTHS)):
            color = (0, 0, 0)
            if col == 3:
                color = (0, 100 / 255, 0) if log.quantity_change > 0 else (200 / 255, 0, 0)
            draw_text(x * mm, top(y + 5), cell, size=8, color=color)
            x += col_width

        y += ROW_HEIGHT

    draw_footer(page)
    c.showPage()
    c.save()
    return buffer.getvalue()
