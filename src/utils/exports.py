import io
import numbers
from datetime import datetime
from typing import List

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from src.core.records import CENTRE_USER_COLUMNS, PROGRESS, STATUS, format_status, normalize_frame

PDF_MAX_ROWS = 100
EXCEL_SHEET_NAME = 'Centre Users'


def build_export_frame(filtered: pd.DataFrame) -> pd.DataFrame:
    """
    Shape the filtered records the way the table shows them:
    display headers, status formatted, progress numeric
    """
    frame = normalize_frame(filtered)
    frame[STATUS] = frame[STATUS].map(format_status)
    frame[PROGRESS] = pd.to_numeric(frame[PROGRESS], errors='coerce')
    return frame.rename(columns={c['id']: c['name'] for c in CENTRE_USER_COLUMNS}).reset_index(drop=True)


def export_filename(extension: str, now: datetime = None) -> str:
    timestamp = (now or datetime.now()).strftime('%Y%m%d_%H%M%S')
    return f"centre_users_{timestamp}.{extension}"


def to_excel_bytes(export_df: pd.DataFrame) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        export_df.to_excel(writer, sheet_name=EXCEL_SHEET_NAME, index=False)
    return buffer.getvalue()


def _escape(text: str) -> str:
    # Paragraph text is parsed as markup
    return (text.replace('&', '&amp;')
                .replace('<', '&lt;')
                .replace('>', '&gt;')
                .replace('"', '&quot;')
                .replace("'", '&#39;'))


def _column_widths(export_df: pd.DataFrame, available_width: float) -> List[float]:
    """Widths weighted by average content length, scaled to fit the page"""
    weights = []
    for col in export_df.columns:
        sample = export_df[col].head(20).astype(str)
        avg_length = sample.str.len().mean() if len(sample) else 0
        if 'email' in col.lower():
            weight = max(2.2 * inch, avg_length * 0.06 * inch)
        elif PROGRESS in col.lower():
            weight = 1.0 * inch
        else:
            weight = min(3.0 * inch, max(1.0 * inch, avg_length * 0.05 * inch))
        weights.append(weight)
    total = sum(weights)
    return [w * available_width / total for w in weights]


def to_pdf_bytes(export_df: pd.DataFrame, title: str = "Centre User Training Report",
                 max_rows: int = PDF_MAX_ROWS) -> bytes:
    """
    Render the export frame as a landscape A4 table.
    Only the first max_rows rows are included; a note says when rows were left out.
    """
    buffer = io.BytesIO()
    page_size = landscape(A4)
    doc = SimpleDocTemplate(
        buffer,
        pagesize=page_size,
        rightMargin=0.5*inch,
        leftMargin=0.5*inch,
        topMargin=1*inch,
        bottomMargin=0.5*inch
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle('CentreUserTitle', parent=styles['Heading1'], fontSize=16,
                                 alignment=TA_CENTER, spaceAfter=0.3*inch)
    subtitle_style = ParagraphStyle('CentreUserSubtitle', parent=styles['Normal'], fontSize=10,
                                    textColor=colors.grey, alignment=TA_CENTER, spaceAfter=0.2*inch)
    header_style = ParagraphStyle('CentreUserHeader', parent=styles['Normal'], fontSize=9,
                                  textColor=colors.whitesmoke, alignment=TA_CENTER, leading=11,
                                  fontName='Helvetica-Bold')
    cell_style = ParagraphStyle('CentreUserCell', parent=styles['Normal'], fontSize=8,
                                alignment=TA_LEFT, leading=10)
    numeric_style = ParagraphStyle('CentreUserNumeric', parent=cell_style, alignment=TA_RIGHT)

    generated = datetime.now().strftime('%B %d, %Y at %I:%M %p')
    elements = [
        Paragraph(_escape(title), title_style),
        Paragraph(f"Generated on {generated} • {len(export_df):,} records", subtitle_style),
        Spacer(1, 0.2*inch),
    ]

    headers = list(export_df.columns)
    table_data = [[Paragraph(_escape(str(h)), header_style) for h in headers]]
    for _, row in export_df.head(max_rows).iterrows():
        cells = []
        for val in row:
            if pd.isna(val):
                cells.append(Paragraph('', cell_style))
            elif isinstance(val, numbers.Number):
                text = str(int(val)) if float(val).is_integer() else str(val)
                cells.append(Paragraph(text, numeric_style))
            else:
                cells.append(Paragraph(_escape(str(val).strip()), cell_style))
        table_data.append(cells)

    table = Table(
        table_data,
        colWidths=_column_widths(export_df, page_size[0] - 1*inch),
        repeatRows=1,
        splitByRow=True
    )
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.lightgrey]),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ]))
    elements.append(table)

    if len(export_df) > max_rows:
        footer_style = ParagraphStyle('CentreUserFooter', parent=styles['Normal'], fontSize=8,
                                      textColor=colors.grey, alignment=TA_CENTER)
        elements.append(Spacer(1, 0.2*inch))
        elements.append(Paragraph(
            f"Note: Showing first {max_rows} records of {len(export_df):,} total records. "
            "Use Excel export for complete data.",
            footer_style
        ))

    doc.build(elements)
    return buffer.getvalue()
