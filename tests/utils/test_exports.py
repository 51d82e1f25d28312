import io
from datetime import datetime

import pandas as pd

from src.core.records import records_to_frame
from src.utils.exports import build_export_frame, export_filename, to_excel_bytes, to_pdf_bytes


def _filtered():
    return records_to_frame(
        [
            {"centreNumber": "C1", "userEmailAddress": "a@x.com", "trainingModule": "M1", "status": "", "progress": 0},
            {"centreNumber": "C2", "userEmailAddress": "b@x.com", "trainingModule": "M2", "status": "Complete", "progress": 100},
        ]
    )


def test_build_export_frame_uses_display_headers_and_status():
    export_df = build_export_frame(_filtered())

    assert list(export_df.columns) == [
        "Centre Number",
        "Customer Journey Point",
        "Training Module",
        "Training Type",
        "User Email",
        "Status",
        "Progress (%)",
    ]
    assert export_df["Status"].tolist() == ["Not Started", "Complete"]
    assert export_df["Progress (%)"].tolist() == [0, 100]


def test_export_filename_is_timestamped():
    assert export_filename("csv", now=datetime(2024, 5, 1, 9, 30, 0)) == "centre_users_20240501_093000.csv"


def test_excel_export_round_trips_rows():
    export_df = build_export_frame(_filtered())

    content = to_excel_bytes(export_df)
    reloaded = pd.read_excel(io.BytesIO(content), engine="openpyxl")

    assert reloaded["User Email"].tolist() == ["a@x.com", "b@x.com"]
    assert reloaded["Status"].tolist() == ["Not Started", "Complete"]


def test_pdf_export_produces_pdf_document():
    export_df = build_export_frame(_filtered())

    content = to_pdf_bytes(export_df)

    assert content.startswith(b"%PDF")


def test_pdf_export_truncates_long_reports():
    rows = [{"centreNumber": f"C{i}", "userEmailAddress": f"u{i}@x.com", "progress": i} for i in range(30)]
    export_df = build_export_frame(records_to_frame(rows))

    content = to_pdf_bytes(export_df, max_rows=10)

    assert content.startswith(b"%PDF")
