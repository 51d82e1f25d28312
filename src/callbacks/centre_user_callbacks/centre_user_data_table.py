import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from dash import Input, Output, State, dcc, no_update
import pandas as pd

from src.callbacks.centre_user_callbacks.centre_user_data_loader import dataset_from_payload
from src.components.centre_user_components.centre_user_data_table import PAGE_SIZE_OPTIONS
from src.components.centre_user_components.centre_user_filters import FILTER_CONTROL_IDS, SEARCH_INPUT_ID
from src.core.filter_engine import CentreUserView, FilterState, build_centre_user_view, filter_records
from src.utils.exports import build_export_frame, export_filename, to_excel_bytes, to_pdf_bytes
from src.utils.performance import monitor_performance

logger = logging.getLogger(__name__)

FILTER_INPUTS = [Input(SEARCH_INPUT_ID, "value")] + [
    Input(control_id, "value") for control_id in FILTER_CONTROL_IDS.values()
]
FILTER_STATES = [State(SEARCH_INPUT_ID, "value")] + [
    State(control_id, "value") for control_id in FILTER_CONTROL_IDS.values()
]


def selected_row_indices(rows: List[Dict[str, Any]], selected_ids: Optional[List[str]]) -> List[int]:
    """Positions in the new rows of records that were selected before; others drop out"""
    selected = set(selected_ids or [])
    return [index for index, row in enumerate(rows) if row["id"] in selected]


def format_table_summary(filtered_count: int, total_count: int, selected_count: int) -> str:
    return f"Showing {filtered_count:,} of {total_count:,} records • {selected_count:,} selected"


def parse_page_size(value, default: int = 10) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError):
        return default
    return size if size in PAGE_SIZE_OPTIONS else default


def filtered_frame_for_export(payload, search_term, *selections) -> Optional[pd.DataFrame]:
    """Current filtered view shaped for export, or None when there is nothing to export"""
    dataset = dataset_from_payload(payload)
    if dataset is None:
        return None
    filtered = filter_records(dataset, FilterState.from_controls(search_term, *selections))
    if filtered.empty:
        return None
    return build_export_frame(filtered)


@monitor_performance("Centre User Table Update")
def compute_table_view(payload, search_term, *selections) -> Optional[CentreUserView]:
    dataset = dataset_from_payload(payload)
    if dataset is None:
        return None
    return build_centre_user_view(dataset, FilterState.from_controls(search_term, *selections))


def register_centre_user_data_table_callbacks(app):
    """
    Register centre user data table callbacks with export functionality
    Matches the component IDs from the layout file
    """

    @app.callback(
        Output("centre-user-table", "data"),
        Output("centre-user-table", "selected_rows"),
        Output("centre-user-table", "page_current"),
        Input("centre-user-dataset-store", "data"),
        *FILTER_INPUTS,
        State("centre-user-table", "selected_row_ids"),
        prevent_initial_call=False
    )
    def update_centre_user_table(payload, search_term, *rest):
        *selections, selected_ids = rest
        view = compute_table_view(payload, search_term, *selections)
        if view is None:
            return no_update, no_update, no_update
        return view.rows, selected_row_indices(view.rows, selected_ids), 0

    @app.callback(
        Output("centre-user-table-summary", "children"),
        Input("centre-user-table", "data"),
        Input("centre-user-table", "selected_rows"),
        State("centre-user-dataset-store", "data"),
        prevent_initial_call=False
    )
    def update_table_summary(rows, selected_rows, payload):
        if payload is None:
            return "Loading centre user data..."
        total_count = len(payload.get("records") or [])
        return format_table_summary(len(rows or []), total_count, len(selected_rows or []))

    @app.callback(
        Output("centre-user-table", "page_size"),
        Input("centre-user-page-size-select", "value"),
        prevent_initial_call=True
    )
    def update_page_size(value):
        return parse_page_size(value)

    @app.callback(
        Output("centre-user-download-csv", "data"),
        Input("centre-user-export-csv-btn", "n_clicks"),
        State("centre-user-dataset-store", "data"),
        *FILTER_STATES,
        prevent_initial_call=True
    )
    @monitor_performance("Centre User CSV Export")
    def export_csv(n_clicks, payload, search_term, *selections):
        """
        Export current filtered view as CSV
        """
        if not n_clicks:
            return no_update
        try:
            export_df = filtered_frame_for_export(payload, search_term, *selections)
            if export_df is None:
                return no_update
            return dcc.send_data_frame(export_df.to_csv, export_filename("csv"), index=False)
        except Exception as e:
            logger.error(f"❌ Error exporting CSV: {e}")
            return no_update

    @app.callback(
        Output("centre-user-download-excel", "data"),
        Input("centre-user-export-excel-btn", "n_clicks"),
        State("centre-user-dataset-store", "data"),
        *FILTER_STATES,
        prevent_initial_call=True
    )
    @monitor_performance("Centre User Excel Export")
    def export_excel(n_clicks, payload, search_term, *selections):
        """
        Export current filtered view as Excel
        """
        if not n_clicks:
            return no_update
        try:
            export_df = filtered_frame_for_export(payload, search_term, *selections)
            if export_df is None:
                return no_update
            return dcc.send_bytes(to_excel_bytes(export_df), filename=export_filename("xlsx"))
        except Exception as e:
            logger.exception(f"❌ Error exporting Excel: {e}")
            return no_update

    @app.callback(
        Output("centre-user-download-pdf", "data"),
        Input("centre-user-export-pdf-btn", "n_clicks"),
        State("centre-user-dataset-store", "data"),
        *FILTER_STATES,
        prevent_initial_call=True
    )
    @monitor_performance("Centre User PDF Export")
    def export_pdf(n_clicks, payload, search_term, *selections):
        """
        Export current filtered view as a PDF table (first rows only)
        """
        if not n_clicks:
            return no_update
        try:
            export_df = filtered_frame_for_export(payload, search_term, *selections)
            if export_df is None:
                return no_update
            generated = datetime.now().strftime('%Y-%m-%d')
            pdf = to_pdf_bytes(export_df, title=f"Centre User Training Report ({generated})")
            return dcc.send_bytes(pdf, filename=export_filename("pdf"))
        except Exception as e:
            logger.exception(f"❌ Error exporting PDF: {e}")
            return no_update
