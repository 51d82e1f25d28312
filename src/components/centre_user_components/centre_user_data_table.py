from dash import html, dcc, dash_table
import dash_bootstrap_components as dbc

from src.config.settings import config
from src.core.records import CENTRE_USER_COLUMNS

PAGE_SIZE_OPTIONS = [5, 10, 25]


def get_table_columns():
    columns = []
    for column in CENTRE_USER_COLUMNS:
        col_config = {
            "name": column["name"],
            "id": column["id"],
            "deletable": False,
            "selectable": False
        }
        if column.get("type") == "numeric":
            col_config["type"] = "numeric"
        columns.append(col_config)
    return columns


def get_centre_user_data_table_layout():
    """Centre user grid: paginated, checkbox selection, export buttons"""
    page_size = config.DEFAULT_PAGE_SIZE if config.DEFAULT_PAGE_SIZE in PAGE_SIZE_OPTIONS else 10

    component = dbc.Card([
        dbc.CardHeader([
            html.Div([
                html.H5("Centre User Training Progress", className="mb-0 flex-grow-1"),
                dbc.ButtonGroup([
                    dbc.Button("Export CSV", id="centre-user-export-csv-btn", color="primary", outline=True, size="sm"),
                    dbc.Button("Export Excel", id="centre-user-export-excel-btn", color="success", outline=True, size="sm"),
                    dbc.Button("Export PDF", id="centre-user-export-pdf-btn", color="danger", outline=True, size="sm")
                ])
            ], className="d-flex justify-content-between align-items-center")
        ]),
        dbc.CardBody([
            dbc.Row([
                dbc.Col([
                    html.Div(id="centre-user-table-summary", className="text-muted small mb-3")
                ], width=8),
                dbc.Col([
                    html.Label("Records per page:", className="form-label"),
                    dbc.Select(
                        id="centre-user-page-size-select",
                        options=[{"label": str(size), "value": str(size)} for size in PAGE_SIZE_OPTIONS],
                        value=str(page_size),
                        className="mb-3"
                    )
                ], width=4)
            ]),

            # Spinner is shown until the first load lands in the dataset store
            html.Div(
                dbc.Spinner(color="primary"),
                id="centre-user-loading-indicator",
                className="d-flex justify-content-center p-4"
            ),

            dash_table.DataTable(
                id="centre-user-table",
                columns=get_table_columns(),
                data=[],
                page_action="native",
                page_current=0,
                page_size=page_size,
                row_selectable="multi",
                selected_rows=[],
                style_table={
                    'overflowX': 'auto',
                    'minWidth': '100%'
                },
                style_cell={
                    'textAlign': 'left',
                    'padding': '10px',
                    'fontFamily': 'Arial, sans-serif',
                    'fontSize': '12px',
                    'border': '1px solid #dee2e6'
                },
                style_header={
                    'backgroundColor': '#f8f9fa',
                    'fontWeight': 'bold',
                    'color': '#495057',
                    'border': '1px solid #dee2e6'
                },
                style_data_conditional=[
                    {
                        'if': {'row_index': 'odd'},
                        'backgroundColor': '#f8f9fa'
                    }
                ]
            ),

            # Download components (hidden)
            dcc.Download(id="centre-user-download-csv"),
            dcc.Download(id="centre-user-download-excel"),
            dcc.Download(id="centre-user-download-pdf")
        ])
    ], className="mb-4 shadow-sm border-0")

    return component
