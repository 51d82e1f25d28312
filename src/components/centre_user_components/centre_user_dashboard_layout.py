import uuid

from dash import html, dcc
import dash_bootstrap_components as dbc

from src.components.centre_user_components.centre_user_filters import get_centre_user_filters_layout
from src.components.centre_user_components.centre_user_data_table import get_centre_user_data_table_layout


def create_centre_user_dashboard_layout():
    return dbc.Container([
        # Data stores; the view id is new on every page mount
        dcc.Store(id="centre-user-view-id", data=uuid.uuid4().hex),
        dcc.Store(id="centre-user-dataset-store"),
        dcc.Store(id="centre-user-reload-request"),

        dbc.Row([
            dbc.Col([
                html.H2("Centre Users", className="mb-1"),
                html.P("Training completion by centre, journey point and module",
                       className="text-muted mb-3")
            ], width=8),
            dbc.Col([
                dbc.Button("Reload Data",
                           id="centre-user-reload-btn",
                           color="primary",
                           outline=True,
                           className="mb-2 me-2"),
                dbc.Button("Clear All Filters",
                           id="centre-user-clear-filters-btn",
                           color="secondary",
                           outline=True,
                           className="mb-2")
            ], width=4, className="text-end")
        ]),

        html.Div(id="centre-user-load-alert"),

        # Filters Section
        html.Div(get_centre_user_filters_layout(), id="centre-user-filters-container"),

        # Data Table Section
        get_centre_user_data_table_layout()

    ], fluid=True)
