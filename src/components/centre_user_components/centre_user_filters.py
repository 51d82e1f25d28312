from dash import html
import dash_bootstrap_components as dbc

from src.core.filter_engine import ALL_LABEL, ALL_VALUE
from src.core.records import CENTRE_NUMBER, CUSTOMER_JOURNEY_POINT, STATUS, TRAINING_TYPE

# Select control per categorical field, in display order
FILTER_CONTROL_IDS = {
    CENTRE_NUMBER: "centre-user-centre-select",
    CUSTOMER_JOURNEY_POINT: "centre-user-journey-point-select",
    TRAINING_TYPE: "centre-user-training-type-select",
    STATUS: "centre-user-status-select",
}

FILTER_LABELS = {
    CENTRE_NUMBER: "Centre",
    CUSTOMER_JOURNEY_POINT: "Customer Journey Point",
    TRAINING_TYPE: "Training Type",
    STATUS: "Status",
}

SEARCH_INPUT_ID = "centre-user-search-input"


def _select_column(field):
    return dbc.Col([
        html.Div([
            html.Label(FILTER_LABELS[field]),
            dbc.Select(
                id=FILTER_CONTROL_IDS[field],
                options=[{"label": ALL_LABEL, "value": ALL_VALUE}],
                value=ALL_VALUE,
                disabled=True
            )
        ], className="d-grid gap-1")
    ], md=2)


def get_centre_user_filters_layout():
    """Search box plus one select per categorical field; disabled until data loads"""
    return dbc.Card([
        dbc.CardBody([
            dbc.Row([
                dbc.Col([
                    html.Div([
                        html.Label("Search"),
                        dbc.Input(
                            id=SEARCH_INPUT_ID,
                            type="text",
                            placeholder="Search records...",
                            value="",
                            debounce=False,
                            disabled=True
                        )
                    ], className="d-grid gap-1")
                ], md=4),
                *[_select_column(field) for field in FILTER_CONTROL_IDS]
            ], className="g-2")
        ])
    ], className="mb-3 shadow-sm border-0")
