from typing import Any, Dict, Optional, Tuple

from dash import Input, Output, no_update
import dash_bootstrap_components as dbc
import pandas as pd

from src.components.centre_user_components.centre_user_filters import FILTER_CONTROL_IDS, SEARCH_INPUT_ID
from src.core.records import frame_to_records, records_to_frame
from src.services.dataset_loader import DatasetLoader, LoadResult

HIDDEN = {"display": "none"}
LOADING_STYLE = {}


def build_dataset_payload(result: LoadResult) -> Dict[str, Any]:
    """dcc.Store payload for an accepted load"""
    return {"records": frame_to_records(result.dataset)}


def dataset_from_payload(payload: Optional[Dict[str, Any]]) -> Optional[pd.DataFrame]:
    """Dataset held in the store, or None while a load is pending"""
    if payload is None:
        return None
    return records_to_frame(payload.get("records"))


def load_outputs(result: LoadResult) -> Tuple[Any, Any]:
    """
    Store payload and alert for a finished load.
    A stale result changes nothing; a failed one still publishes the
    empty dataset so the loading state clears, plus an error alert.
    """
    if not result.accepted:
        return no_update, no_update

    alert = None
    if result.error:
        alert = dbc.Alert(
            f"Could not load centre user data: {result.error}",
            color="danger",
            dismissable=True
        )
    return build_dataset_payload(result), alert


def reload_outputs(n_clicks) -> Tuple[Any, Any]:
    """Reload request, then an emptied store so the page shows its loading state again"""
    if not n_clicks:
        return no_update, no_update
    return n_clicks, None


def loading_state(payload: Optional[Dict[str, Any]]) -> Tuple[Any, ...]:
    """Spinner style, then the disabled flag of the search input and each select"""
    loading = payload is None
    style = LOADING_STYLE if loading else HIDDEN
    return (style, loading, *[loading] * len(FILTER_CONTROL_IDS))


def register_centre_user_data_loader_callbacks(app, loader: DatasetLoader):
    """
    Register dataset load callbacks
    One load per page mount plus one per Reload click; stale loads are dropped
    """

    @app.callback(
        Output("centre-user-reload-request", "data"),
        Output("centre-user-dataset-store", "data", allow_duplicate=True),
        Input("centre-user-reload-btn", "n_clicks"),
        prevent_initial_call=True
    )
    def request_reload(n_clicks):
        return reload_outputs(n_clicks)

    @app.callback(
        Output("centre-user-dataset-store", "data"),
        Output("centre-user-load-alert", "children"),
        Input("centre-user-view-id", "data"),
        Input("centre-user-reload-request", "data"),
        prevent_initial_call=False
    )
    def load_centre_user_dataset(view_id, _reload_request):
        if not view_id:
            return no_update, no_update
        return load_outputs(loader.load(view_id))

    @app.callback(
        Output("centre-user-loading-indicator", "style"),
        Output(SEARCH_INPUT_ID, "disabled"),
        *[Output(control_id, "disabled") for control_id in FILTER_CONTROL_IDS.values()],
        Input("centre-user-dataset-store", "data"),
        prevent_initial_call=False
    )
    def toggle_loading_state(payload):
        return loading_state(payload)
