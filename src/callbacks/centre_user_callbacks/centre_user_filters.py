from typing import Dict, List, Optional

from dash import Input, Output, State, no_update
import pandas as pd

from src.callbacks.centre_user_callbacks.centre_user_data_loader import dataset_from_payload
from src.components.centre_user_components.centre_user_filters import FILTER_CONTROL_IDS, SEARCH_INPUT_ID
from src.core.filter_engine import ALL_VALUE, build_dropdown_options, extract_filter_options


def options_for_dataset(dataset: Optional[pd.DataFrame]) -> Dict[str, List[Dict[str, str]]]:
    """Select options per categorical field, each led by the "All" entry"""
    extracted = extract_filter_options(dataset)
    return {field: build_dropdown_options(extracted[field], field) for field in FILTER_CONTROL_IDS}


def keep_valid_selection(value: Optional[str], options: List[Dict[str, str]]) -> str:
    """Keep a selection only if the new dataset still offers it"""
    if value and any(option["value"] == value for option in options):
        return value
    return ALL_VALUE


def register_centre_user_filter_callbacks(app):
    """
    Register centre user filter callbacks
    Options are rebuilt whenever the dataset store changes
    """

    @app.callback(
        *[Output(control_id, "options") for control_id in FILTER_CONTROL_IDS.values()],
        *[Output(control_id, "value", allow_duplicate=True) for control_id in FILTER_CONTROL_IDS.values()],
        Input("centre-user-dataset-store", "data"),
        *[State(control_id, "value") for control_id in FILTER_CONTROL_IDS.values()],
        prevent_initial_call=True
    )
    def populate_filter_options(payload, *current_values):
        dataset = dataset_from_payload(payload)
        if dataset is None:
            # Reload pending; keep the current options and selections
            return (no_update,) * (2 * len(FILTER_CONTROL_IDS))
        options = options_for_dataset(dataset)
        option_lists = [options[field] for field in FILTER_CONTROL_IDS]
        values = [
            keep_valid_selection(value, field_options)
            for value, field_options in zip(current_values, option_lists)
        ]
        return (*option_lists, *values)

    @app.callback(
        Output(SEARCH_INPUT_ID, "value"),
        *[Output(control_id, "value", allow_duplicate=True) for control_id in FILTER_CONTROL_IDS.values()],
        Input("centre-user-clear-filters-btn", "n_clicks"),
        prevent_initial_call=True
    )
    def clear_all_filters(n_clicks):
        """
        Clear search text and all filter selections
        """
        return ("", *[ALL_VALUE] * len(FILTER_CONTROL_IDS))
