import dash
from dash import no_update
import dash_bootstrap_components as dbc

from src.callbacks import register_all_callbacks
from src.callbacks.centre_user_callbacks.centre_user_data_loader import (
    HIDDEN,
    LOADING_STYLE,
    build_dataset_payload,
    dataset_from_payload,
    load_outputs,
    loading_state,
    reload_outputs,
)
from src.callbacks.centre_user_callbacks.centre_user_data_table import (
    compute_table_view,
    filtered_frame_for_export,
    format_table_summary,
    parse_page_size,
    selected_row_indices,
)
from src.callbacks.centre_user_callbacks.centre_user_filters import keep_valid_selection, options_for_dataset
from src.core.filter_engine import NOT_STARTED_VALUE
from src.core.records import records_to_frame
from src.services.dataset_loader import DatasetLoader, LoadResult


def _payload():
    dataset = records_to_frame(
        [
            {"centreNumber": "C1", "customerJourneyPoint": "Onboarding", "trainingModule": "M1",
             "trainingType": "Induction", "userEmailAddress": "a@x.com", "status": "", "progress": 0},
            {"centreNumber": "C2", "customerJourneyPoint": "Onboarding", "trainingModule": "M2",
             "trainingType": "Refresher", "userEmailAddress": "b@x.com", "status": "Complete", "progress": 100},
        ]
    )
    return build_dataset_payload(LoadResult(request_id=3, dataset=dataset, error=None, accepted=True))


def test_payload_round_trip_and_pending_state():
    payload = _payload()

    assert dataset_from_payload(payload)["centreNumber"].tolist() == ["C1", "C2"]
    assert dataset_from_payload(None) is None
    assert dataset_from_payload({"records": []}).empty


def test_loading_state_while_no_dataset_is_loaded():
    style, search_disabled, *select_disabled = loading_state(None)

    assert style == LOADING_STYLE
    assert search_disabled
    assert select_disabled == [True] * 4


def test_loading_state_clears_once_a_dataset_lands():
    for payload in ({"records": []}, _payload()):
        style, search_disabled, *select_disabled = loading_state(payload)

        assert style == HIDDEN
        assert not search_disabled
        assert select_disabled == [False] * 4


def test_failed_load_publishes_empty_dataset_and_alert():
    result = LoadResult(request_id=1, dataset=records_to_frame([]), error="file missing", accepted=True)

    payload, alert = load_outputs(result)

    assert payload == {"records": []}
    assert isinstance(alert, dbc.Alert)
    assert "file missing" in alert.children
    assert loading_state(payload)[0] == HIDDEN


def test_successful_load_has_no_alert():
    payload, alert = load_outputs(LoadResult(request_id=2, dataset=records_to_frame([{"centreNumber": "C1"}]),
                                             error=None, accepted=True))

    assert payload["records"][0]["centreNumber"] == "C1"
    assert alert is None


def test_stale_load_leaves_the_page_alone():
    result = LoadResult(request_id=1, dataset=records_to_frame([]), error=None, accepted=False)

    assert load_outputs(result) == (no_update, no_update)


def test_reload_returns_the_page_to_its_loading_state():
    reload_request, payload = reload_outputs(2)

    assert reload_request == 2
    assert payload is None
    assert loading_state(payload)[0] == LOADING_STYLE
    assert reload_outputs(None) == (no_update, no_update)


def test_options_for_dataset_feeds_every_select():
    options = options_for_dataset(dataset_from_payload(_payload()))

    assert [o["value"] for o in options["centreNumber"]] == ["", "C1", "C2"]
    assert [o["label"] for o in options["status"]] == ["All", "Not Started", "Complete"]


def test_keep_valid_selection_resets_missing_values():
    options = [{"label": "All", "value": ""}, {"label": "C1", "value": "C1"}]

    assert keep_valid_selection("C1", options) == "C1"
    assert keep_valid_selection("C9", options) == ""
    assert keep_valid_selection(None, options) == ""


def test_compute_table_view_waits_for_data():
    assert compute_table_view(None, "", "", "", "", "") is None


def test_compute_table_view_applies_controls():
    view = compute_table_view(_payload(), "", None, None, None, NOT_STARTED_VALUE)

    assert [row["id"] for row in view.rows] == ["C1-a@x.com-M1"]
    assert view.total_count == 2


def test_selection_survives_refiltering_by_row_id():
    rows = [{"id": "C2-b@x.com-M2"}, {"id": "C1-a@x.com-M1"}]

    assert selected_row_indices(rows, ["C1-a@x.com-M1", "gone"]) == [1]
    assert selected_row_indices(rows, None) == []


def test_table_summary_and_page_size():
    assert format_table_summary(1, 1200, 0) == "Showing 1 of 1,200 records • 0 selected"
    assert parse_page_size("25") == 25
    assert parse_page_size("7") == 10
    assert parse_page_size(None) == 10


def test_export_frame_reflects_filters():
    export_df = filtered_frame_for_export(_payload(), "refresher", "", "", "", "")

    assert export_df["User Email"].tolist() == ["b@x.com"]
    assert filtered_frame_for_export(_payload(), "no-match", "", "", "", "") is None
    assert filtered_frame_for_export(None, "", "", "", "", "") is None


def test_register_all_callbacks_wires_the_page():
    app = dash.Dash(__name__)

    register_all_callbacks(app, loader=DatasetLoader(service_factory=lambda: None))

    outputs = " ".join(app.callback_map.keys())
    assert "centre-user-dataset-store.data" in outputs
    assert "centre-user-reload-request.data" in outputs
    assert "centre-user-table.data" in outputs
    assert "centre-user-download-pdf.data" in outputs
