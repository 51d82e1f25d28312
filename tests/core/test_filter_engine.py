import pandas as pd
import pytest

from src.core.filter_engine import (
    NOT_STARTED_VALUE,
    FilterState,
    build_centre_user_view,
    build_dropdown_options,
    extract_filter_options,
    extract_options,
    filter_records,
    search_haystack,
)
from src.core.records import records_to_frame


def _scenario_dataset():
    return records_to_frame(
        [
            {
                "centreNumber": "C1",
                "customerJourneyPoint": "Onboarding",
                "trainingModule": "M1",
                "trainingType": "Induction",
                "userEmailAddress": "a@x.com",
                "status": "",
                "progress": 0,
            },
            {
                "centreNumber": "C2",
                "customerJourneyPoint": "Onboarding",
                "trainingModule": "M2",
                "trainingType": "Refresher",
                "userEmailAddress": "b@x.com",
                "status": "Complete",
                "progress": 100,
            },
        ]
    )


def _emails(frame):
    return frame["userEmailAddress"].tolist()


def test_empty_filter_state_returns_every_record_in_order():
    ds = _scenario_dataset()

    result = filter_records(ds, FilterState())

    assert FilterState().is_empty()
    assert _emails(result) == ["a@x.com", "b@x.com"]
    assert list(result.index) == list(ds.index)


def test_centre_filter_selects_first_record():
    result = filter_records(_scenario_dataset(), FilterState(centre_number="C1"))
    assert _emails(result) == ["a@x.com"]


def test_search_selects_second_record():
    result = filter_records(_scenario_dataset(), FilterState(search_term="refresher"))
    assert _emails(result) == ["b@x.com"]


def test_not_started_sentinel_matches_empty_status():
    result = filter_records(_scenario_dataset(), FilterState(status=NOT_STARTED_VALUE))
    assert _emails(result) == ["a@x.com"]


def test_combined_constraints_are_anded():
    ds = _scenario_dataset()

    matched = filter_records(ds, FilterState(centre_number="C1", search_term="onboarding"))
    assert _emails(matched) == ["a@x.com"]

    none = filter_records(ds, FilterState(centre_number="C1", search_term="refresher"))
    assert none.empty


@pytest.mark.parametrize("term", ["induct", "INDUCT", "InDuCtIoN"])
def test_search_is_case_insensitive(term):
    result = filter_records(_scenario_dataset(), FilterState(search_term=term))
    assert _emails(result) == ["a@x.com"]


def test_categorical_match_is_case_sensitive():
    ds = records_to_frame([{"centreNumber": "c001"}, {"centreNumber": "C001"}])

    result = filter_records(ds, FilterState(centre_number="C001"))

    assert result["centreNumber"].tolist() == ["C001"]


def test_search_term_is_not_trimmed():
    ds = _scenario_dataset()

    # "M1 Induction" is contiguous in the joined text, "M1  Induction" is not
    assert _emails(filter_records(ds, FilterState(search_term="m1 induction"))) == ["a@x.com"]
    assert filter_records(ds, FilterState(search_term="m1  induction")).empty
    # Leading space still matches across the field separator
    assert _emails(filter_records(ds, FilterState(search_term=" refresher"))) == ["b@x.com"]


def test_search_is_literal_not_regex():
    ds = records_to_frame([{"userEmailAddress": "a.b@x.com"}, {"userEmailAddress": "axb@x.com"}])

    result = filter_records(ds, FilterState(search_term="a.b"))

    assert _emails(result) == ["a.b@x.com"]


def test_search_covers_progress_without_float_suffix():
    ds = _scenario_dataset()
    ds["progress"] = ds["progress"].astype(float)

    assert _emails(filter_records(ds, FilterState(search_term="complete 100"))) == ["b@x.com"]
    assert filter_records(ds, FilterState(search_term="100.0")).empty


def test_search_haystack_joins_fields_in_declaration_order():
    haystack = search_haystack(_scenario_dataset())
    assert haystack.tolist() == [
        "c1 onboarding m1 induction a@x.com  0",
        "c2 onboarding m2 refresher b@x.com complete 100",
    ]


def test_missing_fields_read_as_empty_strings():
    ds = pd.DataFrame([{"centreNumber": "C9", "progress": None}])

    assert filter_records(ds, FilterState(status=NOT_STARTED_VALUE))["centreNumber"].tolist() == ["C9"]
    assert filter_records(ds, FilterState(training_type="Induction")).empty
    assert filter_records(ds, FilterState(search_term="c9"))["centreNumber"].tolist() == ["C9"]


def test_output_is_order_preserving_subsequence():
    ds = records_to_frame(
        [{"centreNumber": c, "trainingModule": f"M{i}"} for i, c in enumerate(["C1", "C2", "C1", "C3", "C1"])]
    )

    result = filter_records(ds, FilterState(centre_number="C1"))

    assert list(result.index) == [0, 2, 4]
    assert result["trainingModule"].tolist() == ["M0", "M2", "M4"]


def test_filter_does_not_mutate_dataset():
    ds = _scenario_dataset()
    before = ds.copy()

    filter_records(ds, FilterState(search_term="c1", centre_number="C1"))

    pd.testing.assert_frame_equal(ds, before)


def test_filter_handles_missing_and_empty_datasets():
    assert filter_records(None, FilterState(search_term="x")).empty
    assert filter_records(records_to_frame([]), FilterState(centre_number="C1")).empty


def test_extract_options_preserves_first_seen_order_and_empty_status():
    ds = records_to_frame(
        [
            {"centreNumber": "C2", "status": "Complete"},
            {"centreNumber": "C1", "status": ""},
            {"centreNumber": "C2", "status": None},
            {"centreNumber": "c2", "status": "Complete"},
        ]
    )

    assert extract_options(ds, "centreNumber") == ["C2", "C1", "c2"]
    assert extract_options(ds, "status") == ["Complete", ""]


def test_extract_options_is_stable_across_calls():
    ds = _scenario_dataset()
    assert extract_filter_options(ds) == extract_filter_options(ds)
    assert extract_filter_options(ds) == {
        "centreNumber": ["C1", "C2"],
        "customerJourneyPoint": ["Onboarding"],
        "trainingType": ["Induction", "Refresher"],
        "status": ["", "Complete"],
    }


def test_extract_options_edge_cases():
    assert extract_options(records_to_frame([]), "status") == []
    assert extract_options(None, "centreNumber") == []
    assert extract_options(pd.DataFrame([{"progress": 1}]), "trainingType") == [""]
    with pytest.raises(ValueError):
        extract_options(_scenario_dataset(), "progress")


def test_dropdown_options_prepend_all_and_label_not_started():
    options = build_dropdown_options(["", "Complete"], "status")

    assert options == [
        {"label": "All", "value": ""},
        {"label": "Not Started", "value": NOT_STARTED_VALUE},
        {"label": "Complete", "value": "Complete"},
    ]


def test_dropdown_options_skip_blank_values_for_other_fields():
    options = build_dropdown_options(["C1", ""], "centreNumber")
    assert [o["value"] for o in options] == ["", "C1"]


def test_filter_state_from_controls_maps_none_to_empty():
    state = FilterState.from_controls(None, "C1", None, None, NOT_STARTED_VALUE)

    assert state == FilterState(centre_number="C1", status=NOT_STARTED_VALUE)
    assert not state.is_empty()


def test_build_view_shapes_rows_for_display():
    view = build_centre_user_view(_scenario_dataset(), FilterState(status=NOT_STARTED_VALUE))

    assert view.total_count == 2
    assert view.filtered_count == 1
    assert view.rows[0]["status"] == "Not Started"
    assert view.rows[0]["id"] == "C1-a@x.com-M1"
