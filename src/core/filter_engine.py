"""Record filter engine for the centre user view.

Two parts, both pure functions of their inputs:

* option extraction: distinct values of each categorical field, in the
  order they first appear, used to populate the filter controls;
* predicate evaluation: free-text search ANDed with exact-match
  categorical constraints, returning an order-preserving subset.

Nothing here is cached. Callers recompute on every dataset or filter change.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional

import pandas as pd

from src.core.records import (
    CATEGORICAL_FIELDS,
    CENTRE_NUMBER,
    CUSTOMER_JOURNEY_POINT,
    NOT_STARTED_LABEL,
    SEARCH_FIELDS,
    STATUS,
    TRAINING_TYPE,
    normalize_frame,
    stringify_value,
    to_table_rows,
)
from src.utils.performance import monitor_performance

ALL_LABEL = 'All'
ALL_VALUE = ''

# Control value for "status is empty"; '' already means "All"
NOT_STARTED_VALUE = '__not_started__'


@dataclass(frozen=True)
class FilterState:
    """Current search text and categorical selections. '' means no constraint."""

    search_term: str = ''
    centre_number: str = ''
    customer_journey_point: str = ''
    training_type: str = ''
    status: str = ''

    @classmethod
    def from_controls(cls, search_term=None, centre_number=None,
                      customer_journey_point=None, training_type=None,
                      status=None) -> 'FilterState':
        """Build a state from raw Dash control values (None -> '')."""
        return cls(
            search_term=search_term or '',
            centre_number=centre_number or '',
            customer_journey_point=customer_journey_point or '',
            training_type=training_type or '',
            status=status or '',
        )

    def categorical_constraints(self) -> Dict[str, str]:
        return {
            CENTRE_NUMBER: self.centre_number,
            CUSTOMER_JOURNEY_POINT: self.customer_journey_point,
            TRAINING_TYPE: self.training_type,
            STATUS: self.status,
        }

    def is_empty(self) -> bool:
        return not self.search_term and not any(self.categorical_constraints().values())


class CentreUserView(NamedTuple):
    filtered: pd.DataFrame
    rows: List[Dict[str, Any]]
    total_count: int
    filtered_count: int


def _field_strings(dataset: pd.DataFrame, field: str) -> pd.Series:
    """Field values as match strings; a missing column reads as ''."""
    if field not in dataset.columns:
        return pd.Series([''] * len(dataset), index=dataset.index, dtype=object)
    return dataset[field].map(stringify_value).astype(object)


def extract_options(dataset: Optional[pd.DataFrame], field: str) -> List[str]:
    """
    Distinct values of one categorical field, first-seen order.
    Matching is exact and case-sensitive; '' is kept as its own value.
    """
    if field not in CATEGORICAL_FIELDS:
        raise ValueError(f"{field!r} is not a filterable field; expected one of {CATEGORICAL_FIELDS}")
    if dataset is None or len(dataset) == 0:
        return []
    return list(dict.fromkeys(_field_strings(dataset, field).tolist()))


def extract_filter_options(dataset: Optional[pd.DataFrame]) -> Dict[str, List[str]]:
    return {field: extract_options(dataset, field) for field in CATEGORICAL_FIELDS}


def build_dropdown_options(values: List[str], field: str) -> List[Dict[str, str]]:
    """
    Control options for one field: an "All" entry followed by the extracted values.
    An empty status is shown as "Not Started"; empty values of other fields
    cannot be told apart from "All" and are left out.
    """
    options = [{'label': ALL_LABEL, 'value': ALL_VALUE}]
    for value in values:
        if value == '':
            if field == STATUS:
                options.append({'label': NOT_STARTED_LABEL, 'value': NOT_STARTED_VALUE})
            continue
        options.append({'label': value, 'value': value})
    return options


def search_haystack(dataset: pd.DataFrame) -> pd.Series:
    """Lower-cased, space-joined SEARCH_FIELDS values for each record."""
    columns = [_field_strings(dataset, field).tolist() for field in SEARCH_FIELDS]
    joined = [' '.join(values).lower() for values in zip(*columns)]
    return pd.Series(joined, index=dataset.index, dtype=object)


@monitor_performance("Centre User Record Filtering")
def filter_records(dataset: Optional[pd.DataFrame], filter_state: FilterState) -> pd.DataFrame:
    """
    Records matching every active constraint, in their original order.

    Search is a literal, case-insensitive substring test against the
    concatenated search fields; the term is not trimmed. Categorical
    constraints are exact string matches. Missing fields read as ''.
    """
    if dataset is None:
        return normalize_frame(None)
    if len(dataset) == 0:
        return dataset.copy()

    mask = pd.Series(True, index=dataset.index)

    if filter_state.search_term:
        haystack = search_haystack(dataset)
        mask &= haystack.str.contains(filter_state.search_term.lower(), regex=False)

    for field, value in filter_state.categorical_constraints().items():
        if not value:
            continue
        if field == STATUS and value == NOT_STARTED_VALUE:
            value = ''
        mask &= _field_strings(dataset, field) == value

    return dataset.loc[mask.to_numpy()]


def build_centre_user_view(dataset: Optional[pd.DataFrame], filter_state: FilterState) -> CentreUserView:
    """Run the filter pipeline and shape the result for the data table."""
    filtered = filter_records(dataset, filter_state)
    return CentreUserView(
        filtered=filtered,
        rows=to_table_rows(filtered),
        total_count=0 if dataset is None else len(dataset),
        filtered_count=len(filtered),
    )
