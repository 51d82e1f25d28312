"""Centre user record schema and display helpers.

A dataset is a pandas DataFrame whose columns are the record fields in
declaration order. Records coming back from a dcc.Store arrive as a list of
dicts and are normalised here before any filtering happens.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

CENTRE_NUMBER = 'centreNumber'
CUSTOMER_JOURNEY_POINT = 'customerJourneyPoint'
TRAINING_MODULE = 'trainingModule'
TRAINING_TYPE = 'trainingType'
USER_EMAIL_ADDRESS = 'userEmailAddress'
STATUS = 'status'
PROGRESS = 'progress'

RECORD_FIELDS = (
    CENTRE_NUMBER,
    CUSTOMER_JOURNEY_POINT,
    TRAINING_MODULE,
    TRAINING_TYPE,
    USER_EMAIL_ADDRESS,
    STATUS,
    PROGRESS,
)

TEXT_FIELDS = RECORD_FIELDS[:-1]

# Fields with a filter control, in control order
CATEGORICAL_FIELDS = (CENTRE_NUMBER, CUSTOMER_JOURNEY_POINT, TRAINING_TYPE, STATUS)

# Free-text search scope; order matters for the concatenated haystack
SEARCH_FIELDS = RECORD_FIELDS

NOT_STARTED_LABEL = 'Not Started'

CENTRE_USER_COLUMNS: List[Dict[str, Any]] = [
    {'id': CENTRE_NUMBER, 'name': 'Centre Number'},
    {'id': CUSTOMER_JOURNEY_POINT, 'name': 'Customer Journey Point'},
    {'id': TRAINING_MODULE, 'name': 'Training Module'},
    {'id': TRAINING_TYPE, 'name': 'Training Type'},
    {'id': USER_EMAIL_ADDRESS, 'name': 'User Email'},
    {'id': STATUS, 'name': 'Status'},
    {'id': PROGRESS, 'name': 'Progress (%)', 'type': 'numeric'},
]


def stringify_value(value: Any) -> str:
    """
    Coerce a record value to the string used for matching.
    Missing values become '' and whole floats drop their '.0' (100.0 -> '100').
    """
    if value is None:
        return ''
    if isinstance(value, float):
        if math.isnan(value):
            return ''
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        return value
    try:
        if pd.isna(value):
            return ''
    except (TypeError, ValueError):
        pass
    return str(value)


def empty_dataset() -> pd.DataFrame:
    return pd.DataFrame(columns=list(RECORD_FIELDS))


def normalize_frame(frame: Optional[pd.DataFrame]) -> pd.DataFrame:
    """Return a copy with exactly the record columns, adding missing ones as None."""
    if frame is None:
        return empty_dataset()
    frame = frame.copy()
    for field in RECORD_FIELDS:
        if field not in frame.columns:
            frame[field] = None
    return frame[list(RECORD_FIELDS)]


def records_to_frame(records: Optional[Iterable[Mapping[str, Any]]]) -> pd.DataFrame:
    return normalize_frame(pd.DataFrame(list(records or [])))


def frame_to_records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """JSON-safe list of dicts (NaN -> None) for dcc.Store and DataTable."""
    frame = normalize_frame(frame)
    return frame.astype(object).where(frame.notna(), None).to_dict('records')


def field_value(record: Mapping[str, Any], field: str) -> str:
    return stringify_value(record.get(field))


def row_id(record: Mapping[str, Any]) -> str:
    """Row identity: centre number, user email and training module."""
    return (
        f"{field_value(record, CENTRE_NUMBER)}-"
        f"{field_value(record, USER_EMAIL_ADDRESS)}-"
        f"{field_value(record, TRAINING_MODULE)}"
    )


def format_status(value: Any) -> str:
    return stringify_value(value) or NOT_STARTED_LABEL


def to_table_rows(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Build DataTable rows: display-formatted status plus an 'id' key
    so DataTable selection tracks records rather than positions
    """
    rows = []
    for record in frame_to_records(frame):
        row = dict(record)
        row['id'] = row_id(record)
        row[STATUS] = format_status(record.get(STATUS))
        rows.append(row)
    return rows
