"""Centre user dataset loading.

The dataset comes from a SQL table (via SQLAlchemy) when a database URL is
configured, otherwise from a CSV, Excel or JSON file. Source headers are
mapped onto the record fields so exports from other tools load as-is.
"""

import json
import logging
import os
import re
from typing import Callable, Optional, Tuple

import pandas as pd

from src.config.db import get_centre_user_engine
from src.config.settings import AppConfig, config
from src.core.errors import CentreUserInsightsError, ConfigurationError, LoadError
from src.core.records import (
    CENTRE_NUMBER,
    CUSTOMER_JOURNEY_POINT,
    PROGRESS,
    STATUS,
    TEXT_FIELDS,
    TRAINING_MODULE,
    TRAINING_TYPE,
    USER_EMAIL_ADDRESS,
    empty_dataset,
    normalize_frame,
    stringify_value,
)
from src.utils.cache import cache
from src.utils.performance import monitor_query_performance

logger = logging.getLogger(__name__)

# Header spellings seen in source files, keyed by lower-case alphanumerics
COLUMN_ALIASES = {
    'centrenumber': CENTRE_NUMBER,
    'centreno': CENTRE_NUMBER,
    'centre': CENTRE_NUMBER,
    'centernumber': CENTRE_NUMBER,
    'customerjourneypoint': CUSTOMER_JOURNEY_POINT,
    'journeypoint': CUSTOMER_JOURNEY_POINT,
    'trainingmodule': TRAINING_MODULE,
    'module': TRAINING_MODULE,
    'trainingtype': TRAINING_TYPE,
    'useremailaddress': USER_EMAIL_ADDRESS,
    'useremail': USER_EMAIL_ADDRESS,
    'emailaddress': USER_EMAIL_ADDRESS,
    'email': USER_EMAIL_ADDRESS,
    'status': STATUS,
    'completionstatus': STATUS,
    'progress': PROGRESS,
    'progresspercent': PROGRESS,
}

SUPPORTED_FILE_TYPES = ('.csv', '.xlsx', '.json')


def _alias_key(column) -> str:
    return re.sub(r'[^a-z0-9]', '', str(column).lower())


def normalize_columns(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Rename source headers to record fields, keep only record fields,
    coerce text fields to strings ('' when missing) and progress to numbers
    """
    renamed = {}
    for column in raw.columns:
        field = COLUMN_ALIASES.get(_alias_key(column))
        if field and field not in renamed.values():
            renamed[column] = field

    unmatched = [str(c) for c in raw.columns if c not in renamed]
    if unmatched:
        logger.debug(f"Ignoring unrecognised centre user columns: {unmatched}")

    renamed_frame = raw.rename(columns=renamed)
    # A header already named after a field can collide with an earlier alias match
    renamed_frame = renamed_frame.loc[:, ~renamed_frame.columns.duplicated()]
    frame = normalize_frame(renamed_frame)
    for field in TEXT_FIELDS:
        frame[field] = frame[field].map(stringify_value).astype(object)
    frame[PROGRESS] = pd.to_numeric(frame[PROGRESS], errors='coerce')
    return frame.reset_index(drop=True)


def read_centre_user_file(path: str) -> pd.DataFrame:
    """Read a raw centre user export; text columns are kept as text."""
    suffix = os.path.splitext(path)[1].lower()
    if suffix == '.csv':
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix == '.xlsx':
        return pd.read_excel(path, dtype=str, engine='openpyxl')
    if suffix == '.json':
        with open(path, encoding='utf-8') as handle:
            payload = json.load(handle)
        # Processed data bundles nest the records under 'centreUserData'
        if isinstance(payload, dict):
            if 'centreUserData' not in payload:
                raise LoadError("JSON data file must be a list of records or contain 'centreUserData'")
            payload = payload['centreUserData']
        return pd.DataFrame(payload)
    raise LoadError(f"Unsupported data file type '{suffix}', expected one of {SUPPORTED_FILE_TYPES}")


@cache.memoize()
def _read_centre_user_file_cached(path: str, modified_at: float) -> pd.DataFrame:
    return read_centre_user_file(path)


def read_centre_user_file_cached(path: str) -> pd.DataFrame:
    """Memoized read keyed by modification time, so an edited file is re-read."""
    return _read_centre_user_file_cached(path, os.path.getmtime(path))


def read_centre_user_table(database_url: str, table_name: str) -> pd.DataFrame:
    engine = get_centre_user_engine(database_url)
    return pd.read_sql_table(table_name, engine)


class DataService:
    """
    Loads the centre user dataset from the configured source.
    load_data() raises LoadError / ConfigurationError; callers at the UI
    boundary use load_dataset_safely() instead.
    """

    def __init__(self, data_file: Optional[str] = None, database_url: Optional[str] = None,
                 table_name: Optional[str] = None,
                 file_reader: Callable[[str], pd.DataFrame] = read_centre_user_file_cached,
                 table_reader: Callable[[str, str], pd.DataFrame] = read_centre_user_table):
        self.data_file = data_file
        self.database_url = database_url
        self.table_name = table_name
        self.file_reader = file_reader
        self.table_reader = table_reader

    @classmethod
    def from_config(cls, app_config: AppConfig = None) -> 'DataService':
        app_config = app_config or config
        return cls(
            data_file=app_config.CENTRE_USER_DATA_FILE,
            database_url=app_config.CENTRE_USER_DATABASE_URL,
            table_name=app_config.CENTRE_USER_TABLE,
        )

    def describe_source(self) -> str:
        if self.database_url:
            return f"table '{self.table_name}'"
        return f"file '{self.data_file}'"

    def _read_raw(self) -> pd.DataFrame:
        if self.database_url:
            if not self.table_name:
                raise ConfigurationError("CENTRE_USER_TABLE must be set when CENTRE_USER_DATABASE_URL is used")
            return self.table_reader(self.database_url, self.table_name)
        if not self.data_file:
            raise ConfigurationError("No centre user data source configured")
        if not os.path.exists(self.data_file):
            raise LoadError(f"Centre user data file not found: {self.data_file}")
        return self.file_reader(self.data_file)

    @monitor_query_performance("Centre User Data Load")
    def load_data(self) -> pd.DataFrame:
        try:
            raw = self._read_raw()
            return normalize_columns(raw)
        except CentreUserInsightsError:
            raise
        except Exception as e:
            raise LoadError(f"Failed to load centre user data from {self.describe_source()}: {e}") from e


def load_dataset_safely(service: DataService) -> Tuple[pd.DataFrame, Optional[str]]:
    """
    Load at the UI boundary: on failure log, fall back to an empty dataset
    and return the error message for display
    """
    try:
        return service.load_data(), None
    except CentreUserInsightsError as e:
        logger.error(f"❌ Error loading centre user data: {e}")
        return empty_dataset(), str(e)
