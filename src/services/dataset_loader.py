"""Request ordering for dataset loads.

Each page mount (and each manual reload) starts a load. Loads are not
cancellable, so two can overlap for the same view. Every load is tagged
with a request id and only the newest one for its view may publish its
result; anything that finishes later than a newer request is dropped.

Request ids come from one counter shared by all views, so an id is never
reused. A view is only tracked while it has a load in flight.
"""

import itertools
import logging
import threading
from typing import Callable, Dict, NamedTuple, Optional

import pandas as pd

from src.services.data_service import DataService, load_dataset_safely

logger = logging.getLogger(__name__)


class LoadResult(NamedTuple):
    request_id: int
    dataset: pd.DataFrame
    error: Optional[str]
    accepted: bool


class DatasetLoader:

    def __init__(self, service_factory: Callable[[], DataService] = DataService.from_config):
        self._service_factory = service_factory
        self._lock = threading.Lock()
        self._request_ids = itertools.count(1)
        self._latest: Dict[str, int] = {}

    def begin(self, view_id: str) -> int:
        """Register a new load for view_id and return its request id."""
        with self._lock:
            request_id = next(self._request_ids)
            self._latest[view_id] = request_id
            return request_id

    def is_current(self, view_id: str, request_id: int) -> bool:
        with self._lock:
            return self._latest.get(view_id) == request_id

    def pending_views(self) -> int:
        with self._lock:
            return len(self._latest)

    def complete(self, view_id: str, request_id: int) -> bool:
        """
        True if request_id is still the newest load for view_id.
        The newest load finishing stops tracking the view.
        """
        with self._lock:
            if self._latest.get(view_id) == request_id:
                del self._latest[view_id]
                return True
        logger.info(f"Discarding stale centre user load {request_id} for view {view_id}")
        return False

    def load(self, view_id: str) -> LoadResult:
        request_id = self.begin(view_id)
        dataset, error = load_dataset_safely(self._service_factory())
        return LoadResult(
            request_id=request_id,
            dataset=dataset,
            error=error,
            accepted=self.complete(view_id, request_id),
        )
