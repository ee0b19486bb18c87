"""
In-memory recipe store.

RecordStore holds one fetched-once snapshot of the recipe collection plus an
identity cache (record_id -> Recipe). It is the single authoritative copy of
the collection for the whole process: the Streamlit frontend creates one
instance at its composition root and passes it to every page.

Fetch lifecycle (see FetchStatus):
- not_started -> in_flight -> ready | failed
- failed -> in_flight (a later fetch_all retries)
- ready is terminal for the session; fetch_all returns the snapshot without
  calling the backend again

Concurrent fetch_all calls share one in-flight request. Concurrent
fetch_by_id misses for the same id are not de-duplicated; both populate the
cache with equivalent data and the last write wins.

# NOTE: The snapshot is never invalidated. Edits made through the backend are
    not reflected until the process restarts.
"""

import logging
import threading
from concurrent.futures import Future
from enum import Enum
from typing import Dict, Optional, Tuple

from catalog.connectors.base import BaseRecipeSource
from catalog.config import DEFAULT_FETCH_LIMIT
from catalog.exceptions import CatalogError, RecordFetchError
from catalog.models import Recipe

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    """Lifecycle of the full collection fetch."""
    NOT_STARTED = "not_started"
    IN_FLIGHT = "in_flight"
    READY = "ready"
    FAILED = "failed"


class RecordStore:
    """
    Fetch-once recipe collection with an identity-indexed cache.

    The identity cache is a superset of the collection: every recipe in the
    collection is reachable by record_id, and recipes fetched individually are
    cached even before (or without) a full fetch.
    """

    def __init__(self, source: BaseRecipeSource, fetch_limit: int = DEFAULT_FETCH_LIMIT) -> None:
        """
        Args:
            source: Recipe source used for network fetches
            fetch_limit: Page size requested for the full collection
        """
        self.source = source
        self.fetch_limit = fetch_limit
        self._lock = threading.Lock()
        self._records: Tuple[Recipe, ...] = ()
        self._cache: Dict[str, Recipe] = {}
        self._status = FetchStatus.NOT_STARTED
        self._last_error: Optional[CatalogError] = None
        self._in_flight: Optional[Future] = None

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status is FetchStatus.READY

    @property
    def last_error(self) -> Optional[CatalogError]:
        """The error from the most recent failed fetch_all, cleared on success."""
        return self._last_error

    @property
    def records(self) -> Tuple[Recipe, ...]:
        """The collection snapshot. Empty until a fetch_all succeeds."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def fetch_all(self) -> Tuple[Recipe, ...]:
        """
        Load the full collection once.

        If the collection is already loaded, returns it without a network call.
        If another caller is loading it, waits for that request and shares its
        outcome. Otherwise requests the whole collection from the source, then
        replaces the snapshot and bulk-populates the identity cache.

        Returns:
            The collection snapshot.

        Raises:
            RecordFetchError: If the fetch fails. The previous snapshot and the
                cache are left untouched and the status becomes FAILED, so a
                later call retries.
        """
        with self._lock:
            if self._status is FetchStatus.READY:
                return self._records
            if self._in_flight is not None:
                future = self._in_flight
                owner = False
            else:
                future = Future()
                self._in_flight = future
                self._status = FetchStatus.IN_FLIGHT
                owner = True

        if not owner:
            logger.debug("fetch_all already in flight, waiting for it")
            return future.result()

        try:
            recipes = self.source.fetch_recipes(self.fetch_limit)
        except RecordFetchError as e:
            logger.warning(f"Failed to load recipe collection: {e}")
            self._fail(future, e)
            raise
        except Exception as e:
            error = RecordFetchError(f"Unexpected error loading recipes: {e}", operation="fetch_all")
            logger.exception("Unexpected error loading recipe collection")
            self._fail(future, error)
            raise error from e
        except BaseException as e:
            # Interrupted (KeyboardInterrupt, Streamlit stop/rerun): free the
            # in-flight slot so waiters wake up and a later call can retry
            error = RecordFetchError(f"Loading recipes was interrupted: {e!r}", operation="fetch_all")
            logger.warning("Recipe collection fetch was interrupted")
            self._fail(future, error)
            raise

        snapshot = tuple(recipes)
        with self._lock:
            self._records = snapshot
            for recipe in snapshot:
                self._cache[recipe.record_id] = recipe
            self._status = FetchStatus.READY
            self._last_error = None
            self._in_flight = None

        logger.info(f"Loaded {len(snapshot)} recipes from {self.source.name}")
        future.set_result(snapshot)
        return snapshot

    def _fail(self, future: Future, error: RecordFetchError) -> None:
        with self._lock:
            self._status = FetchStatus.FAILED
            self._last_error = error
            self._in_flight = None
        future.set_exception(error)

    def fetch_by_id(self, record_id: str) -> Recipe:
        """
        Get one recipe, from the cache when possible.

        Args:
            record_id: The recipe's backend identity (`_id`)

        Returns:
            The cached Recipe on a hit; otherwise the Recipe fetched from the
            source, which is then cached under `record_id`.

        Raises:
            RecordFetchError: If the network fetch fails. Nothing is cached for
                the id, so a later call tries the network again.
        """
        cached = self._cache.get(record_id)
        if cached is not None:
            logger.debug(f"Cache hit for recipe {record_id}")
            return cached

        try:
            recipe = self.source.fetch_recipe(record_id)
        except RecordFetchError as e:
            logger.warning(f"Failed to load recipe {record_id}: {e}")
            raise

        with self._lock:
            self._cache[record_id] = recipe
        return recipe

    def get_cached(self, record_id: str) -> Optional[Recipe]:
        """Look up a recipe in the identity cache without touching the network."""
        return self._cache.get(record_id)

    def cache_size(self) -> int:
        """Number of recipes reachable by identity."""
        return len(self._cache)

    def summary(self) -> Dict[str, object]:
        """
        Describe the store for status pages.

        Returns:
            Dictionary with status, record_count, cache_size and last_error
            (message string or None).
        """
        return {
            "status": self._status.value,
            "record_count": len(self._records),
            "cache_size": len(self._cache),
            "last_error": str(self._last_error) if self._last_error else None,
        }
