"""Regeneration of the point cloud when parameters change."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional

from galaxy_cloud.generator import GalaxyGenerator, PointCloud
from galaxy_cloud.params import ParameterSet

logger = logging.getLogger(__name__)


class Regenerator:
    """Keeps the displayed cloud in step with the latest committed parameters.

    Any change of the parameter snapshot discards the current cloud and runs
    the generator from scratch. Asynchronous requests are tagged with a
    generation number; a result whose number is no longer the latest is
    dropped instead of committed, so at most one cloud is ever current.
    """

    def __init__(self, generator: Optional[GalaxyGenerator] = None):
        self.generator = generator if generator is not None else GalaxyGenerator()
        self._lock = threading.Lock()
        self._params: Optional[ParameterSet] = None
        self._cloud: Optional[PointCloud] = None
        self._generation = 0
        self._committed_generation = 0
        self._listeners: List[Callable[[PointCloud], None]] = []
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def params(self) -> Optional[ParameterSet]:
        """Last committed parameter snapshot."""
        return self._params

    @property
    def current(self) -> Optional[PointCloud]:
        """Cloud built from the last committed snapshot."""
        return self._cloud

    def add_listener(self, callback: Callable[[PointCloud], None]):
        """Call callback with every newly committed cloud."""
        self._listeners.append(callback)

    def on_parameter_change(self, params: ParameterSet) -> PointCloud:
        """Regenerate synchronously if params differ from the committed snapshot.

        Raises:
            InvalidParameter: Previous state is kept
        """
        params.validate()
        with self._lock:
            if self._is_committed(params):
                return self._cloud
            self._generation += 1
            generation = self._generation

        cloud = self.generator.generate(params)
        self._commit(generation, params, cloud)
        return cloud

    def request(self, params: ParameterSet) -> Future:
        """Schedule regeneration on the background worker.

        Returns:
            Future resolving to the committed PointCloud, or None when a newer
            request superseded this one.

        Raises:
            InvalidParameter: Raised immediately; nothing is scheduled
        """
        params.validate()
        with self._lock:
            if self._is_committed(params):
                future = Future()
                future.set_result(self._cloud)
                return future
            self._generation += 1
            generation = self._generation
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="galaxy-regen")
            executor = self._executor
        return executor.submit(self._run, generation, params)

    def _run(self, generation: int, params: ParameterSet) -> Optional[PointCloud]:
        if self._is_stale(generation):
            logger.debug(f"Skipping superseded generation {generation}")
            return None
        cloud = self.generator.generate(params)
        if not self._commit(generation, params, cloud):
            return None
        return cloud

    def _is_committed(self, params: ParameterSet) -> bool:
        # Caller holds the lock. A pending newer request means params are not final.
        return (
            self._cloud is not None
            and params == self._params
            and self._committed_generation == self._generation
        )

    def _is_stale(self, generation: int) -> bool:
        with self._lock:
            return generation != self._generation

    def _commit(self, generation: int, params: ParameterSet, cloud: PointCloud) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding result of superseded generation {generation}")
                return False
            self._params = params
            self._cloud = cloud
            self._committed_generation = generation
            listeners = list(self._listeners)
        logger.info(f"Committed cloud of {len(cloud)} particles (generation {generation})")
        for callback in listeners:
            callback(cloud)
        return True

    def close(self):
        """Stop the background worker, abandoning queued requests."""
        with self._lock:
            self._generation += 1
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
