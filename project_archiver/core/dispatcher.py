"""
Build Dispatcher.

Runs archive builds on a worker thread so the calling thread, usually the
one driving an event loop or UI, stays responsive while archives are written.
"""

import asyncio
import logging
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Sequence, Union

from ..domain.errors import ArchiveError, DispatchError
from ..domain.models import ArchiveEntry, ArchiveRequest
from .builder import ArchiveBuilder, BuildStats

logger = logging.getLogger(__name__)


class BuildDispatcher:
    """
    Submits whole builds to a worker pool.
    
    A build runs start to finish on one worker thread; entries within a
    build are never processed in parallel. There is no cancellation once a
    build has started and no timeout.
    """
    
    def __init__(
        self,
        builder: ArchiveBuilder | None = None,
        max_workers: int = 1,
    ):
        """
        Initialize dispatcher.
        
        Args:
            builder: Builder run for each request (creates default if None)
            max_workers: Worker threads; builds to distinct destinations may overlap
        """
        self.builder = builder or ArchiveBuilder()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix='archive-build',
        )
    
    def __enter__(self) -> "BuildDispatcher":
        return self
    
    def __exit__(self, *exc_info) -> None:
        self.shutdown()
    
    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting builds; optionally wait for running ones."""
        self._executor.shutdown(wait=wait)
    
    def submit(
        self,
        destination_path: Union[str, Path],
        entries: Sequence[ArchiveEntry],
    ) -> "Future[BuildStats]":
        """
        Hand a build to the worker pool.
        
        Args:
            destination_path: Archive file to write
            entries: Entries in member order
            
        Returns:
            Future resolving to the build statistics
            
        Raises:
            DispatchError: If the pool no longer accepts work
        """
        # Snapshot so later caller mutation cannot reorder a queued build
        entries = tuple(entries)
        try:
            future = self._executor.submit(self.builder.build, destination_path, entries)
        except RuntimeError as e:
            logger.error(f"Cannot dispatch build for {destination_path}: {e}")
            raise DispatchError(e) from e
        
        logger.debug(f"Build dispatched: {destination_path} ({len(entries)} entries)")
        return future
    
    def run(
        self,
        destination_path: Union[str, Path],
        entries: Sequence[ArchiveEntry],
    ) -> BuildStats:
        """
        Build on the worker pool and block until the build completes.
        
        Raises:
            ArchiveError: The build failed
            DispatchError: The dispatch mechanism failed
        """
        future = self.submit(destination_path, entries)
        return self._collect(future)
    
    def run_request(self, request: ArchiveRequest) -> BuildStats:
        """Build a parsed request, blocking until it completes."""
        return self.run(request.destination_path, request.entries)
    
    async def build_async(
        self,
        destination_path: Union[str, Path],
        entries: Sequence[ArchiveEntry],
    ) -> BuildStats:
        """
        Build on the worker pool, suspending the awaiting coroutine only.
        
        Raises:
            ArchiveError: The build failed
            DispatchError: The dispatch mechanism failed
        """
        future = self.submit(destination_path, entries)
        try:
            return await asyncio.wrap_future(future)
        except ArchiveError:
            raise
        except asyncio.CancelledError as e:
            # Only a cancelled build is a dispatch failure; a cancelled caller propagates
            if not future.cancelled():
                raise
            raise DispatchError("build was cancelled before completing") from e
        except Exception as e:
            logger.exception(f"Worker failed outside the build for {destination_path}")
            raise DispatchError(e) from e
    
    @staticmethod
    def _collect(future: "Future[BuildStats]") -> BuildStats:
        """Wait for a build future, separating dispatch failures from build errors."""
        try:
            return future.result()
        except ArchiveError:
            raise
        except CancelledError as e:
            raise DispatchError("build was cancelled before completing") from e
        except Exception as e:
            logger.exception("Worker failed outside the build")
            raise DispatchError(e) from e
