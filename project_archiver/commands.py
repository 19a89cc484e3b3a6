"""
Invocation surface for the UI layer.

``archive-export`` takes a request payload and answers with ``None`` on
success or a single display message on failure.
"""

import logging
from typing import Any, Mapping, Optional

from .core.dispatcher import BuildDispatcher
from .domain.errors import ArchiveError
from .domain.models import ArchiveRequest

logger = logging.getLogger(__name__)

ARCHIVE_EXPORT_COMMAND = 'archive-export'


async def archive_export(
    payload: Mapping[str, Any],
    dispatcher: Optional[BuildDispatcher] = None,
) -> Optional[str]:
    """
    Build the archive described by payload on a worker thread.
    
    Args:
        payload: ``{"destination_path": str, "entries": [{"path", "content"?, "source_path"?}]}``
        dispatcher: Dispatcher to run the build on (a private one is used if None)
        
    Returns:
        None on success, otherwise the error message for display
    """
    try:
        request = ArchiveRequest.from_payload(payload)
    except ArchiveError as e:
        logger.error(f"Rejected {ARCHIVE_EXPORT_COMMAND} request: {e}")
        return e.message
    
    if dispatcher is not None:
        return await _dispatch(dispatcher, request)
    
    private_dispatcher = BuildDispatcher()
    try:
        return await _dispatch(private_dispatcher, request)
    finally:
        # A cancelled caller leaves the build running; the loop must not wait on it
        private_dispatcher.shutdown(wait=False)


async def _dispatch(dispatcher: BuildDispatcher, request: ArchiveRequest) -> Optional[str]:
    try:
        await dispatcher.build_async(request.destination_path, request.entries)
    except ArchiveError as e:
        return e.message
    return None


COMMANDS = {
    ARCHIVE_EXPORT_COMMAND: archive_export,
}
