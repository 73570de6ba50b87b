"""Linear ingestion -> inference task driving the state machine."""

import asyncio
import logging
from typing import Callable, Optional

from audio_insights.errors import AnalysisError, SizeLimitExceeded
from audio_insights.ingestion import read_upload, validate_size
from audio_insights.inference import DEFAULT_MODEL
from audio_insights.state import (
    AnalysisSucceeded,
    AppSession,
    EncodeCompleted,
    Failed,
    FileSelected,
    transition,
)


logger = logging.getLogger(__name__)

SessionCallback = Callable[[AppSession], None]


async def run_analysis(
    session: AppSession,
    upload,
    service,
    model: Optional[str] = None,
    on_change: Optional[SessionCallback] = None,
) -> AppSession:
    """
    Take one uploaded file through encoding and remote analysis.

    Args:
        session: Current session, expected to be IDLE
        upload: Uploaded file (``name``, ``size``, ``type``, ``getvalue()``)
        service: Object with ``analyze_audio(base64_audio, mime_type, model)``
        model: Model id passed to the service, defaults to DEFAULT_MODEL
        on_change: Called with the new session after every transition

    Returns:
        The final session, COMPLETED or ERROR
    """

    def apply(event) -> AppSession:
        nonlocal session
        session = transition(session, event)
        logger.debug("Session is now %s", session.state.value)
        if on_change:
            on_change(session)
        return session

    try:
        validate_size(upload.name, upload.size)
    except SizeLimitExceeded as e:
        logger.info("Rejected %s: %s", upload.name, e)
        return apply(Failed(str(e)))

    apply(FileSelected(upload.name, upload.size, upload.type))

    try:
        encoded = await read_upload(upload)
        apply(EncodeCompleted(encoded.mime_type))

        result = await asyncio.to_thread(
            service.analyze_audio,
            encoded.data,
            encoded.mime_type,
            model or DEFAULT_MODEL,
        )
    except AnalysisError as e:
        logger.warning("Analysis of %s failed: %s", upload.name, e)
        return apply(Failed(str(e)))
    except Exception as e:
        logger.exception("Unexpected error while analyzing %s", upload.name)
        return apply(Failed(str(e) or AnalysisError.default_message))

    logger.info("Analysis of %s completed", upload.name)
    return apply(AnalysisSucceeded(result))
