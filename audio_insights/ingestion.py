"""Validation and base64 encoding of uploaded audio files."""

import asyncio
import base64
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from audio_insights.errors import ReadFailure, SizeLimitExceeded


MAX_UPLOAD_MB = 20
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
DEFAULT_MIME_TYPE = "audio/mpeg"

# Extensions offered by the file picker; the model only takes MP3 and WAV audio
AUDIO_EXTENSIONS = ["mp3", "wav"]


@dataclass(frozen=True)
class EncodedAudio:
    """An uploaded file ready to be sent to the model."""

    name: str
    mime_type: str
    data: str
    size: int


def validate_size(name: str, size: int) -> None:
    """Raise SizeLimitExceeded if the file is over the upload ceiling."""
    if size > MAX_UPLOAD_BYTES:
        raise SizeLimitExceeded(
            f"File is too large ({format_file_size(size)}). "
            f"Please select an audio file under {MAX_UPLOAD_MB}MB."
        )


def resolve_mime_type(reported: Optional[str]) -> str:
    """Return the reported MIME type, or audio/mpeg when the browser gave none."""
    if reported and reported.strip():
        return reported.strip()
    return DEFAULT_MIME_TYPE


def encode_audio(name: str, content: Union[bytes, BinaryIO], mime_type: Optional[str] = None) -> EncodedAudio:
    """
    Read the full file contents and encode them as base64.

    Args:
        name: Original file name
        content: Raw bytes or a binary file-like object
        mime_type: MIME type reported for the file, may be empty

    Returns:
        EncodedAudio with the base64 payload

    Raises:
        ReadFailure: If the content cannot be read
    """
    try:
        raw = content if isinstance(content, (bytes, bytearray)) else content.read()
        if not isinstance(raw, (bytes, bytearray)):
            raise ValueError(f"expected bytes, got {type(raw).__name__}")
        data = base64.b64encode(raw).decode("ascii")
    except (OSError, ValueError, AttributeError) as e:
        raise ReadFailure(f"Failed to read file: {e}") from e

    return EncodedAudio(
        name=name,
        mime_type=resolve_mime_type(mime_type),
        data=data,
        size=len(raw),
    )


def _read_upload_sync(upload) -> EncodedAudio:
    try:
        content = upload.getvalue()
    except (OSError, ValueError) as e:
        raise ReadFailure(f"Failed to read file: {e}") from e
    return encode_audio(upload.name, content, upload.type)


async def read_upload(upload) -> EncodedAudio:
    """
    Validate and encode an uploaded file without blocking the event loop.

    ``upload`` is a Streamlit ``UploadedFile`` or anything exposing ``name``,
    ``size``, ``type`` and ``getvalue()``. The size check runs before the
    file is read.
    """
    validate_size(upload.name, upload.size)
    return await asyncio.to_thread(_read_upload_sync, upload)


def format_file_size(size: int) -> str:
    """Format a byte count the way the dashboard shows it."""
    size_mb = size / (1024 * 1024)
    if size_mb >= 0.1:
        return f"{size_mb:.2f} MB"
    return f"{size / 1024:.1f} KB"
