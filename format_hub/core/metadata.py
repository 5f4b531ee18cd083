"""Loading user-supplied subtitle metadata from JSON.

WHY: SRT carries no metadata, so an SRT → XCC conversion falls back to a
fixed default block. Users who know the title, language or video id can
supply them in a small JSON file instead.

HOW: The JSON object is validated against METADATA_SCHEMA with
jsonschema, then mapped onto a SubtitleMetadata. Keys use the same
names as the XCC metadata model (``videoId`` for ``<video-id>``).

RULES:
- Every key is optional; unknown keys are rejected
- ``seconds`` must be an integer, every other value a string
- Any read, parse or validation problem raises MetadataError
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema

from format_hub.core.document import SubtitleMetadata

METADATA_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "source": {"type": "string"},
        "title": {"type": "string"},
        "language": {"type": "string"},
        "generator": {"type": "string"},
        "videoId": {"type": "string"},
        "duration": {"type": "string"},
        "seconds": {"type": "integer"},
    },
    "additionalProperties": False,
}

# JSON key → SubtitleMetadata attribute
_KEY_MAP = {
    "source": "source",
    "title": "title",
    "language": "language",
    "generator": "generator",
    "videoId": "video_id",
    "duration": "duration",
    "seconds": "seconds",
}


class MetadataError(ValueError):
    """Raised when a metadata file cannot be read or fails validation."""


def metadata_from_dict(data: Dict[str, Any]) -> SubtitleMetadata:
    """Validate a decoded JSON object and build a SubtitleMetadata.

    Raises:
        MetadataError: If ``data`` does not match METADATA_SCHEMA.
    """
    try:
        jsonschema.validate(instance=data, schema=METADATA_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise MetadataError("Invalid metadata: {}".format(exc.message)) from exc

    return SubtitleMetadata(**{_KEY_MAP[key]: value for key, value in data.items()})


def load_metadata(path: Union[str, Path]) -> SubtitleMetadata:
    """Read a metadata JSON file from disk.

    Raises:
        MetadataError: If the file is missing, not JSON, or invalid.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise MetadataError("Cannot read metadata file {}: {}".format(path, exc)) from exc
    except json.JSONDecodeError as exc:
        raise MetadataError("Metadata file {} is not valid JSON: {}".format(path, exc)) from exc
    return metadata_from_dict(data)
