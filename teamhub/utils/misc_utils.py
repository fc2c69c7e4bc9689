# teamhub/utils/misc_utils.py
import uuid
from pathlib import PurePath
from typing import Optional


def generate_record_id() -> str:
    """Generates a short opaque id for a team record.

    Ids are never derived from page content: re-exports of the same team page
    are not guaranteed to be byte-identical or unique.
    """
    return uuid.uuid4().hex[:12]


def file_stem(file_name: Optional[str]) -> Optional[str]:
    """Returns the file name without directories and extension."""
    if not file_name:
        return None
    return PurePath(file_name).stem or None
