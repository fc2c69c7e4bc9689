# teamhub/extraction/pipeline.py
import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from loguru import logger
from pydantic import BaseModel

from teamhub.config.settings import settings
from teamhub.locator.document_locator import (
    DocumentLocator,
    ParseFailure,
    parse_document,
)
from teamhub.models.collection import TeamCollection
from teamhub.models.enums import PlayerAlignment, Variant
from teamhub.models.team import TeamRecord
from teamhub.models.variant import get_profile
from teamhub.normalization.normalizer import RecordNormalizer

PathLike = Union[str, Path]


class FileFailure(BaseModel):
    """A file of a batch that produced no record."""

    path: str
    reason: str


class BatchResult(BaseModel):
    """Outcome of one batch upload; records keep the submission order."""

    records: List[TeamRecord] = []
    failures: List[FileFailure] = []


def extract_team(
    html: Union[str, bytes],
    file_name: Optional[str] = None,
    variant: Optional[Variant] = None,
    alignment: Optional[PlayerAlignment] = None,
) -> TeamRecord:
    """Extracts one team record from a page's markup.

    Raises:
        ParseFailure: If the content cannot be read as a markup document.
            Missing fields never raise; they resolve to defaults.
    """
    profile = get_profile(variant or settings.variant)
    alignment = PlayerAlignment(alignment or settings.player_alignment)

    soup = parse_document(html)
    raw = DocumentLocator(soup).extract(alignment)
    return RecordNormalizer(profile).normalize(raw, file_name=file_name)


def read_team_file(path: PathLike) -> str:
    """Reads an exported page as UTF-8 text."""
    data = Path(path).read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseFailure(f"{path} is not UTF-8 text: {e}") from e


def extract_team_file(
    path: PathLike,
    variant: Optional[Variant] = None,
    alignment: Optional[PlayerAlignment] = None,
) -> TeamRecord:
    path = Path(path)
    logger.info(f"Extracting team from {path.name}")
    return extract_team(
        read_team_file(path), file_name=path.name, variant=variant, alignment=alignment
    )


async def extract_batch(
    paths: Sequence[PathLike],
    variant: Optional[Variant] = None,
    alignment: Optional[PlayerAlignment] = None,
) -> BatchResult:
    """Extracts every file concurrently and joins on all of them.

    A failing file is reported in ``failures`` and never aborts its siblings.
    """

    async def run_extraction(path: PathLike) -> Tuple[str, object]:
        try:
            record = await asyncio.to_thread(extract_team_file, path, variant, alignment)
            return str(path), record
        except ParseFailure as e:
            logger.error(f"Could not parse {path}: {e}")
            return str(path), e
        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            return str(path), e

    # gather() keeps submission order regardless of completion order
    outcomes = await asyncio.gather(*(run_extraction(p) for p in paths))

    result = BatchResult()
    for path, outcome in outcomes:
        if isinstance(outcome, TeamRecord):
            result.records.append(outcome)
        else:
            result.failures.append(FileFailure(path=path, reason=str(outcome)))

    logger.info(
        f"Batch finished: {len(result.records)} record(s), {len(result.failures)} failure(s)"
    )
    return result


async def ingest_files(
    collection: TeamCollection,
    paths: Sequence[PathLike],
    variant: Optional[Variant] = None,
    alignment: Optional[PlayerAlignment] = None,
) -> Tuple[TeamCollection, BatchResult]:
    """Extracts a batch and appends all of its records in a single step."""
    result = await extract_batch(paths, variant=variant, alignment=alignment)
    return collection.append_batch(result.records), result
