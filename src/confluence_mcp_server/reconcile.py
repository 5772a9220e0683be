"""Confluence Attachment Reconciliation

Create-or-update by file name: each local file replaces the data of the
same-named attachment when one exists and becomes a new attachment
otherwise. Files are processed one at a time and a failure on one file
never stops the rest of the batch.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .attachments import AttachmentOperations
from .models.attachment import Attachment
from .utils.codec import PathLike
from .utils.endpoints import strip_type_prefix
from .utils.errors import ConfluenceError, MalformedEndpointError, NotFoundError

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"


@dataclass(frozen=True)
class SyncOutcome:
    """Result of reconciling one local file."""

    file_path: str
    action: Optional[str] = None
    attachment: Optional[Attachment] = None
    error: Optional[ConfluenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SyncResult:
    """Outcomes in input order, one per file."""

    outcomes: Tuple[SyncOutcome, ...]

    def __iter__(self) -> Iterator[SyncOutcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def attachments(self) -> List[Attachment]:
        """Attachments created or updated successfully."""
        return [o.attachment for o in self.outcomes if o.ok]

    @property
    def errors(self) -> List[ConfluenceError]:
        """Per-file failures."""
        return [o.error for o in self.outcomes if not o.ok]


def _sync_file(
    operations: AttachmentOperations,
    content_id: str,
    path: str,
    minor_edit: bool
) -> SyncOutcome:
    filename = os.path.basename(path)

    try:
        existing = operations.get_by_filename(content_id, filename)
    except NotFoundError:
        logger.debug(f"No attachment named '{filename}', creating")
        return SyncOutcome(path, CREATED, operations.create(content_id, path))

    logger.debug(f"Found attachment {existing.id} for '{filename}', updating")
    attachment_id = strip_type_prefix(existing.id)
    return SyncOutcome(
        path,
        UPDATED,
        operations.update(content_id, attachment_id, path, minor_edit=minor_edit)
    )


def add_update_attachments(
    operations: AttachmentOperations,
    content_id: str,
    file_paths: Sequence[PathLike],
    minor_edit: bool = True
) -> SyncResult:
    """Reconcile local files against a content's attachments.

    For each file, look up an attachment with the same base name. If none
    exists, upload the file as a new attachment; otherwise upload it as a
    new version of the one found.

    Args:
        operations: Attachment operations bound to a Confluence instance
        content_id: Page or blog post ID
        file_paths: Local files to upload
        minor_edit: minorEdit flag sent with updates (default: True)

    Returns:
        SyncResult with one outcome per input file, in input order

    Raises:
        MalformedEndpointError: If content_id is empty (no file is processed)
    """
    if not content_id or not str(content_id).strip():
        raise MalformedEndpointError("Content ID cannot be empty")

    logger.info(f"Syncing {len(file_paths)} files to content {content_id}")
    outcomes = []

    for index, file_path in enumerate(file_paths):
        path = os.fspath(file_path)
        try:
            outcome = _sync_file(operations, content_id, path, minor_edit)
            logger.debug(
                f"File {index + 1}/{len(file_paths)} {outcome.action}: "
                f"{path} -> {outcome.attachment.id}"
            )
        except ConfluenceError as e:
            logger.error(f"Sync failed for {path}: {e}")
            outcome = SyncOutcome(path, error=e)
        outcomes.append(outcome)

    result = SyncResult(tuple(outcomes))
    logger.info(
        f"Sync complete: {len(result.attachments)}/{len(result)} succeeded "
        f"on content {content_id}"
    )
    if result.errors:
        logger.warning(f"{len(result.errors)} files failed to sync to content {content_id}")
    return result
