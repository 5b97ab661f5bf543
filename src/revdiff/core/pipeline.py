"""Review pipeline: fetch, normalize, and record every changed file of a review

Per-file failures (timeouts, missing blobs, malformed patches) degrade to
placeholder entries; one file never aborts the batch.
"""

import asyncio
import logging
from typing import Optional

from revdiff.config import Settings
from revdiff.core.errors import ContentFetchError
from revdiff.core.models import (
    ChangedFile, ChangeKind, ContentPair, DiffEntry, DiffStatus, RawPatch, ReviewRequest, UnifiedDiff,
)
from revdiff.core.normalize import normalize, unavailable
from revdiff.core.providers import ContentFetcher, PatchFetcher
from revdiff.core.session import ReviewSession


logger = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return "timed out"
    return str(exc) or type(exc).__name__


async def _fetch_patch(file: ChangedFile, patches: Optional[PatchFetcher], timeout: float) -> Optional[str]:
    """Inline patch, else the fetched one; None means the provider has none.

    Raises ContentFetchError when the fetch itself fails or times out.
    """
    if file.patch is not None:
        return file.patch
    if patches is None:
        return None
    try:
        return await asyncio.wait_for(patches.fetch_raw_patch(file.path), timeout)
    except Exception as e:
        raise ContentFetchError(f"patch fetch {_describe(e)}") from e


async def _fetch_pair(file: ChangedFile, request: ReviewRequest, contents: ContentFetcher, timeout: float) -> ContentPair:
    """Fetch before/after blobs concurrently. Raises ContentFetchError if either fetch fails."""
    async def fetch(path: str, ref: str) -> Optional[str]:
        return await asyncio.wait_for(contents.fetch_file_content(path, ref), timeout)

    async def nothing() -> str:
        return ""

    before_path = file.renamed_from or file.path
    before, after = await asyncio.gather(
        nothing() if file.change_kind is ChangeKind.add else fetch(before_path, request.base_ref),
        nothing() if file.change_kind is ChangeKind.delete else fetch(file.path, request.head_ref),
        return_exceptions=True,
    )
    failed = [(side, r) for side, r in (("before", before), ("after", after)) if isinstance(r, BaseException)]
    if failed:
        reason = "; ".join(f"{side} fetch {_describe(r)}" for side, r in failed)
        raise ContentFetchError(reason)
    return ContentPair(
        before=before, after=after,
        change_kind=file.change_kind, renamed_from=file.renamed_from,
    )


async def diff_file(
    file: ChangedFile,
    request: ReviewRequest,
    *,
    contents: Optional[ContentFetcher] = None,
    patches: Optional[PatchFetcher] = None,
    settings: Optional[Settings] = None,
    ) -> UnifiedDiff:
    """Normalize one changed file from its provider patch, falling back to its blobs."""
    settings = settings or Settings()
    opts = dict(
        context_lines=settings.context_lines,
        max_bytes=settings.max_file_bytes,
        max_cells=settings.max_table_cells,
    )

    try:
        patch = await _fetch_patch(file, patches, settings.fetch_timeout)
    except ContentFetchError as e:
        logger.warning("Patch fetch failed for %s: %s", file.path, e)
        if contents is None:
            return unavailable(file.path, file.change_kind, str(e), file.renamed_from)
    else:
        # A rename the provider has no patch for is a pure rename.
        if patch is not None or (patches is not None and file.change_kind is ChangeKind.rename):
            raw = RawPatch(text=patch or "", change_kind=file.change_kind, renamed_from=file.renamed_from)
            diff = normalize(raw, file.path, **opts)
            if diff.status is not DiffStatus.malformed or contents is None:
                return diff
            logger.info("Falling back to content diff for %s", file.path)

    if contents is None:
        return unavailable(file.path, file.change_kind, "no patch or content source", file.renamed_from)
    try:
        pair = await _fetch_pair(file, request, contents, settings.fetch_timeout)
    except ContentFetchError as e:
        logger.warning("Content fetch failed for %s: %s", file.path, e)
        return unavailable(file.path, file.change_kind, str(e), file.renamed_from)
    return normalize(pair, file.path, **opts)


async def run_review(
    request: ReviewRequest,
    session: ReviewSession,
    *,
    contents: Optional[ContentFetcher] = None,
    patches: Optional[PatchFetcher] = None,
    settings: Optional[Settings] = None,
    ) -> list[DiffEntry]:
    """Diff every file of request with bounded concurrency; entries come back in file order."""
    settings = settings or Settings()
    limit = asyncio.Semaphore(settings.concurrency)

    async def one(position: int, file: ChangedFile) -> DiffEntry:
        async with limit:
            diff = await diff_file(file, request, contents=contents, patches=patches, settings=settings)
        return session.record(diff, position)

    entries = await asyncio.gather(*(one(i, f) for i, f in enumerate(request.files)))
    logger.info("Review %s/%s: %d file(s) diffed", request.provider, request.review_id, len(entries))
    return list(entries)
