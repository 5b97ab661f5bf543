"""Export: write per-file .diff files, a combined review patch, and a sidecar JSON"""

import json
from pathlib import Path

from revdiff.core.models import ChangeSummary, DiffEntry
from revdiff.core.utils.keys import sanitize_path


def build_sidecar(provider: str, review_id: str, entries: list[DiffEntry]) -> dict:
    """Summary dict: review identity, per-file counts/status, and totals."""
    totals = sum((e.summary for e in entries), ChangeSummary())
    return {
        "provider": provider,
        "review_id": review_id,
        "files": [
            {
                "key": e.key,
                "path": e.diff.path,
                "renamed_from": e.diff.renamed_from,
                "change_kind": e.diff.change_kind.value,
                "status": e.diff.status.value,
                "notice": e.diff.notice,
                "additions": e.summary.additions,
                "deletions": e.summary.deletions,
            }
            for e in entries
        ],
        "totals": totals.model_dump(),
    }


def write_review(
    provider: str,
    review_id: str,
    entries: list[DiffEntry],
    output_dir: Path,
    ) -> tuple[Path, Path]:
    """Write <key>.diff per entry plus <review>.diff and <review>.json. Returns (combined, sidecar)."""
    output_dir.mkdir(parents=True, exist_ok=True)
    files_dir = output_dir / "files"
    files_dir.mkdir(exist_ok=True)
    for e in entries:
        (files_dir / f"{e.key}.diff").write_text(e.rendered, encoding="utf-8")

    stem = sanitize_path(f"{provider}_{review_id}")
    combined = output_dir / f"{stem}.diff"
    combined.write_text("".join(e.rendered for e in entries), encoding="utf-8")
    sidecar = output_dir / f"{stem}.json"
    sidecar.write_text(
        json.dumps(build_sidecar(provider, review_id, entries), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return combined, sidecar
