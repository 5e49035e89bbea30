"""Format the human-readable report of a flatten run."""

from __future__ import annotations

import logging
from pathlib import Path

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from flattendir.schemas.result import OutputMode

logger = logging.getLogger(__name__)

_MODE_LABELS = {"markdown": "Markdown document", "directory": "Flat directory"}


def format_summary(
    *,
    mode: OutputMode,
    source: Path,
    target: Path,
    file_count: int,
    moved: bool,
    dry_run: bool = False,
    document: str | None = None,
) -> str:
    """Create the summary lines shown after a run."""
    summary_lines = [
        f"Source: {source}",
        f"Target: {target}",
        f"Mode: {_MODE_LABELS[mode]}",
        f"Files: {file_count}",
        f"Action: {'moved' if moved else 'copied'}",
    ]
    if dry_run:
        summary_lines.append("Dry run: nothing was written")

    if document is not None:
        token_estimate = format_token_count(document)
        if token_estimate:
            summary_lines.append(f"Estimated tokens: {token_estimate}")

    return "\n".join(summary_lines)


def token_counting_available() -> bool:
    """Return True if token estimates can be computed."""
    return tiktoken is not None


def format_token_count(text: str) -> str | None:
    """Estimate the token count of ``text`` when tiktoken is installed."""
    if not tiktoken:
        return None
    try:
        encoding = tiktoken.get_encoding("o200k_base")
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception as exc:
        logger.debug("Token estimate unavailable: %s", exc)
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
