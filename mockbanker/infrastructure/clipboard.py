"""
Best-effort environment effects: clipboard copy and artifact save.

Neither raises. A failed copy or save is logged and otherwise ignored; the
caller has no error state to show.
"""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Optional

from rich.console import Console

from mockbanker.exporter import ExportArtifact
from mockbanker.utils.logging import get_logger

log = get_logger(__name__)


def copy_to_clipboard(text: str, console: Optional[Console] = None) -> None:
    """
    Put `text` on the system clipboard through an OSC 52 escape sequence.

    Terminals that do not support OSC 52 ignore the sequence.
    """
    console = console or Console(stderr=True)
    if not console.is_terminal:
        log.debug("Clipboard copy skipped: not a terminal")
        return
    payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
    try:
        console.file.write(f"\x1b]52;c;{payload}\x07")
        console.file.flush()
    except (OSError, ValueError) as exc:
        log.debug("Clipboard copy failed", extra={"error": str(exc)})


def save_export(artifact: ExportArtifact, directory: Path | str = ".") -> Optional[Path]:
    """Write `artifact` into `directory`; None when the write failed."""
    path = Path(directory).expanduser() / artifact.filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.content, encoding="utf-8")
    except OSError as exc:
        log.warning("Export not saved", extra={"path": str(path), "error": str(exc)})
        return None
    log.info("Export saved", extra={"path": str(path), "mime_type": artifact.mime_type})
    return path


__all__ = ["copy_to_clipboard", "save_export"]
