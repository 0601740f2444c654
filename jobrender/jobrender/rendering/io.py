"""Writing rendered artifacts to disk."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..core.models import RenderedArtifact

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically with the given permissions.

    The temporary file gets its final mode before the rename, so key material
    is never readable with looser permissions.

    Args:
        path: Destination file path
        text: Text content to write, written byte-for-byte
        mode: File permissions (octal)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        os.fchmod(fd, mode)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def write_artifacts(
    artifacts: list[RenderedArtifact],
    dest_root: Path,
    *,
    file_mode: int = 0o644,
    script_mode: int = 0o755,
    secret_mode: int = 0o600,
) -> list[Path]:
    """Write artifacts under *dest_root*, keyed by their job-relative names.

    Returns:
        Output file paths in artifact order
    """
    outputs = []
    for artifact in artifacts:
        if artifact.secret:
            mode = secret_mode
        elif artifact.executable:
            mode = script_mode
        else:
            mode = file_mode
        output_path = dest_root / artifact.name
        atomic_write_text(output_path, artifact.text, mode=mode)
        logger.info(f"Wrote {artifact.name} → {output_path} ({mode:o})")
        outputs.append(output_path)
    return outputs
