"""Temporary-file backed implementation of :class:`~jwp_wrap.core.protocols.ScratchStorage`.

Rules
-----
* Every write creates a new file; paths are never reused.
* The file handle is always closed, even when the write fails.
* A failed write removes its file; after a successful write the caller
  owns the returned path.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


class TempFileStorage:
    """Write content to fresh files under the system temp directory.

    This class satisfies the :class:`~jwp_wrap.core.protocols.ScratchStorage`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(self, directory: Path | None = None, prefix: str = "thumb") -> None:
        self._directory: Path | None = directory
        self._prefix: str = prefix

    def write(self, name: str, content: bytes) -> Path:
        """Write *content* to a new temporary file.

        The file keeps the extension of *name* so that viewers can
        recognise it.

        Raises
        ------
        OSError
            When the file cannot be created or written.
        """
        handle = tempfile.NamedTemporaryFile(
            mode="wb",
            prefix=self._prefix,
            suffix=Path(name).suffix,
            dir=self._directory,
            delete=False,
        )
        path = Path(handle.name)
        try:
            with handle:
                handle.write(content)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        return path
