"""Subprocess helpers used by analyzers that shell out to external tools."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from .base import AnalysisError

logger = logging.getLogger(__name__)


def executable_available(executable: str) -> bool:
    """Return ``True`` when ``executable`` resolves on ``PATH`` or as a file."""

    if shutil.which(executable):
        return True
    return Path(executable).is_file()


class CommandRunner:
    """Run external commands and translate process failures into :class:`AnalysisError`."""

    def __init__(self, *, timeout: float | None = None) -> None:
        self.timeout = timeout

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = False,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Execute ``args`` and return the completed process.

        Linters commonly exit non-zero when they report findings, so a non-zero
        exit only raises when ``check`` is set.
        """

        effective_timeout = timeout if timeout is not None else self.timeout
        logger.debug("Executing command: %s", " ".join(args))
        try:
            completed = subprocess.run(  # noqa: S603 - deliberate invocation of external tools
                list(args),
                cwd=cwd,
                env=dict(env) if env is not None else None,
                capture_output=True,
                text=True,
                timeout=effective_timeout,
            )
        except FileNotFoundError as exc:
            raise AnalysisError(f"Executable not found: {args[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise AnalysisError(
                f"Command '{args[0]}' timed out after {effective_timeout:g}s"
            ) from exc

        if check and completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()[:500]
            raise AnalysisError(
                f"Command '{' '.join(args)}' failed with exit code {completed.returncode}"
                + (f": {detail}" if detail else "")
            )

        if completed.returncode != 0:
            logger.debug("%s exited with code %s", args[0], completed.returncode)
        return completed


__all__ = ["CommandRunner", "executable_available"]
