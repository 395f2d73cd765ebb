"""Menu sound playback through the Windows host of a WSL session."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import TextIO

_WSL_DRIVE_PREFIX = "/mnt/c/"


def windows_path(cwd: str, relative: str) -> str | None:
    """Windows form of cwd/relative, or None if it is not under /mnt/c/."""
    full = f"{cwd}/{relative}"
    if not full.startswith(_WSL_DRIVE_PREFIX):
        return None
    return "C:" + full[len(_WSL_DRIVE_PREFIX):].replace("/", "\\")


def play_sound(
    path: str, cwd: str | None = None, stream: TextIO | None = None
) -> bool:
    """Open the sound file with the default Windows application.

    Returns True if the player was started.
    """
    out = stream if stream is not None else sys.stdout
    converted = windows_path(cwd if cwd is not None else os.getcwd(), path)
    if converted is None:
        out.write("Erro: som só funciona com arquivos em /mnt/c/ (Windows).\n")
        return False

    out.write(f"Caminho Windows convertido: {converted}\n")
    try:
        subprocess.run(
            ["powershell.exe", "Start-Process", "-FilePath", converted],
            check=False,
        )
    except OSError:
        return False
    return True