from __future__ import annotations

import json
import shutil
import sys
from dataclasses import dataclass

from .builder import TOOL


@dataclass(frozen=True)
class DoctorReport:
    python: str
    yt_dlp: bool
    ffmpeg: bool

    def to_dict(self) -> dict:
        return {
            "python": self.python,
            "yt_dlp": self.yt_dlp,
            "ffmpeg": self.ffmpeg,
        }


def check() -> DoctorReport:
    """Look up the binaries generated commands rely on. Nothing is executed.

    ffmpeg is needed by yt-dlp for merging streams, audio extraction and
    thumbnail embedding.
    """
    return DoctorReport(
        python=sys.version.split()[0],
        yt_dlp=shutil.which(TOOL) is not None,
        ffmpeg=shutil.which("ffmpeg") is not None,
    )


def print_report(report: DoctorReport, *, json_out: bool) -> None:
    if json_out:
        sys.stdout.write(json.dumps(report.to_dict()) + "\n")
        return

    sys.stdout.write("doctor:\n")
    for k, v in report.to_dict().items():
        sys.stdout.write(f"- {k}: {v}\n")
