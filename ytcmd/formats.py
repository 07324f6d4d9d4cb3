from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class FormatChoice(str, Enum):
    BEST = "best"
    BEST_MERGED = "bestvideo+bestaudio"
    BEST_AUDIO = "bestaudio"
    MP4 = "mp4"
    MP3 = "mp3"
    WEBM = "webm"
    MKV = "mkv"
    UHD_2160 = "2160p"
    QHD_1440 = "1440p"
    FHD_1080 = "1080p"
    HD_720 = "720p"
    SD_480 = "480p"
    SD_360 = "360p"
    LIST_FORMATS = "list_formats"


FormatLike = Union[FormatChoice, str]


@dataclass(frozen=True)
class FormatSpec:
    label: str
    # Inserted verbatim after the tool name; empty means "let yt-dlp pick".
    flags: str = ""
    post_process: str = ""


AUDIO_FLAGS = "-x --audio-format mp3"
EMBED_THUMBNAIL = "--embed-thumbnail"


def _height(h: int) -> str:
    return f'-f "bestvideo[height={h}]+bestaudio/best"'


CATALOG: dict[FormatChoice, FormatSpec] = {
    FormatChoice.BEST: FormatSpec("Best Quality (Video+Audio)"),
    FormatChoice.BEST_MERGED: FormatSpec(
        "Best Video + Best Audio (Merged)", '-f "bestvideo+bestaudio/best"'
    ),
    FormatChoice.BEST_AUDIO: FormatSpec("Best Audio Only", AUDIO_FLAGS, EMBED_THUMBNAIL),
    FormatChoice.MP4: FormatSpec(
        "MP4 Video", '-f "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best"'
    ),
    FormatChoice.MP3: FormatSpec("MP3 Audio", AUDIO_FLAGS, EMBED_THUMBNAIL),
    FormatChoice.WEBM: FormatSpec(
        "WebM Video", '-f "bestvideo[ext=webm]+bestaudio[ext=webm]/best[ext=webm]/best"'
    ),
    FormatChoice.MKV: FormatSpec(
        "MKV Video", '-f "bestvideo[ext=mkv]+bestaudio[ext=mka]/best[ext=mkv]/best"'
    ),
    FormatChoice.UHD_2160: FormatSpec("4K (2160p) Video", _height(2160)),
    FormatChoice.QHD_1440: FormatSpec("2K (1440p) Video", _height(1440)),
    FormatChoice.FHD_1080: FormatSpec("Full HD (1080p) Video", _height(1080)),
    FormatChoice.HD_720: FormatSpec("HD (720p) Video", _height(720)),
    FormatChoice.SD_480: FormatSpec("SD (480p) Video", _height(480)),
    FormatChoice.SD_360: FormatSpec("SD (360p) Video", _height(360)),
    FormatChoice.LIST_FORMATS: FormatSpec("List Available Formats (Run in Terminal)", "-F"),
}


DEFAULT_OUTPUT_DIR = "~/Downloads/"

# (value, label) pairs offered by the form; any other string is accepted too.
OUTPUT_LOCATIONS: list[tuple[str, str]] = [
    (DEFAULT_OUTPUT_DIR, "Downloads Folder (Default)"),
    ("./", "Current Directory"),
    ("C:\\Users\\YourUser\\Videos\\", "Custom Path (Windows Example)"),
    ("/Users/YourUser/Movies/", "Custom Path (macOS/Linux Example)"),
]


def resolve_format(value: Optional[FormatLike]) -> FormatChoice:
    """Map any input onto the catalog; unrecognised values mean ``best``."""
    if isinstance(value, FormatChoice):
        return value
    try:
        return FormatChoice(value)
    except ValueError:
        return FormatChoice.BEST


def spec_for(choice: Optional[FormatLike]) -> FormatSpec:
    return CATALOG[resolve_format(choice)]
