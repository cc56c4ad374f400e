"""Line source: file discovery and lazy line reading."""
import glob
from pathlib import Path
from typing import Iterator

from convlog.utils.schemas import RawLine


def resolve_files(pattern: str) -> list[str]:
    """Sorted, de-duplicated regular files matching a glob (`**` supported)."""
    matches = glob.glob(str(Path(pattern).expanduser()), recursive=True)
    return sorted({m for m in matches if Path(m).is_file()})


def iter_lines(path: str | Path) -> Iterator[RawLine]:
    """Yield each line of `path` in order, without its line ending.

    The file is opened on first iteration; a missing or unreadable file
    raises from there.
    """
    source_id = Path(path).as_posix()
    # newline=None folds \r\n and lone \r into \n; undecodable bytes become U+FFFD
    with open(path, encoding="utf-8", errors="replace", newline=None) as f:
        for line in f:
            yield RawLine(source_id=source_id, text=line.rstrip("\n"))
