from __future__ import annotations
from typing import Iterator, List, Tuple, Union
import gzip
import os

from sokoban_engine.parser import parse_levels
from sokoban_engine.state import LevelSet

LEVEL_EXTENSIONS = (".xsb", ".txt", ".sok")
DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
GZIP_MAGIC = b"\x1f\x8b"


def decode_level_bytes(data: Union[bytes, str]) -> str:
    """Raw level bytes -> text. Gzip data is unpacked, non-UTF-8 falls back to Latin-1."""
    if isinstance(data, str):
        return data
    if data[:2] == GZIP_MAGIC:
        data = gzip.decompress(data)
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def load_levels(data: Union[bytes, str]) -> LevelSet:
    """Parses levels from an embedded asset, a file's content or a fetched body."""
    return parse_levels(decode_level_bytes(data))


def load_level_file(path: str) -> LevelSet:
    with open(path, "rb") as f:
        return load_levels(f.read())


def builtin_level_names() -> List[str]:
    return sorted(os.path.splitext(f)[0] for f in os.listdir(DATA_DIR) if f.endswith(".xsb"))


def load_builtin_levels(name: str = "starter") -> LevelSet:
    """Loads a level set bundled with the package (see levels/data/)."""
    path = os.path.join(DATA_DIR, f"{name}.xsb")
    if not os.path.isfile(path):
        raise FileNotFoundError(f"No bundled level set named {name!r} (have: {', '.join(builtin_level_names())})")
    return load_level_file(path)


def iterate_level_files(root_dir: str, rel_dirs: List[str]) -> Iterator[str]:
    """Iterate over all level files in the given subfolders."""
    for rel in rel_dirs:
        abs_dir = os.path.join(root_dir, rel)
        if not os.path.isdir(abs_dir):
            continue
        for fname in sorted(os.listdir(abs_dir)):
            if fname.endswith(LEVEL_EXTENSIONS) or fname.endswith(tuple(e + ".gz" for e in LEVEL_EXTENSIONS)):
                yield os.path.join(abs_dir, fname)


def parse_level_id(level_id: str) -> Tuple[str, int]:
    """Parses a string of the form "path/to/file.xsb#3" into (path, index)."""
    if "#" not in level_id:
        return level_id, 0
    path, idx = level_id.rsplit("#", 1)
    try:
        k = int(idx)
    except ValueError:
        k = 0
    return path, k


def load_level_by_id(level_id: str):
    """Loads a SPECIFIC level file#idx even if the file contains dozens of levels."""
    path, wanted = parse_level_id(level_id)
    levels = load_level_file(path)
    if wanted < 0 or wanted >= len(levels):
        raise IndexError(f"Index {wanted} out of range for {path} (total {len(levels)})")
    return levels[wanted]
