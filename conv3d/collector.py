"""Find model files in a directory and group them by format."""

import os
from pathlib import Path
from typing import Dict, List

from conv3d.formats import MODEL_FORMATS, Format


def list_files(directory, recursive: bool = False) -> List[str]:
    """File names under `directory`, relative to it, in listing order.

    With `recursive` the walk descends into subdirectories and names carry
    their relative folder (e.g. "props/chair.fbx").
    """
    directory = Path(directory)
    if not recursive:
        return sorted(entry.name for entry in os.scandir(directory) if entry.is_file())

    files = []
    for root, dirs, names in os.walk(directory):
        dirs.sort()
        rel_root = Path(root).relative_to(directory)
        for name in sorted(names):
            files.append((rel_root / name).as_posix())
    return files


def collect_files(files: List[str], fmt: Format) -> List[str]:
    """Names ending in the lowercase extension of `fmt` (case-sensitive)."""
    ending = "." + Format(fmt).value.lower()
    return [name for name in files if name.endswith(ending)]


def collect_by_format(files: List[str]) -> Dict[Format, List[str]]:
    return {fmt: collect_files(files, fmt) for fmt in MODEL_FORMATS}


def collect_glb_files(files: List[str], exclude_dir: str) -> List[str]:
    """.glb files that do not live inside a previous run's output folder."""
    return [
        name for name in collect_files(files, Format.GLB)
        if exclude_dir not in Path(name).parts
    ]
