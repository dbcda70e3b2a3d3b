"""Static file copying for the parts of the site that are not rendered"""

import shutil
from pathlib import Path
from typing import Iterable

from nyble.core.diagnostics import Diagnostics


def copy_files(names: Iterable[str], src_root: Path, dst_root: Path) -> list[Path]:
    """Copy named top-level files from src_root to dst_root. A missing file is an error."""
    dst_root.mkdir(parents=True, exist_ok=True)
    copied = []
    for name in names:
        dest = dst_root / name
        shutil.copyfile(src_root / name, dest)
        copied.append(dest)
    return copied


def copy_across(src: Path, dst: Path, diagnostics: Diagnostics) -> list[Path]:
    """Recursively copy src into dst; symlinks and special files are skipped with a warning."""
    dst.mkdir(parents=True, exist_ok=True)
    copied = []
    for entry in src.iterdir():
        target = dst / entry.name
        if entry.is_symlink():
            diagnostics.warn(f"Skipping symlink {entry}")
        elif entry.is_file():
            shutil.copyfile(entry, target)
            copied.append(target)
        elif entry.is_dir():
            copied.extend(copy_across(entry, target, diagnostics))
        else:
            diagnostics.warn(f"Skipping {entry}: not a regular file or directory")
    return copied
