"""Pipeline step functions: static copy, notebook, and words orchestration"""

import logging
from pathlib import Path

from nyble.config import Settings
from nyble.core.diagnostics import Diagnostics
from nyble.core.notebook import Notebook
from nyble.core.render import file_html
from nyble.core.words import Words
from nyble.util.fs import copy_across, copy_files


logger = logging.getLogger(__name__)


def run_static(root: Path, output_dir: Path, settings: Settings, diagnostics: Diagnostics) -> list[Path]:
    """Copy listed files and directories verbatim. Missing directories are skipped."""
    written = copy_files(settings.static_files, root, output_dir)
    for name in settings.static_dirs:
        src = root / name
        if not src.is_dir():
            logger.info("No %s directory under %s; skipping", name, root)
            continue
        written.extend(copy_across(src, output_dir / name, diagnostics))
    return written


def run_notebook(root: Path, output_dir: Path, settings: Settings, diagnostics: Diagnostics) -> list[Path]:
    pages_dir = root / settings.notebook_dir
    if not pages_dir.is_dir():
        logger.info("No notebook directory at %s; skipping", pages_dir)
        return []
    notebook = Notebook.from_dir(root / settings.notebook_template, pages_dir, diagnostics)
    return [notebook.output(output_dir / settings.notebook_output)]


def run_words(root: Path, output_dir: Path, settings: Settings, diagnostics: Diagnostics) -> list[Path]:
    manifest = root / settings.words_dir / settings.words_manifest
    if not manifest.is_file():
        logger.info("No words manifest at %s; skipping", manifest)
        return []
    words = Words.from_root(root, settings, diagnostics)
    return words.output(output_dir / settings.words_dir)


def run_build(root: Path, settings: Settings, diagnostics: Diagnostics) -> list[Path]:
    """Build the whole site from root into settings.output_dir. Returns written paths."""
    output_dir = Path(settings.output_dir)
    written = run_static(root, output_dir, settings, diagnostics)
    written.extend(run_notebook(root, output_dir, settings, diagnostics))
    written.extend(run_words(root, output_dir, settings, diagnostics))
    return written


def run_render(path: Path, diagnostics: Diagnostics) -> str:
    """Render a single source file to HTML."""
    try:
        return file_html(path, diagnostics.for_source(path))
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Failed to render {path}: {e}") from e
