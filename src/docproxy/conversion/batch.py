"""Batch conversion of HTML files and directory trees to Markdown."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ..models.config import ConvertConfig
from .markdown import HtmlToMarkdown
from .protocols import MarkdownConverter

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIRNAME = "markdown-output"

# Called after each file with (source path, success)
FileCallback = Callable[[Path, bool], None]


@dataclass
class ConversionStats:
    """Cumulative statistics for a conversion run."""

    files_found: int = 0
    files_converted: int = 0
    files_failed: int = 0
    duration_seconds: float = 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as a percentage."""
        if self.files_found == 0:
            return 0.0
        return (self.files_converted / self.files_found) * 100

    def to_dict(self) -> dict:
        """Convert stats to dictionary for serialization."""
        return {
            "files_found": self.files_found,
            "files_converted": self.files_converted,
            "files_failed": self.files_failed,
            "duration_seconds": round(self.duration_seconds, 2),
            "success_rate": round(self.success_rate, 1),
        }


def replace_extension(path: Path, source_ext: str, target_ext: str) -> Path:
    """Swap a trailing .{source_ext} (any case) for .{target_ext}."""
    pattern = re.compile(r"\." + re.escape(source_ext) + r"$", re.IGNORECASE)
    return path.with_name(pattern.sub("." + target_ext, path.name))


def default_output_file(path: Path, source_ext: str, target_ext: str) -> Path:
    """Output path next to a single input file, always ending in .{target_ext}."""
    replaced = replace_extension(path, source_ext, target_ext)
    if replaced != path:
        return replaced
    return path.with_suffix("." + target_ext)


def find_source_files(directory: Path, source_ext: str = "html") -> list[Path]:
    """
    Recursively find files with the given extension.

    Args:
        directory: Directory to search
        source_ext: Extension to match, case-insensitive

    Returns:
        Sorted list of matching file paths
    """
    suffix = "." + source_ext.lower()
    return sorted(p for p in directory.rglob("*") if p.is_file() and p.suffix.lower() == suffix)


def output_path_for(
    source: Path,
    input_root: Path,
    output_root: Path,
    source_ext: str = "html",
    target_ext: str = "md",
) -> Path:
    """Mirror a source file's location under output_root with the target extension."""
    relative = source.relative_to(input_root)
    return output_root / replace_extension(relative, source_ext, target_ext)


def convert_file(input_path: Path, output_path: Path, converter: MarkdownConverter) -> bool:
    """
    Convert a single HTML file and write the Markdown result.

    A converter failure still writes an (empty) output file; only I/O
    errors count as failures.

    Args:
        input_path: HTML file to read
        output_path: Markdown file to write
        converter: HTML to Markdown converter

    Returns:
        True if the output file was written
    """
    logger.info(f"Processing: {input_path}")
    try:
        html = input_path.read_text(encoding="utf-8")
        markdown = converter.convert(html)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(markdown, encoding="utf-8")

    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error processing {input_path}: {e}")
        return False

    logger.info(f"Converted: {output_path}")
    return True


def convert_path(
    input_path: Path,
    output_path: Optional[Path] = None,
    config: Optional[ConvertConfig] = None,
    converter: Optional[MarkdownConverter] = None,
    on_file: Optional[FileCallback] = None,
) -> ConversionStats:
    """
    Convert a file or every matching file under a directory.

    Default outputs: a single file is written next to its source with the
    target extension; a directory is mirrored into a sibling
    ``markdown-output`` directory.

    Args:
        input_path: HTML file or directory
        output_path: Output file or directory
        config: Conversion settings (extensions, html2text options)
        converter: Converter to use (built from config if None)
        on_file: Optional callback invoked after each file

    Returns:
        ConversionStats for the run

    Raises:
        FileNotFoundError: If input_path does not exist
        ValueError: If input_path is neither a file nor a directory, or the
            output of a single file would overwrite it
    """
    config = config or ConvertConfig()
    converter = converter or HtmlToMarkdown(
        source_ext=config.source_ext,
        target_ext=config.target_ext,
        body_width=config.body_width,
        ignore_images=config.ignore_images,
        ignore_tables=config.ignore_tables,
    )

    if not input_path.exists():
        raise FileNotFoundError(f"Input path does not exist: {input_path}")

    stats = ConversionStats()
    start = time.monotonic()

    if input_path.is_file():
        target = output_path or default_output_file(input_path, config.source_ext, config.target_ext)
        if target.resolve() == input_path.resolve():
            raise ValueError(f"Output would overwrite the input file: {input_path}")
        sources = [(input_path, target)]
    elif input_path.is_dir():
        output_root = output_path or input_path.parent / DEFAULT_OUTPUT_DIRNAME
        logger.info(f"Converting {config.source_ext} files from {input_path} to {output_root}")
        sources = [
            (
                source,
                output_path_for(source, input_path, output_root, config.source_ext, config.target_ext),
            )
            for source in find_source_files(input_path, config.source_ext)
        ]
        if not sources:
            logger.warning(f"No {config.source_ext} files found in {input_path}")
    else:
        raise ValueError(f"Input path is neither a file nor a directory: {input_path}")

    stats.files_found = len(sources)
    for source, target in sources:
        ok = convert_file(source, target, converter)
        if ok:
            stats.files_converted += 1
        else:
            stats.files_failed += 1
        if on_file:
            on_file(source, ok)

    stats.duration_seconds = time.monotonic() - start
    return stats
