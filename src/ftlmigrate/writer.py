"""Locale discovery and output writing.

Components:
    Partition - Items kept by a predicate plus rejected items with reasons
    partition - Split items with a predicate that explains rejections
    discover_locales - Find translation target directories under the locale root
    write_locale - Overwrite or append a locale's merged resource
    copy_passthrough - Copy the canonical resource into passthrough locales

Python 3.13+.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Collection, Iterable
from dataclasses import dataclass
from pathlib import Path

from ftllexengine import parse_ftl
from ftllexengine.syntax.ast import Message, Term

from ftlmigrate.errors import LocaleWriteError
from ftlmigrate.merger import MergeResult, render_lines
from ftlmigrate.records import LocaleCode, MessageId

__all__ = [
    "Partition",
    "Rejection",
    "WriteOutcome",
    "copy_passthrough",
    "discover_locales",
    "existing_entry_ids",
    "partition",
    "write_locale",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Rejection[T]:
    """An item a predicate rejected, with the reason it gave."""

    item: T
    reason: str


@dataclass(frozen=True, slots=True)
class Partition[T]:
    """Result of splitting items with an explaining predicate.

    Attributes:
        kept: Items the predicate accepted, in input order
        rejected: Items the predicate rejected, with reasons, in input order
    """

    kept: tuple[T, ...]
    rejected: tuple[Rejection[T], ...]


def partition[T](items: Iterable[T], predicate: Callable[[T], str | None]) -> Partition[T]:
    """Split items by a predicate that returns None to keep or a reason to reject.

    Example:
        >>> result = partition([1, 2, 3], lambda n: None if n % 2 else "even")
        >>> result.kept
        (1, 3)
        >>> result.rejected[0].reason
        'even'
    """
    kept: list[T] = []
    rejected: list[Rejection[T]] = []
    for item in items:
        reason = predicate(item)
        if reason is None:
            kept.append(item)
        else:
            rejected.append(Rejection(item, reason))
    return Partition(kept=tuple(kept), rejected=tuple(rejected))


def discover_locales(locale_dir: Path, *, excluded: Collection[LocaleCode]) -> Partition[str]:
    """List translation target directories under the locale root.

    Args:
        locale_dir: Root containing one subdirectory per locale
        excluded: Directory names that are never translation targets

    Returns:
        Partition of entry names, sorted; files and excluded directories
        are rejected with a reason

    Raises:
        FileNotFoundError: If locale_dir does not exist
        NotADirectoryError: If locale_dir is not a directory
    """

    def check(name: str) -> str | None:
        if not (locale_dir / name).is_dir():
            return "not a directory"
        if name in excluded:
            return "excluded"
        return None

    names = sorted(child.name for child in locale_dir.iterdir())
    result = partition(names, check)
    for rejection in result.rejected:
        logger.debug("Ignoring %s: %s", rejection.item, rejection.reason)
    return result


def existing_entry_ids(source: str) -> set[MessageId]:
    """Collect message and term ids (terms with their dash) from FTL source."""
    ids: set[MessageId] = set()
    for entry in parse_ftl(source).entries:
        match entry:
            case Message():
                ids.add(entry.id.name)
            case Term():
                ids.add(f"-{entry.id.name}")
    return ids


@dataclass(frozen=True, slots=True)
class WriteOutcome:
    """What write_locale did to a locale's output file.

    Attributes:
        path: Output file
        written_ids: Ids of entries written (all of them, or only new ones
            when appending)
        appended: True if entries were appended to an existing file
    """

    path: Path
    written_ids: tuple[MessageId, ...]
    appended: bool = False


def write_locale(
    path: Path,
    result: MergeResult,
    *,
    locale: LocaleCode | None = None,
    append: bool = False,
) -> WriteOutcome:
    """Persist a merged resource.

    In append mode an existing file is kept and only entries whose ids it
    does not already define are added at the end. Without an existing file
    append mode writes the full resource.

    Raises:
        LocaleWriteError: If the file cannot be read or written
    """
    try:
        if append and path.exists():
            current = path.read_text(encoding="utf-8")
            known = existing_entry_ids(current)
            new_lines = [line for line in result.lines if line.id not in known]
            if new_lines:
                prefix = current if current.endswith("\n") or not current else current + "\n"
                path.write_text(prefix + render_lines(new_lines), encoding="utf-8")
            logger.info("Appended %d new entries to %s", len(new_lines), path)
            return WriteOutcome(path, tuple(line.id for line in new_lines), appended=True)

        path.write_text(result.render(), encoding="utf-8")
    except OSError as e:
        msg = f"Failed to write {path}: {e}"
        raise LocaleWriteError(msg, locale=locale) from e

    logger.info("Wrote %d entries to %s", len(result.lines), path)
    return WriteOutcome(path, result.entry_ids)


def copy_passthrough(
    source_path: Path,
    locale_dir: Path,
    locales: Iterable[LocaleCode],
    file_name: str,
) -> tuple[Path, ...]:
    """Copy the canonical resource verbatim into each passthrough locale.

    Returns:
        Paths written

    Raises:
        LocaleWriteError: If a copy fails
    """
    written: list[Path] = []
    for locale in locales:
        target = locale_dir / locale / file_name
        if target.resolve() == source_path.resolve():
            logger.debug("Source already lives in %s, not copying", target)
            continue
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source_path, target)
        except OSError as e:
            msg = f"Failed to copy {source_path} to {target}: {e}"
            raise LocaleWriteError(msg, locale=locale) from e
        logger.info("Copied source to %s", target)
        written.append(target)
    return tuple(written)
