#!/usr/bin/env python3

"""Merge a single GRD patch set into its GRF file"""

import enum
import pathlib
import re
from typing import BinaryIO

import tabulate

from grfmerge.common import CHECKSUM_PLACEHOLDER, END_MARKER, TEMP_FILENAME
from grfmerge.exceptions import (
    CorruptionError,
    FileAccessError,
    FormatError,
    InstallError,
    SkipPatchSet,
    UserDeclined,
)
from grfmerge.install import AtomicReplacer
from grfmerge.patchset import PatchSet
from grfmerge.record import RecordStatus, transfer_record
from grfmerge.session import ProgressDisplay, Session
from grfmerge.stream import DISCARD, Sink, stream_size
from grfmerge.util.console import Console
from grfmerge.util.ranges import coalesce_runs, format_runs


class MergeStatus(enum.Enum):
    MERGED = "merged"
    LISTED = "listed"
    SKIPPED = "skipped"


class MergeResult:
    """Outcome of processing one patch set"""

    def __init__(
        self,
        name: str,
        status: MergeStatus,
        target: pathlib.Path | None = None,
        indices: list[int] | None = None,
        records: int = 0,
    ):
        self.name = name
        self.status = status
        self.target = target
        self.indices = indices or []
        # Records read from the target, including replaced ones
        self.records = records


def target_stem(path: str) -> str:
    """File name of `path` without directory, drive or extension"""
    base = re.split(r"[\\/:]", path)[-1]
    dot = base.rfind(".")
    return base[:dot] if dot >= 0 else base


def target_matches(path: str | pathlib.Path, name: str) -> bool:
    """Whether `path` names the GRF a patch set was generated from"""
    return target_stem(str(path)).lower() == name.lower()


class _TargetCursor:
    """Walks the records of the GRF being merged, reporting progress"""

    def __init__(self, grf: BinaryIO, progress: ProgressDisplay):
        self._grf = grf
        self._progress = progress
        self.size = stream_size(grf)
        self.consumed = 0

    def advance(self, sink: Sink) -> RecordStatus:
        status = transfer_record(self._grf, sink)
        if status:
            self.consumed += 1
            self._progress.update(self._grf.tell(), self.size, f"Sprite {self.consumed:5d}")
        return status


class DiffApplier:
    """Apply GRD patch sets to GRF files"""

    def __init__(self, session: Session):
        self._session = session
        self._replacer = AtomicReplacer(session)

    def apply(self, patch: BinaryIO, target: str | pathlib.Path | None = None) -> MergeResult:
        """Apply the patch set at the current position of `patch`

        The magic must already have been consumed. On return `patch` is
        positioned after the last entry of the patch set, whether or not it
        was applied.

        Args:
            patch: GRD stream
            target: GRF to modify, defaults to the file the patch set was generated from
        """
        patch_set = PatchSet.read_header(patch)

        if self._session.dry_run:
            return self._list(patch, patch_set)

        if target is None:
            target_path = pathlib.Path(patch_set.default_target)
        else:
            target_path = pathlib.Path(target)

        try:
            if target is not None:
                self._confirm_target(patch_set, target_path)
            grf = self._open_target(target_path)
        except SkipPatchSet as e:
            Console.log_warning(f"{e}. File skipped.")
            self._drain(patch, patch_set)
            return MergeResult(patch_set.name, MergeStatus.SKIPPED, target_path)

        output = target_path.parent / TEMP_FILENAME
        with grf:
            try:
                out = open(output, "wb")
            except OSError as e:
                raise InstallError(f"Can't open {output}: {e.strerror}") from e
            Console.log_info(f"Writing temporary file {output}")
            with out:
                try:
                    indices, records = self._merge(patch, patch_set, grf, out)
                finally:
                    self._session.progress.finish()

        self._replacer.install(output, target_path)
        return MergeResult(patch_set.name, MergeStatus.MERGED, target_path, indices, records)

    def _confirm_target(self, patch_set: PatchSet, target: pathlib.Path) -> None:
        if target_matches(target, patch_set.name):
            return
        Console.log_warning(f"Warning, this GRD file was generated from {patch_set.default_target}")
        if not self._session.confirm(f"Are you sure you want to apply it to {target}?"):
            raise UserDeclined(f"Not applying {patch_set.default_target} patches to {target}")

    @staticmethod
    def _open_target(target: pathlib.Path) -> BinaryIO:
        try:
            return open(target, "rb")
        except OSError as e:
            raise FileAccessError(f"Can't open {target}: {e.strerror}") from e

    @staticmethod
    def _patch_record(patch: BinaryIO, sink: Sink, index: int) -> None:
        if not transfer_record(patch, sink):
            raise FormatError(f"Replacement for sprite {index} is missing from the GRD file")

    def _drain(self, patch: BinaryIO, patch_set: PatchSet) -> list[int]:
        """Consume every entry of the patch set without applying it"""
        indices = []
        for index in patch_set.indices(patch):
            self._patch_record(patch, DISCARD, index)
            indices.append(index)
        return indices

    def _list(self, patch: BinaryIO, patch_set: PatchSet) -> MergeResult:
        indices = self._drain(patch, patch_set)
        summary = format_runs(coalesce_runs(indices)) or "No sprites."
        table = [
            ["Generated from:", patch_set.default_target],
            ["Sprites in file:", summary],
        ]
        print(tabulate.tabulate(table, tablefmt="plain"))
        return MergeResult(patch_set.name, MergeStatus.LISTED, indices=indices)

    def _merge(
        self, patch: BinaryIO, patch_set: PatchSet, grf: BinaryIO, out: BinaryIO
    ) -> tuple[list[int], int]:
        cursor = _TargetCursor(grf, self._session.progress)
        indices = []

        for index in patch_set.indices(patch):
            if index <= cursor.consumed:
                raise CorruptionError(f"GRD sprite {index} does not follow sprite {cursor.consumed}")
            # Copy everything up to the replaced sprite, then drop the sprite itself
            while cursor.consumed < index:
                sink = out if cursor.consumed < index - 1 else DISCARD
                if not cursor.advance(sink):
                    raise CorruptionError(
                        f"GRD replaces sprite {index}, but the GRF file only has {cursor.consumed} sprites"
                    )
            self._patch_record(patch, out, index)
            indices.append(index)

        while status := cursor.advance(out):
            pass
        if status is RecordStatus.END_OF_FILE:
            out.write(END_MARKER)
        out.write(CHECKSUM_PLACEHOLDER)

        self._session.progress.update(cursor.size, cursor.size, f"Sprite {cursor.consumed:5d}")
        return indices, cursor.consumed
