#!/usr/bin/env python3

"""Process every patch set contained in a GRD stream"""

import pathlib
from collections.abc import Iterable

from grfmerge.exceptions import FormatError, GrfMergeError
from grfmerge.merge import DiffApplier, MergeResult
from grfmerge.patchset import read_magic
from grfmerge.session import Session


class PatchSetDriver:
    """Dispatch the patch sets of a GRD stream to the merger"""

    def __init__(self, session: Session):
        self._session = session
        self._applier = DiffApplier(session)

    def run(
        self,
        patch_path: str | pathlib.Path,
        offset: int = 0,
        targets: Iterable[str | pathlib.Path] = (),
    ) -> list[MergeResult]:
        """Apply all patch sets in `patch_path`

        Args:
            patch_path: GRD file, or self-extracting executable
            offset: Offset of the first patch set within `patch_path`
            targets: GRF files for consecutive patch sets, later patch
                sets use the file they were generated from

        Returns:
            Outcome of each patch set, in stream order
        """
        target_iter = iter(targets)
        results: list[MergeResult] = []

        try:
            patch = open(patch_path, "rb")
        except OSError as e:
            raise GrfMergeError(f"Can't open {patch_path}: {e.strerror}") from e

        with patch:
            patch.seek(offset)
            while read_magic(patch):
                results.append(self._applier.apply(patch, next(target_iter, None)))

        if len(results) == 0:
            raise FormatError(f"{patch_path} is not a GRD file")
        return results
