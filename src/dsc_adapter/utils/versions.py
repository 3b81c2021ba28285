"""Version ordering for module selection."""

from __future__ import annotations

import re
from typing import TypeAlias

_VERSION_SEPARATOR = re.compile(r"[.\-+_]")

VersionKey: TypeAlias = tuple[tuple[int, ...], int, tuple[str, ...]]


def version_key(version: str) -> VersionKey:
    """Return a sort key that orders dotted versions numerically.

    Leading numeric components form the release and compare as integers, so
    ``1.10.0 > 1.9.0``. Anything after the first non-numeric component is a
    pre-release label, which sorts below the bare release
    (``2.0.0 > 2.0.0-preview``). Trailing zeros are ignored (``1.0 == 1.0.0``).
    """
    release: list[int] = []
    label: list[str] = []
    for part in _VERSION_SEPARATOR.split(version.strip()):
        if not part:
            continue
        if part.isdigit() and not label:
            release.append(int(part))
        else:
            label.append(part.lower())
    while release and release[-1] == 0:
        release.pop()
    return (tuple(release), 0 if label else 1, tuple(label))
