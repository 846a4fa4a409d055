"""Running application version and version ordering."""
from __future__ import annotations

import re

APP_VERSION = "4.4.1"

_NUMBER = re.compile(r"\d+")


def _parts(version: str) -> tuple[list[int], str]:
    version = version.strip()
    if version[:1] in ("v", "V"):
        version = version[1:]
    release, _, pre = version.partition("-")
    nums = []
    for piece in release.split("."):
        m = _NUMBER.match(piece)
        nums.append(int(m.group(0)) if m else 0)
    return nums, pre


def compare_version(a: str, b: str) -> int:
    """Compare two dotted version strings.

    Returns 1 if *a* is newer, -1 if *b* is newer, 0 if equal. Missing
    components count as zero and a pre-release suffix (``4.0.0-beta``)
    sorts before the plain release.
    """
    a_nums, a_pre = _parts(a)
    b_nums, b_pre = _parts(b)
    width = max(len(a_nums), len(b_nums))
    a_nums += [0] * (width - len(a_nums))
    b_nums += [0] * (width - len(b_nums))
    if a_nums != b_nums:
        return 1 if a_nums > b_nums else -1
    if a_pre == b_pre:
        return 0
    if not a_pre:
        return 1
    if not b_pre:
        return -1
    return 1 if a_pre > b_pre else -1
