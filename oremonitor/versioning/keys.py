# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Lenient version ordering for plugin version strings.

This module is format-agnostic: it does NOT read archives or call Ore.
It only turns free-form plugin version strings ("2.1.4", "7.1.0-SNAPSHOT",
"2.0.0PRE9H2", "v1.3") into comparable keys.

Every string has a key, so comparison never raises. Ordering rules:

- The leading numeric core ("2.0.0") is compared segment by segment.
  Trailing zero segments are insignificant ("2.0" == "2.0.0").
- A final release sorts above any prerelease of the same core.
- Clean prerelease tags rank dev < alpha/a/ea < beta/b < unknown < rc.
- A compound vendor suffix (letters, digits, more letters: "PRE9H2")
  ranks above every clean prerelease tag and below the final release.
- Post-release tags (post, p, rev, r, hotfix, hf) sort above the final.
- "+build" metadata is ignored.
- Strings without a numeric core sort below every numeric version, ordered
  among themselves by lowercase text. The empty string is the minimum.
"""

from __future__ import annotations

import re

# Known prerelease tag ordering (lower = older)
_PRE_TAG_RANK: dict[str, float] = {
    "dev": 0,
    "d": 0,
    "alpha": 1,
    "a": 1,
    "ea": 1,
    "beta": 2,
    "b": 2,
    "rc": 3,
}
_UNKNOWN_PRE_RANK = 2.5  # unknown tags (e.g. SNAPSHOT) sort between beta and rc
_COMPOUND_PRE_RANK = 3.5  # PRE9H2-style suffixes sort above rc
_FINAL_RANK = 4.0
_TEXT_RANK = -1.0
_POST_TAGS = {"post", "p", "rev", "r", "hotfix", "hf"}

_CORE = re.compile(r"^\s*[vV]?(\d+(?:[._-]\d+)*)")
_NUM_SEP = re.compile(r"[._-]")
_COMPOUND = re.compile(r"^[._-]?([A-Za-z]+)(\d+)([A-Za-z]+)")
_ALNUM_RUN = re.compile(r"\d+|[A-Za-z]+")

VersionKey = tuple[tuple[int, ...], float, tuple[tuple[int, object], ...], int]


def _release_tuple(core: str) -> tuple[int, ...]:
    """Parse the numeric core and drop insignificant trailing zeros."""
    nums = [int(p) for p in _NUM_SEP.split(core) if p]
    while len(nums) > 1 and nums[-1] == 0:
        nums.pop()
    return tuple(nums)


def _split_pre_tokens(pre: str) -> tuple[tuple[int, object], ...]:
    """Split a prerelease suffix into tokens with numeric awareness.

    Example: "rc.10-x" -> ((0, 10), (1, "x")) once the tag is removed.
    Numeric tokens are encoded (0, int) and sort before text tokens (1, str).
    """
    out: list[tuple[int, object]] = []
    for t in re.split(r"[.\-]", pre):
        if not t:
            continue
        if t.isdigit():
            out.append((0, int(t)))
        else:
            out.append((1, t.lower()))
    return tuple(out)


def _alnum_tokens(s: str) -> tuple[tuple[int, object], ...]:
    out: list[tuple[int, object]] = []
    for run in _ALNUM_RUN.findall(s):
        out.append((0, int(run)) if run.isdigit() else (1, run.lower()))
    return tuple(out)


def _find_pre_segment(s: str) -> tuple[float | None, tuple[tuple[int, object], ...]]:
    """Detect a prerelease tag in the suffix that follows the numeric core.

    Returns (rank, tokens) or (None, ()) if the suffix is not a prerelease.
    """
    compound = _COMPOUND.match(s)
    if compound and compound.group(1).lower() not in _POST_TAGS:
        return _COMPOUND_PRE_RANK, _alnum_tokens(s)

    m = re.search(r"(?i)\b([A-Za-z]+)[._-]?([0-9A-Za-z.\-]*)", s)
    if not m:
        return None, ()
    tag = m.group(1).lower()
    rest = m.group(2) or ""
    if tag in _POST_TAGS:
        return None, ()
    rank = _PRE_TAG_RANK.get(tag, _UNKNOWN_PRE_RANK)
    tokens = _split_pre_tokens(rest) if rest else ()
    # ensure "rc" < "rc.1" < "rc.2"
    return float(rank), ((1, tag),) + tokens


def _find_post_segment(s: str) -> int:
    """Return a positive number if a post-release tag is found; else 0."""
    m = re.search(r"(?i)(?:^|[._-])(post|p|rev|r|hotfix|hf)[._-]?(\d+)?$", s)
    if not m:
        return 0
    return int(m.group(2)) if m.group(2) else 1


def _strip_build_meta(s: str) -> str:
    i = s.find("+")
    return s if i == -1 else s[:i]


def version_key_any(s: str) -> VersionKey:
    """Compute a comparable key for any version string.

    Keys have the shape (release_tuple, pre_rank, pre_tokens, post_num).
    Final releases use pre_rank=4.0 so they compare newer than any
    prerelease with the same release tuple. Strings without a numeric
    core get an empty release tuple, which sorts below every version.

    Args:
        s: Version string as found in plugin metadata or on Ore.

    Returns:
        A tuple usable with sorted(), min(), max() and comparisons.

    Example:
        >>> sorted(["2.0.0", "2.0.0RC3", "2.0.0PRE9H2"], key=version_key_any)
        ['2.0.0RC3', '2.0.0PRE9H2', '2.0.0']
    """
    base = _strip_build_meta(s or "")
    core = _CORE.match(base)
    if not core:
        return ((), _TEXT_RANK, ((1, base.strip().lower()),), 0)

    release = _release_tuple(core.group(1))
    suffix = base[core.end() :].strip()

    post_num = _find_post_segment(suffix)
    if post_num:
        return (release, _FINAL_RANK, (), post_num)

    pre_rank, pre_tokens = _find_pre_segment(suffix)
    if pre_rank is None:
        return (release, _FINAL_RANK, (), 0)
    return (release, pre_rank, pre_tokens, 0)


def compare_any(a: str, b: str) -> int:
    """Compare two version strings.

    Returns -1 if a < b, 0 if equal, 1 if a > b. Never raises.
    """
    ka = version_key_any(a)
    kb = version_key_any(b)
    return (ka > kb) - (ka < kb)
