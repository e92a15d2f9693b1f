# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import functools
import re

_segment_separator = re.compile(r'[.-]')
# runs of digits, and runs of anything else (`10rc1` -> `10`, `rc`, `1`)
_segment_part = re.compile(r'\d+|\D+')


class InvalidVersion(ValueError):
    pass


def _segments(version: str) -> tuple[int | str | None, ...]:
    '''
    splits the given version into its segments. Segments mixing digits and letters are split
    further into runs of digits and runs of other characters (`1.10rc1` -> `1`, `10`, `rc`, `1`).
    Numeric runs are returned as int, all others as lower-cased str.

    raises `InvalidVersion` if the given version is empty, contains whitespace or empty segments.
    '''
    if not version or not isinstance(version, str):
        raise InvalidVersion(f'not a valid version: `{version}`')

    if any(c.isspace() for c in version):
        raise InvalidVersion(f'not a valid version (contains whitespace): `{version}`')

    segments = []
    for segment in _segment_separator.split(version):
        if not segment:
            raise InvalidVersion(f'not a valid version (empty segment): `{version}`')
        for part in _segment_part.findall(segment):
            if part.isdigit():
                segments.append(int(part))
            else:
                segments.append(part.lower())

    return tuple(segments)


def _rank(segment: int | str | None) -> int:
    # alphabetic segments (pre-releases) < absent segment < numeric segment
    if isinstance(segment, str):
        return 0
    if segment is None:
        return 1
    return 2


def _compare_segments(left, right) -> int:
    left_rank = _rank(left)
    right_rank = _rank(right)

    if left_rank != right_rank:
        return -1 if left_rank < right_rank else 1

    if left == right:
        return 0

    return -1 if left < right else 1


def compare(left: str, right: str) -> int:
    '''
    compares the two given version strings. Returns a negative number if `left` is smaller than
    `right`, zero if both are equal, a positive number otherwise (in the fashion of the
    `cmp`-functions accepted by `functools.cmp_to_key`).

    Versions are split into segments (separated by `.` or `-`, and between digits and letters),
    which are compared from left to right. Numeric segments are compared numerically, alphabetic
    segments are compared alphabetically, and rank below numeric segments. Thus,
    `1.7.0` > `1.7.0.beta` > `1.7.0.alpha`, and `1.10rc1` > `1.9.0`.
    A missing trailing segment ranks below a numeric one (`1.7` < `1.7.0`), but above an
    alphabetic one.

    raises `InvalidVersion` if any of the given versions is empty or malformed.
    '''
    left_segments = _segments(left)
    right_segments = _segments(right)

    for idx in range(max(len(left_segments), len(right_segments))):
        left_segment = left_segments[idx] if idx < len(left_segments) else None
        right_segment = right_segments[idx] if idx < len(right_segments) else None

        if (result := _compare_segments(left_segment, right_segment)) != 0:
            return result

    return 0


@functools.total_ordering
class Version:
    '''
    wrapper around a version string, ordered according to `compare`. Intended to be used as a
    sort-key.
    '''
    def __init__(self, version: str):
        # validate early
        _segments(version)
        self._version = version

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self._version, other._version) == 0

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self._version, other._version) < 0

    def __hash__(self):
        return hash(_segments(self._version))

    def __str__(self):
        return self._version

    def __repr__(self):
        return f'{self.__class__.__name__}({self._version!r})'


def is_version(version: str) -> bool:
    try:
        _segments(version)
        return True
    except InvalidVersion:
        return False


def in_range(
    version: str,
    lower: str | None,
    upper: str,
) -> bool:
    '''
    returns whether the given version lies within the half-open interval `(lower, upper]`.
    If `lower` is `None`, the interval is unbounded towards lower versions.
    '''
    if compare(version, upper) > 0:
        return False

    if lower is None:
        return True

    return compare(version, lower) > 0
