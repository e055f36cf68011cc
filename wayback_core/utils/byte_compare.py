"""Byte-exact comparison of tile image payloads."""

from typing import Sequence


def are_bytes_equal(first: Sequence[int], second: Sequence[int]) -> bool:
    """
    Return True when both payloads have the same length and content.

    The scan starts from the end of the buffers: encoded tiles of the same
    location share most of their header bytes, so differences show up sooner
    near the tail.
    """
    if len(first) != len(second):
        return False

    for i in range(len(first) - 1, -1, -1):
        if first[i] != second[i]:
            return False

    return True
