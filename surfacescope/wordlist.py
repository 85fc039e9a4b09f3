"""Wordlist loading and hashcat-style mask expansion."""

from __future__ import annotations

import gzip
from collections.abc import Iterable
from os import PathLike

MASK_LETTERS = "abcdefghijklmnopqrstuvwxyz"
MASK_DIGITS = "0123456789"
MASK_SPECIAL = "-"
MAX_MASK_SIZE = 3

_MASK_CHARSETS = {
    "a": MASK_LETTERS + MASK_DIGITS + MASK_SPECIAL,
    "d": MASK_DIGITS,
    "u": MASK_LETTERS,
    "l": MASK_LETTERS,
    "s": MASK_SPECIAL,
}

_GZIP_MAGIC = b"\x1f\x8b\x08"
_HEAD_SIZE = 512


class MaskError(ValueError):
    """Raised when a wordlist mask is malformed or too large."""


def expand_mask(word: str) -> list[str]:
    """Return every word that a hashcat-style mask such as ``www?d`` matches."""
    if word.count("?") > MAX_MASK_SIZE:
        raise MaskError(f"Exceeded maximum mask size ({MAX_MASK_SIZE}): {word}")

    head, sep, tail = word.partition("?")
    if not sep:
        return [word]
    if not tail:
        return []

    chars = _MASK_CHARSETS.get(tail[0])
    if chars is None:
        raise MaskError(f"Improper mask used: {word}")

    expanded: list[str] = []
    for ch in chars:
        expanded.extend(expand_mask(head + ch + tail[1:]))
    return expanded


def expand_mask_wordlist(wordlist: Iterable[str]) -> list[str]:
    """Expand every mask in the wordlist, silently dropping invalid masks."""
    expanded: list[str] = []
    for word in wordlist:
        try:
            expanded.extend(expand_mask(word))
        except MaskError:
            continue
    return expanded


def read_word_list(lines: Iterable[str]) -> list[str]:
    """Strip the lines, drop the blank ones and remove duplicates, keeping order."""
    words = (line.strip() for line in lines)
    return list(dict.fromkeys(word for word in words if word))


def get_list_from_file(path: str | PathLike[str]) -> list[str]:
    """Read the words from a plain text or gzip-compressed wordlist file."""
    with open(path, "rb") as handle:
        data = handle.read()

    if not data[:_HEAD_SIZE]:
        raise ValueError(f"error reading the first {_HEAD_SIZE} bytes from {path}: EOF")

    if data.startswith(_GZIP_MAGIC):
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError) as exc:
            raise ValueError(f"error gz-reading the file {path}: {exc}") from exc

    text = data.decode("utf-8", errors="replace")
    return read_word_list(text.split("\n"))