# storycomic/utils/text_utils.py

from typing import List


def split_into_segments(text: str, delimiter: str = "\n") -> List[str]:
    """
    Splits completion output into panel segments.
    Each piece is whitespace-trimmed; pieces that are empty after trimming are dropped.
    Order and duplicates are preserved.
    """
    if not text:
        return []
    segments: List[str] = []
    for part in text.split(delimiter):
        trimmed = part.strip()
        if trimmed:
            segments.append(trimmed)
    return segments
