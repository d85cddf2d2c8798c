"""Small text helpers shared by the prompt builders and response payloads."""

from typing import Iterable, List, TypeVar

T = TypeVar("T")


def format_number(value: float) -> str:
    """Group thousands; drop the fraction for whole numbers.

    >>> format_number(1234567)
    '1,234,567'
    >>> format_number(3203.2)
    '3,203.2'
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def level_label(value: float) -> str:
    """High / Medium / Low bucket for 0..1 audio features."""
    if value > 0.7:
        return "High"
    if value > 0.4:
        return "Medium"
    return "Low"


def tempo_label(bpm: float) -> str:
    if bpm > 120:
        return "Fast"
    if bpm > 90:
        return "Medium"
    return "Slow"


def unique_in_order(items: Iterable[T]) -> List[T]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0
