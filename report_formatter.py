#!/usr/bin/env python3
"""
Report Formatting
Shared helpers for turning collected values into report lines.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

BANNER_RULE = "=" * 41
NOT_AVAILABLE = "N/A"
TWO_PLACES = Decimal("0.01")


class MetricSample:
    """One metric category as collected at a single point in time"""

    def __init__(self, category, lines=None, values=None, collected_at=None):
        self.category = category
        self.lines = list(lines or [])
        self.values = dict(values or {})
        self.collected_at = collected_at or datetime.now()

    def add(self, line=""):
        self.lines.append(line)

    def __repr__(self):
        return f"MetricSample({self.category!r}, values={self.values!r})"


def percent_of(part, whole):
    """
    Return part*100/whole rounded half-up to two places, or None when the
    divisor is zero or either side is missing.
    """
    if part is None or whole is None:
        return None
    try:
        whole = Decimal(whole)
        if whole <= 0:
            return None
        return (Decimal(part) * 100 / whole).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return None


def ratio(numerator, denominator):
    """numerator/denominator to two places, None on a zero or missing divisor"""
    if numerator is None or not denominator:
        return None
    try:
        return (Decimal(str(numerator)) / Decimal(str(denominator))).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return None


def two_places(value):
    if value is None:
        return None
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_value(value):
    """Render a computed value, using N/A for anything missing."""
    return NOT_AVAILABLE if value is None else str(value)


def format_percent(value):
    return NOT_AVAILABLE if value is None else f"{value}%"


def section_header(title):
    return ["", f"--- {title} ---"]


def opening_banner(hostname, generated_on):
    return [
        BANNER_RULE,
        "       SERVER PERFORMANCE STATS",
        BANNER_RULE,
        f"Generated on: {generated_on.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Hostname: {hostname}",
        BANNER_RULE,
    ]


def closing_banner():
    return [
        "",
        BANNER_RULE,
        "       END OF REPORT",
        BANNER_RULE,
    ]


def render_section(title, samples):
    """Header plus the lines of every sample, in order."""
    lines = section_header(title)
    for sample in samples:
        lines.extend(sample.lines)
    return lines
