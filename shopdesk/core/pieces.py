# shopdesk/core/pieces.py

import re

# "120 X CAMISA", "12 de ..." -> 120, 12
MULTIPLIER_PATTERN = re.compile(r"(\d+)\s*[XxDdEe]")


def to_int(value, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def calculate_pieces(description, quantity) -> int:
    """Number of garments on a detail line.

    The first "<N> x" / "<N> de" in the description is a per-unit multiplier;
    without one, every unit counts as a single piece.
    """
    quantity = to_int(quantity)

    if not description:
        return quantity

    match = MULTIPLIER_PATTERN.search(str(description))
    if match:
        return int(match.group(1)) * quantity

    return quantity
