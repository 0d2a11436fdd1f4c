from __future__ import annotations


def price_impact(current_tick: int | None, previous_tick: int | None) -> int:
    """Absolute tick move as an integer percentage of the previous tick.

    Missing observations (``None``) and a zero previous tick mean there is not
    enough history to measure anything, so the impact is 0.
    """
    if current_tick is None or previous_tick is None or previous_tick == 0:
        return 0
    delta = current_tick - previous_tick
    return abs(delta) * 100 // abs(previous_tick)
