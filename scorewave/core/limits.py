"""Bounds of the offset domain.

Offsets are measured in note lengths (a whole note is 1.0). Every value
curve is defined on the closed range [MIN_OFFSET, MAX_OFFSET].
"""

from __future__ import annotations

MIN_OFFSET = -float(2**31)
MAX_OFFSET = float(2**31 - 1)

# Sample rates below this are refused by the conductor.
MIN_SAMPLE_RATE = 100.0
