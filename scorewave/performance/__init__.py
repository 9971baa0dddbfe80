"""Turning an arrangement into samples.

A Conductor owns one Performer per part and advances the performance one
sample at a time; each Performer drives its own instrument.
"""
