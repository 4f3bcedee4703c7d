"""Diagnostics package.

- altitude_plot: Sun/Moon altitude curves with the events found by the
  sequences marked on them (needs the diagnostics extra: matplotlib, numpy).
"""

__all__ = ["altitude_plot"]
