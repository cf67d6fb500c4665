"""Cycle engine core: time arithmetic, fasting windows and phases, the daily
cycle state machine, progression, and exercise selection.

Submodules are imported directly (``fitcycle.engine.fasting_phase`` etc.);
the schemas depend on :mod:`fitcycle.engine.timewindow`, so nothing is
re-exported here.
"""
