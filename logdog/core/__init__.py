"""
Core package for Logdog: the screen state machine, its effect runner and
the log file store.
"""
