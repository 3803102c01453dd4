"""
SLA Checker
===========

Checks whether an instant falls within an SLA deadline measured in
business time: hours inside a daily business window, on valid weekdays,
excluding public holidays.
"""

__version__ = "1.0.0"
