"""Work-order timekeeping package.

Turns raw clock-in/clock-out entries into weekly worker summaries, attributes
worked hours to work orders, classifies overtime and repairs clock entries left
in an inconsistent state. Organized by feature modules (timeclock, summaries,
repairs, ...) with Protocol repositories and a thin Flask controller layer.
"""
