"""Contract manager: renewal tracking, calendar events and team tasks"""

__version__ = "0.1.0"
