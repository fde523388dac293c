"""
Nagios plugin checking the number of tickets in Request Tracker
"""

__version__ = "1.0"
