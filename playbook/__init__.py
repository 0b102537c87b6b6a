"""
Nifty Playbook
--------------
Opening range geometry and RSI confluence for a single intraday instrument.
"""

__version__ = "0.1.0"
