"""
Hostscan - host vulnerability assessment client.

Inventory what is installed, report only what is actually running.
"""

from importlib.metadata import version as _version

__version__ = _version("hostscan")
