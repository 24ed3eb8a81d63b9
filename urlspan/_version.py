# This file MUST NOT contain anything but the __version__ assignment,
# setup.py reads it line by line.

__version__ = '0.1.0'
