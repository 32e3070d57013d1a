"""
Ambitype - Endless Literary Typing Practice

Streams text from a prebuilt corpus of plain-text books as an endless
typing target and tracks live and session typing statistics.
"""

__version__ = "1.0.0"
__author__ = "Ambitype Contributors"
