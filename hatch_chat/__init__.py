"""
Hatch Chat backend - conversation routing and speaking authority for
multi-agent project chat.
"""

__version__ = "1.0.0"
