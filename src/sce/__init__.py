"""Streaming Compliance Engine.

Evaluates video streaming pages against EN 301 549 Clause 7 (captioning,
audio description, and user controls for time-based media).
"""

__version__ = "0.1.0"
