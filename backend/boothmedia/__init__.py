"""
Booth media core: background AI photo generation, compositing and upload for
an event photo booth, plus the video task endpoint and queue ticker.
"""

__version__ = "1.0.0"
