"""Time Stories: latest-story extraction from a news homepage."""

__version__ = "0.1.0"
