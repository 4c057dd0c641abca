"""linkmeta — turn loose user input into presentable link metadata."""

__version__ = "0.1.0"
