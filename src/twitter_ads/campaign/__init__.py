"""Campaign management resources."""

from .line_item import LineItem

__all__ = ["LineItem"]
