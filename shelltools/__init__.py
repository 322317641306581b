"""Small command-line utilities for everyday shell work: listings, filters, prompts, templates, graphs, calendars and to-do lists."""

__version__ = "0.1.0"