"""
Well-being log

Record daily observations and symptoms, curate the catalog of allowed
values, and query them back through a small REST API.
"""

__version__ = "0.1.0"
