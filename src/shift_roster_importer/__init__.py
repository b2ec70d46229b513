"""Configuration-driven schedule spreadsheet importer."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
