"""OpenAPI schema to class-diagram graph transformation."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
