"""Validation and shaping contracts for the vehicle inspection backend."""

import logging

from inspection_core.config import LOG_LEVEL

logging.getLogger(__name__).setLevel(LOG_LEVEL)
