import logging

"""
The package-wide logger. The level is set from the loaded configuration in `clamm.config`.
"""

logger = logging.getLogger("clamm")
logger.propagate = False
logger.setLevel(logging.INFO)
logger.addHandler(logging.StreamHandler())
