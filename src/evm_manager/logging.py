import logging

"""
Package-wide logger. Messages are emitted on a dedicated stream handler and are not propagated to
the root logger, so applications embedding the registry can tune verbosity independently.
"""

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))

logger = logging.getLogger("evm_manager")
logger.propagate = False
logger.setLevel(logging.INFO)
logger.addHandler(_handler)
