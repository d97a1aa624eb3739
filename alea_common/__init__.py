"""
Alea Common Module
===================

Configuration, structured logging, and console infrastructure shared by
the Alea library and its command-line interface.
"""

from alea_common.config import AleaConfig, get_config

__all__ = ["AleaConfig", "get_config"]
