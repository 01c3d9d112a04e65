"""
Utility modules for the draft order gateway
"""
from .config_loader import load_upstream_config, normalize_store_host
from .logging_config import configure_logging, get_request_id, set_request_id

__all__ = [
    'load_upstream_config',
    'normalize_store_host',
    'configure_logging',
    'get_request_id',
    'set_request_id',
]
