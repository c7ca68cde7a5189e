"""Utility helpers for Web2Cit."""

from web2cit.utils.files import get_logs_path, get_project_root
from web2cit.utils.logging import setup_local_logging
from web2cit.utils.retry import get_retryer, log_retry
from web2cit.utils.timestamps import utc_timestamp
from web2cit.utils.urls import is_domain_name, normalize_path, remove_dot_segments, strip_query

__all__ = [
    'get_logs_path',
    'get_project_root',
    'get_retryer',
    'is_domain_name',
    'log_retry',
    'normalize_path',
    'remove_dot_segments',
    'setup_local_logging',
    'strip_query',
    'utc_timestamp',
]
