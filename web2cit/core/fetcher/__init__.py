"""HTML fetchers for webpage caches."""

from typing import Any

from web2cit.core.fetcher.base import HTMLFetcher
from web2cit.core.fetcher.simple import SimpleFetcher


def create_fetcher(fetcher_type: str = 'simple', **kwargs: Any) -> HTMLFetcher:
    """Create a fetcher by name.

    Args:
        fetcher_type: Registered fetcher name
        **kwargs: Arguments passed to the fetcher constructor

    Returns:
        The fetcher instance

    Raises:
        ValueError: If no fetcher is registered under that name

    """
    fetchers: dict[str, type[HTMLFetcher]] = {
        'simple': SimpleFetcher,
    }

    fetcher_class = fetchers.get(fetcher_type)
    if fetcher_class is None:
        raise ValueError(f'Unknown fetcher type: {fetcher_type}. Available: {list(fetchers.keys())}')

    return fetcher_class(**kwargs)


__all__ = ['HTMLFetcher', 'SimpleFetcher', 'create_fetcher']
