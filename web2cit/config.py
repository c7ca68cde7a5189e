"""Runtime settings for Web2Cit.

Settings are plain dataclasses; values can be overridden through environment
variables (optionally loaded from a ``.env`` file).
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

CITOID_API_ENDPOINT = 'https://en.wikipedia.org/api/rest_v1/data/citation/mediawiki-basefields'
REVISIONS_API_INSTANCE = 'https://meta.wikimedia.org'
REVISIONS_API_PATH = '/w/api.php'
RVLIMIT_MAX = 500
STORAGE_ROOT = 'Web2Cit/data/'
USER_AGENT = 'web2cit/0.1 (https://meta.wikimedia.org/wiki/Web2Cit)'
FORCE_REQUIRED_FIELDS = ('itemType', 'title')


@dataclass
class Settings:
    """Configuration shared by the fetch collaborators and domain objects.

    Attributes:
        citoid_api_endpoint: Citoid endpoint returning mediawiki-basefields citations
        revisions_api_instance: Base URL of the wiki storing configuration revisions
        revisions_api_path: Path of the MediaWiki action API on that wiki
        rvlimit_max: Maximum number of revisions requested per API call
        storage_root: Page-title prefix under which domain configurations are stored
        user_agent: User-Agent header sent with every outgoing request
        timeout: Request timeout in seconds
        max_retries: Attempts made by collaborators on transport errors
        force_required_fields: Field names every template must treat as required
    """

    citoid_api_endpoint: str = CITOID_API_ENDPOINT
    revisions_api_instance: str = REVISIONS_API_INSTANCE
    revisions_api_path: str = REVISIONS_API_PATH
    rvlimit_max: int = RVLIMIT_MAX
    storage_root: str = STORAGE_ROOT
    user_agent: str = USER_AGENT
    timeout: float = 30.0
    max_retries: int = 3
    force_required_fields: tuple[str, ...] = field(default=FORCE_REQUIRED_FIELDS)

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ValueError: If an endpoint is missing or a numeric limit is out of range.
        """
        if not self.citoid_api_endpoint:
            raise ValueError('Citoid API endpoint required')
        if not self.revisions_api_instance:
            raise ValueError('Revisions API instance required')
        if self.rvlimit_max <= 0:
            raise ValueError(f'rvlimit_max must be positive, got {self.rvlimit_max}')
        if self.timeout < 0:
            raise ValueError(f'timeout must not be negative, got {self.timeout}')
        if self.max_retries < 1:
            raise ValueError(f'max_retries must be at least 1, got {self.max_retries}')

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from ``WEB2CIT_*`` environment variables.

        Returns:
            Settings with defaults for every variable that is not set

        """
        load_dotenv()

        force_required = os.getenv('WEB2CIT_FORCE_REQUIRED_FIELDS')
        return cls(
            citoid_api_endpoint=os.getenv('WEB2CIT_CITOID_API_ENDPOINT', CITOID_API_ENDPOINT),
            revisions_api_instance=os.getenv('WEB2CIT_REVISIONS_API_INSTANCE', REVISIONS_API_INSTANCE),
            revisions_api_path=os.getenv('WEB2CIT_REVISIONS_API_PATH', REVISIONS_API_PATH),
            rvlimit_max=int(os.getenv('WEB2CIT_RVLIMIT_MAX', str(RVLIMIT_MAX))),
            storage_root=os.getenv('WEB2CIT_STORAGE_ROOT', STORAGE_ROOT),
            user_agent=os.getenv('WEB2CIT_USER_AGENT', USER_AGENT),
            timeout=float(os.getenv('WEB2CIT_TIMEOUT', '30')),
            max_retries=int(os.getenv('WEB2CIT_MAX_RETRIES', '3')),
            force_required_fields=(
                tuple(name.strip() for name in force_required.split(',') if name.strip())
                if force_required is not None
                else FORCE_REQUIRED_FIELDS
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment once."""
    return Settings.from_env()
