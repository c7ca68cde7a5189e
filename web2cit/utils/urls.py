"""Helpers for domain names and URL paths."""

import re

_LABEL_RE = re.compile(r'^([A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9-]*[A-Za-z0-9])$')


def is_domain_name(domain: str) -> bool:
    """Check whether a string is a valid (fully qualified) domain name.

    Args:
        domain: Candidate domain name; a single trailing dot is allowed

    Returns:
        True if it has at least two labels and respects the length limits

    """
    if not isinstance(domain, str):
        return False
    if domain.endswith('.'):
        domain = domain[:-1]
    if not domain or len(domain) > 253:
        return False
    labels = domain.split('.')
    if len(labels) < 2:
        return False
    return all(len(label) <= 63 and _LABEL_RE.match(label) for label in labels)


def remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments of an absolute path (RFC 3986, 5.2.4)."""
    segments = path.split('/')
    output: list[str] = []
    for segment in segments[1:]:
        if segment == '..':
            if output:
                output.pop()
        elif segment != '.':
            output.append(segment)
    if segments[-1] in ('.', '..'):
        output.append('')
    return '/' + '/'.join(output)


def normalize_path(path: str) -> str:
    """Normalize a URL path the way a browser resolves it.

    Dot segments are resolved, the fragment is dropped and the query string is
    kept. Duplicate slashes are left untouched.

    Args:
        path: Absolute path, optionally with query and fragment

    Returns:
        The normalized path, including its query string if any

    """
    path = path.split('#', 1)[0]
    path, separator, query = path.partition('?')
    if not path.startswith('/'):
        path = '/' + path
    normalized = remove_dot_segments(path)
    if separator and query:
        normalized += f'?{query}'
    return normalized


def strip_query(path: str) -> str:
    """Remove the query string (and fragment) from a path."""
    return re.split(r'[?#]', path, maxsplit=1)[0]
