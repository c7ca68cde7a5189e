"""Clients for the remote services Web2Cit depends on."""

from web2cit.clients.citoid import CitoidClient, SimpleCitation, simplify_citation
from web2cit.clients.revisions import Revision, RevisionsApi, strip_syntax_highlight

__all__ = [
    'CitoidClient',
    'Revision',
    'RevisionsApi',
    'SimpleCitation',
    'simplify_citation',
    'strip_syntax_highlight',
]
