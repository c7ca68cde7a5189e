"""Field names understood by the Citoid mediawiki-basefields format."""

REQUIRED_FIELDS = ('itemType', 'url')

BASE_REGULAR_FIELDS = (
    'abstractNote',
    'accessDate',
    'applicationNumber',
    'archive',
    'archiveLocation',
    'artworkSize',
    'assignee',
    'callNumber',
    'code',
    'codeNumber',
    'committee',
    'conferenceName',
    'country',
    'court',
    'date',
    'DOI',
    'edition',
    'extra',
    'filingDate',
    'history',
    'issue',
    'issuingAuthority',
    'journalAbbreviation',
    'language',
    'legalStatus',
    'legislativeBody',
    'libraryCatalog',
    'medium',
    'meetingName',
    'number',
    'numberOfVolumes',
    'numPages',
    'pages',
    'place',
    'priorityNumbers',
    'programmingLanguage',
    'publicationTitle',
    'publisher',
    'references',
    'reporter',
    'rights',
    'runningTime',
    'scale',
    'section',
    'series',
    'seriesNumber',
    'seriesText',
    'seriesTitle',
    'session',
    'shortTitle',
    'system',
    'type',
    'versionNumber',
    'volume',
)

MEDIAWIKI_ID_FIELDS = ('isbn', 'issn', 'PMCID', 'PMID', 'oclc')

BASE_CREATOR_TYPES = (
    'attorneyAgent',
    'author',
    'bookAuthor',
    'castMember',
    'commenter',
    'composer',
    'contributor',
    'cosponsor',
    'counsel',
    'editor',
    'guest',
    'interviewer',
    'producer',
    'recipient',
    'reviewedAuthor',
    'scriptwriter',
    'seriesEditor',
    'translator',
    'wordsBy',
)

SIMPLE_CREATOR_FIELDS = tuple(
    f'{creator_type}{suffix}' for creator_type in BASE_CREATOR_TYPES for suffix in ('First', 'Last')
)

# Fields that may appear in a simplified citation, and thus in citoid selections
SIMPLE_CITOID_FIELDS = frozenset(
    (
        *REQUIRED_FIELDS,
        'title',
        'tags',
        *BASE_REGULAR_FIELDS,
        *MEDIAWIKI_ID_FIELDS,
        *SIMPLE_CREATOR_FIELDS,
    )
)


def is_simple_citoid_field(name: str) -> bool:
    """Check whether a name is a field of a simplified Citoid citation."""
    return name in SIMPLE_CITOID_FIELDS
