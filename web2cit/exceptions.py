"""Custom exceptions for Web2Cit."""


class Web2CitError(Exception):
    """Base class for all Web2Cit exceptions."""

    pass


class ConfigTypeError(Web2CitError, TypeError):
    """Raised when a step is given a config its type does not accept."""

    def __init__(self, step_type: str, config: object, reason: str | None = None):
        """Initialize config type error.

        Args:
            step_type: Type of the step being configured (e.g. 'xpath', 'range')
            config: The rejected config value
            reason: Optional explanation of why the config was rejected

        """
        self.step_type = step_type
        self.config = config
        self.reason = reason
        message = f'Invalid config for {step_type} step: {config!r}'
        if reason:
            message += f' ({reason})'
        super().__init__(message)


class SelectionConfigTypeError(ConfigTypeError):
    """Raised when a selection config is invalid for its selection type."""

    pass


class TransformationConfigTypeError(ConfigTypeError):
    """Raised when a transformation config is invalid for its transformation type."""

    pass


class UnknownStepTypeError(Web2CitError, ValueError):
    """Raised when a step definition names an unsupported type."""

    def __init__(self, family: str, step_type: str):
        """Initialize unknown step type error.

        Args:
            family: Step family ('selection' or 'transformation')
            step_type: The unsupported type name

        """
        self.family = family
        self.step_type = step_type
        super().__init__(f'Unknown {family} type: {step_type}')


class UndefinedSelectionConfigError(Web2CitError):
    """Raised when a selection is run before its config has been set."""

    def __init__(self, selection_type: str):
        """Initialize undefined config error.

        Args:
            selection_type: Type of the unconfigured selection

        """
        self.selection_type = selection_type
        super().__init__(f'Cannot select with undefined {selection_type} selection config')


class PatternError(Web2CitError, ValueError):
    """Raised when a path pattern is not a valid glob."""

    def __init__(self, pattern: str, reason: str | None = None):
        """Initialize pattern error.

        Args:
            pattern: The invalid glob pattern
            reason: Optional explanation from the glob compiler

        """
        self.pattern = pattern
        message = f'Invalid path pattern: {pattern!r}'
        if reason:
            message += f' ({reason})'
        super().__init__(message)


class DomainNameError(Web2CitError, ValueError):
    """Raised when a string is not a valid domain name."""

    def __init__(self, domain: str):
        """Initialize domain name error.

        Args:
            domain: The invalid domain name

        """
        self.domain = domain
        super().__init__(f'"{domain}" is not a valid domain name')


class CrossDomainTranslationError(Web2CitError):
    """Raised when a template is asked to translate a target from another domain."""

    def __init__(self, template_domain: str, target_domain: str):
        """Initialize cross-domain translation error.

        Args:
            template_domain: Domain the template belongs to
            target_domain: Domain of the target webpage

        """
        self.template_domain = template_domain
        self.target_domain = target_domain
        super().__init__(f'Template for "{template_domain}" cannot translate target from "{target_domain}"')


class UnknownFieldError(Web2CitError, ValueError):
    """Raised when a field name is not part of the field-name enumeration."""

    def __init__(self, fieldname: str):
        """Initialize unknown field error.

        Args:
            fieldname: The unsupported field name

        """
        self.fieldname = fieldname
        super().__init__(f'No field parameters available for field name "{fieldname}"')


class ForceRequiredFieldError(Web2CitError):
    """Raised when a force-required field is made non-required."""

    def __init__(self, fieldname: str):
        """Initialize force-required field error.

        Args:
            fieldname: Name of the force-required field

        """
        self.fieldname = fieldname
        super().__init__(f'Cannot make force-required field "{fieldname}" non-required')


class DuplicateTemplatePathError(Web2CitError):
    """Raised when adding a template whose path is already taken."""

    def __init__(self, path: str):
        """Initialize duplicate template path error.

        Args:
            path: The duplicated template path

        """
        self.path = path
        super().__init__(f'A template for path "{path}" already exists')


class DuplicatePatternError(Web2CitError):
    """Raised when adding a pattern that is already in the list."""

    def __init__(self, pattern: str):
        """Initialize duplicate pattern error.

        Args:
            pattern: The duplicated glob pattern

        """
        self.pattern = pattern
        super().__init__(f'Pattern "{pattern}" already exists')


class DuplicateTestPathError(Web2CitError):
    """Raised when adding a test whose path is already taken."""

    def __init__(self, path: str):
        """Initialize duplicate test path error.

        Args:
            path: The duplicated test path

        """
        self.path = path
        super().__init__(f'A test for path "{path}" already exists')


class HTTPResponseError(Web2CitError):
    """Raised when a remote service answers with a non-success status."""

    def __init__(self, url: str, status_code: int):
        """Initialize HTTP response error.

        Args:
            url: The requested URL
            status_code: HTTP status code received

        """
        self.url = url
        self.status_code = status_code
        super().__init__(f'HTTP error response from {url} (status={status_code})')


class RevisionsApiError(Web2CitError):
    """Raised when the revisions API or a stored revision cannot be understood."""

    pass
