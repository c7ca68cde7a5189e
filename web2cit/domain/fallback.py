"""Default fallback template: every non-control field, read from Citoid."""

from web2cit.core.fields import FIELD_PARAMETERS
from web2cit.models.definitions import FallbackTemplateDefinition, TemplateFieldDefinition

DEFAULT_FALLBACK_TEMPLATE = FallbackTemplateDefinition(
    fields=[
        TemplateFieldDefinition(
            fieldname=fieldname,
            procedures=[params.default_procedure],
            required=params.force_required,
        )
        for fieldname, params in FIELD_PARAMETERS.items()
        if not params.control
    ]
)
