import pytest

from web2cit.core.fields import FIELD_NAMES, TemplateField, TranslationField, get_field_parameters
from web2cit.core.procedure import Procedure
from web2cit.core.steps import FixedSelection
from web2cit.exceptions import ForceRequiredFieldError, UnknownFieldError


def fixed_procedure(*values):
    return Procedure(selections=[FixedSelection(value) for value in values])


def test_field_names():
    assert FIELD_NAMES == (
        'itemType',
        'title',
        'authorFirst',
        'authorLast',
        'date',
        'publishedIn',
        'publishedBy',
        'language',
        'control',
    )


def test_unknown_field_name():
    with pytest.raises(UnknownFieldError):
        get_field_parameters('subtitle')
    with pytest.raises(UnknownFieldError):
        TranslationField('subtitle')


@pytest.mark.parametrize(
    'fieldname,output,expected',
    [
        ('title', ['a', 'b'], ['a,b']),
        ('title', ['  Sample  '], ['Sample']),
        ('itemType', ['webpage'], ['webpage']),
        ('itemType', ['bogus'], [None]),
        ('date', ['2022'], ['2022']),
        ('date', ['2022-01-27 '], ['2022-01-27']),
        ('date', ['27/01/2022'], [None]),
        ('authorLast', ['Doe', ''], ['Doe', None]),
        ('authorFirst', ['John', ''], ['John', '']),
        ('language', ['EN-us'], ['EN-us']),
        ('language', ['english!'], [None]),
    ],
)
def test_validate(fieldname, output, expected):
    assert TranslationField(fieldname).validate(output) == expected


def test_field_parameters():
    assert TranslationField('authorLast').is_array
    assert not TranslationField('title').is_array
    assert TranslationField('control').is_control
    assert not TranslationField('control').is_unique
    assert TranslationField('itemType').force_required


def test_force_required_fields_are_always_required():
    assert TemplateField('title', required=False).required
    assert not TemplateField('date').required
    assert TemplateField('date', required=True).required


def test_with_required():
    field = TemplateField('date', procedures=[fixed_procedure('2022')])
    required = field.with_required(True)
    assert required.required
    assert not field.required
    assert required.procedures == field.procedures


def test_force_required_field_cannot_be_made_optional():
    with pytest.raises(ForceRequiredFieldError):
        TemplateField('title').with_required(False)


@pytest.mark.asyncio
async def test_translate_valid_field(webpage):
    field = TemplateField('authorLast', procedures=[fixed_procedure('Doe'), fixed_procedure('Roe')])
    output = await field.translate(webpage)
    assert output.output == ['Doe', 'Roe']
    assert output.valid
    assert output.applicable
    assert len(output.procedure_outputs) == 2
    assert output.fieldname == 'authorLast'


@pytest.mark.asyncio
async def test_translate_invalid_required_field(webpage):
    field = TemplateField('itemType', procedures=[fixed_procedure('bogus')])
    output = await field.translate(webpage)
    assert output.output == [None]
    assert not output.valid
    assert output.required
    assert not output.applicable


@pytest.mark.asyncio
async def test_translate_empty_optional_field(webpage):
    output = await TemplateField('publishedBy').translate(webpage)
    assert output.output == []
    assert not output.valid
    assert output.applicable


@pytest.mark.asyncio
async def test_from_name_uses_default_procedure(webpage):
    title = await TemplateField.from_name('title').translate(webpage)
    assert title.output == ['Sample article']

    date = await TemplateField.from_name('date').translate(webpage)
    assert date.output == ['2022-01-27']

    published_in = await TemplateField.from_name('publishedIn').translate(webpage)
    assert published_in.output == ['Example News']


def test_from_definition():
    field = TemplateField.from_definition(
        {
            'fieldname': 'title',
            'procedures': [{'selections': [{'type': 'css', 'config': 'h1'}], 'transformations': []}],
            'required': False,
        }
    )
    assert field.name == 'title'
    assert field.required
    assert field.to_definition().required is True
