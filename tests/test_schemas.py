import pytest
from pydantic import ValidationError

from models.schemas import (
    CoLocationSchema,
    CustomerSchema,
    UnitSchema,
    blank_document,
    field_type,
    format_validation_error,
    get_schema,
    IpDetails,
    list_item_type,
    ServicePeriod,
)


def _error(schema, data):
    with pytest.raises(ValidationError) as excinfo:
        schema.model_validate(data)
    return format_validation_error(schema, excinfo.value)


def test_get_schema():
    assert get_schema('customer') is CustomerSchema
    assert get_schema('unit') is UnitSchema
    assert get_schema('colocation') is CoLocationSchema
    with pytest.raises(KeyError):
        get_schema('invoice')


def test_missing_fields_are_listed_in_order(customer_data):
    data = {**customer_data, 'section': 'rf'}
    del data['managerPhone']
    del data['endDate']

    assert _error(CustomerSchema, data) == (
        'Customer validation failed: managerPhone: Path `managerPhone` is required., '
        'endDate: Path `endDate` is required.'
    )


def test_null_required_field_reads_as_required(unit_data):
    message = _error(UnitSchema, {**unit_data, 'type': 'stpi', 'startDate': None})
    assert message == 'Unit validation failed: startDate: Path `startDate` is required.'


def test_invalid_unit_type():
    message = _error(UnitSchema, {'type': 'sez', 'name': 'X', 'startDate': 'a', 'endDate': 'b'})
    assert message == 'Unit validation failed: type: `sez` is not a valid enum value for path `type`.'


def test_nested_cast_error_path(customer_data):
    data = {**customer_data, 'section': 'rf', 'bandwidthDetails': {'free': 'ten'}}
    message = _error(CustomerSchema, data)
    assert message == (
        'Customer validation failed: bandwidthDetails.free: '
        'Cast to Number failed for value "ten" at path "bandwidthDetails.free"'
    )


def test_boolean_cast_error(colocation_data):
    message = _error(CoLocationSchema, {**colocation_data, 'agreementEntered': 'maybe'})
    assert 'Cast to Boolean failed for value "maybe" at path "agreementEntered"' in message


def test_null_optional_falls_back_to_default(customer_data):
    customer = CustomerSchema.model_validate({**customer_data, 'section': 'lan', 'pathDiagram': None,
                                              'ipDetails': None, 'routerDetails': None})

    assert customer.pathDiagram == ''
    assert customer.ipDetails == IpDetails()
    assert customer.routerDetails == []


def test_integral_numbers_become_ints(colocation_data):
    colocation = CoLocationSchema.model_validate({**colocation_data, 'rackSpaceUnits': 4.0,
                                                  'quarterlyCharges': 2500.75})

    assert isinstance(colocation.rackSpaceUnits, int)
    assert colocation.quarterlyCharges == 2500.75


def test_field_introspection():
    assert field_type(CustomerSchema, 'ipDetails') is IpDetails
    assert list_item_type(field_type(CustomerSchema, 'servicePeriods')) is ServicePeriod
    assert list_item_type(field_type(UnitSchema, 'legalAgreements')) is str
    assert list_item_type(field_type(CustomerSchema, 'companyName')) is None
    # Optional wrappers are stripped
    assert field_type(CoLocationSchema, 'ipDetails') is IpDetails
    with pytest.raises(KeyError):
        field_type(CustomerSchema, 'nickname')


def test_blank_document_for_customer():
    blank = blank_document(CustomerSchema)

    assert blank['section'] == 'rf'
    assert blank['companyName'] == ''
    assert blank['bandwidthDetails'] == {'free': 0, 'purchased': 0, 'total': 0}
    assert blank['bridgeDetails']['customer']['peakRssi'] == ''
    assert blank['servicePeriods'] == []


def test_blank_document_for_colocation():
    blank = blank_document(CoLocationSchema)

    assert blank['agreementEntered'] is False
    assert blank['rackSpaceUnits'] == 0
    assert blank['remarks'] == ''
    assert blank['ipDetails']['gateway'] == ''


@pytest.mark.parametrize('value', ['NaN', 'inf', float('nan'), float('-inf'), '1e400'])
def test_non_finite_numbers_are_cast_errors(customer_data, value):
    data = {**customer_data, 'section': 'rf', 'bandwidthDetails': {'purchased': value}}

    message = _error(CustomerSchema, data)

    assert message.startswith('Customer validation failed: bandwidthDetails.purchased: Cast to Number failed')


def test_whole_numbers_dump_as_ints(customer_data):
    customer = CustomerSchema.model_validate({
        **customer_data, 'section': 'lan',
        'bandwidthDetails': {'free': '10', 'purchased': 5.0, 'total': 15.5},
    })

    dumped = customer.model_dump(mode='json')['bandwidthDetails']

    assert dumped == {'free': 10, 'purchased': 5, 'total': 15.5}
    assert isinstance(dumped['free'], int) and isinstance(dumped['purchased'], int)
