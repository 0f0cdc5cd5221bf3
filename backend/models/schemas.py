# backend/models/schemas.py
"""
Entity schemas for the document collections.

Each schema declares the required, optional and defaulted fields of one
entity kind. The record store validates every write against these models:
required fields reject missing, null and empty values, enums reject
unknown discriminators, numbers and booleans are cast from strings, and
unknown fields are dropped without error.
"""

import copy
import typing
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
    ValidationError,
    model_validator,
)


def _integral(value):
    return int(value) if float(value).is_integer() else value


RequiredStr = Annotated[str, StringConstraints(min_length=1)]
# finite only; whole numbers stay ints in the model and on the wire
Number = Annotated[
    float,
    Field(allow_inf_nan=False),
    AfterValidator(_integral),
    PlainSerializer(_integral),
]

SECTIONS = ('rf', 'lan', 'incubation')
UNIT_TYPES = ('stpi', 'non-stpi')


class DocumentModel(BaseModel):
    """Base for entity schemas and their nested sub-documents."""

    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    @model_validator(mode='before')
    @classmethod
    def _drop_null_optionals(cls, data: Any) -> Any:
        # null on an optional field falls back to its default
        if isinstance(data, dict):
            return {
                key: value for key, value in data.items()
                if not (value is None and key in cls.model_fields
                        and not cls.model_fields[key].is_required())
            }
        return data


# --- Nested sub-documents ---

class IpDetails(DocumentModel):
    gateway: str = ''
    networkIp: str = ''
    startIp: str = ''
    lastIp: str = ''
    subnetMask: str = ''


class BridgeSide(DocumentModel):
    bridgeIp: str = ''
    frequency: str = ''
    ssid: str = ''
    wpa2PreSharedKey: str = ''
    peakRssi: str = ''
    channelBandwidth: str = ''


class BridgeDetails(DocumentModel):
    stpi: BridgeSide = Field(default_factory=BridgeSide)
    customer: BridgeSide = Field(default_factory=BridgeSide)
    # raw text carried over from the old flat-string shape
    notes: Optional[str] = None


class ServicePeriod(DocumentModel):
    date: Optional[str] = None
    bandwidth: Optional[str] = None


class BandwidthDetails(DocumentModel):
    free: Number = 0
    purchased: Number = 0
    total: Number = 0


class RouterEntry(DocumentModel):
    name: str = ''
    port: str = ''


class SoftexEntry(DocumentModel):
    year: Optional[str] = None
    month: Optional[str] = None
    amount: Optional[str] = None
    mpr: Optional[str] = None


class FinancialExpense(DocumentModel):
    year: Optional[str] = None
    amount: Optional[str] = None
    description: Optional[str] = None


# --- Entity schemas ---

class EntitySchema(DocumentModel):
    entity_name: ClassVar[str] = ''
    collection: ClassVar[str] = ''
    discriminator: ClassVar[Optional[str]] = None


class CustomerSchema(EntitySchema):
    """Datacom and Incubation customers, split by ``section``."""

    entity_name: ClassVar[str] = 'Customer'
    collection: ClassVar[str] = 'customers'
    discriminator: ClassVar[Optional[str]] = 'section'

    section: Literal['rf', 'lan', 'incubation']
    companyName: RequiredStr
    managerName: RequiredStr
    managerPhone: RequiredStr
    managerEmail: RequiredStr
    managerDesignation: RequiredStr
    leaderName: RequiredStr
    leaderPhone: RequiredStr
    leaderEmail: RequiredStr
    leaderDesignation: RequiredStr
    startDate: RequiredStr
    endDate: RequiredStr
    bandwidth: RequiredStr
    ipDetails: IpDetails = Field(default_factory=IpDetails)
    bridgeDetails: BridgeDetails = Field(default_factory=BridgeDetails)
    prtgGraphLink: str = ''
    servicePeriods: List[ServicePeriod] = Field(default_factory=list)
    bandwidthDetails: BandwidthDetails = Field(default_factory=BandwidthDetails)
    routerDetails: List[RouterEntry] = Field(default_factory=list)
    pathDiagram: str = ''


class UnitSchema(EntitySchema):
    """Exim units, split by ``type``."""

    entity_name: ClassVar[str] = 'Unit'
    collection: ClassVar[str] = 'units'
    discriminator: ClassVar[Optional[str]] = 'type'

    type: Literal['stpi', 'non-stpi']
    name: RequiredStr
    startDate: RequiredStr
    endDate: RequiredStr
    legalAgreements: List[str] = Field(default_factory=list)
    aprReports: List[str] = Field(default_factory=list)
    softexDetails: List[SoftexEntry] = Field(default_factory=list)
    financialExpenses: List[FinancialExpense] = Field(default_factory=list)
    managerName: str = ''
    managerEmail: str = ''
    managerPhone: str = ''
    managerDesignation: str = ''
    contactName: str = ''
    contactEmail: str = ''
    contactPhone: str = ''
    roc: str = ''
    gst: str = ''
    iec: str = ''
    address: str = ''


class CoLocationSchema(EntitySchema):
    """Co-Location rack customers. Served under ``/api/projects``."""

    entity_name: ClassVar[str] = 'CoLocation'
    collection: ClassVar[str] = 'colocations'

    customerName: RequiredStr
    managerName: RequiredStr
    managerEmail: RequiredStr
    managerPhone: RequiredStr
    managerDesignation: RequiredStr
    adminName: RequiredStr
    adminEmail: RequiredStr
    adminPhone: RequiredStr
    adminDesignation: RequiredStr
    rackSpaceUnits: Number
    dataTransferGB: Number
    activationDate: RequiredStr
    agreementEntered: bool
    totalAnnualCharges: Number
    quarterlyCharges: Number
    remarks: Optional[str] = None
    prtgGraphLink: Optional[str] = None
    ipDetails: Optional[IpDetails] = None
    bandwidthDetails: Optional[BandwidthDetails] = None
    servicePeriods: List[ServicePeriod] = Field(default_factory=list)


SCHEMAS: Dict[str, typing.Type[EntitySchema]] = {
    'customer': CustomerSchema,
    'unit': UnitSchema,
    'colocation': CoLocationSchema,
}


def get_schema(kind):
    try:
        return SCHEMAS[kind]
    except KeyError:
        raise KeyError(f"Unknown entity kind: {kind}")


# --- Validation error messages ---

_CAST_NAMES = {
    'float_parsing': 'Number',
    'float_type': 'Number',
    'finite_number': 'Number',
    'bool_parsing': 'Boolean',
    'bool_type': 'Boolean',
    'string_type': 'String',
    'list_type': 'Array',
    'model_type': 'Object',
    'model_attributes_type': 'Object',
    'dict_type': 'Object',
}


def _describe_error(error):
    path = '.'.join(str(part) for part in error['loc'])
    kind = error['type']
    value = error.get('input')

    if kind in ('missing', 'string_too_short') or value is None:
        return f"{path}: Path `{path}` is required."
    if kind == 'literal_error':
        return f"{path}: `{value}` is not a valid enum value for path `{path}`."
    if kind in _CAST_NAMES:
        return f'{path}: Cast to {_CAST_NAMES[kind]} failed for value "{value}" at path "{path}"'
    return f"{path}: {error['msg']}"


def format_validation_error(schema, exc: ValidationError) -> str:
    """Render a pydantic error as ``<Entity> validation failed: path: reason, ...``."""
    reasons = [_describe_error(error) for error in exc.errors()]
    return f"{schema.entity_name} validation failed: " + ', '.join(reasons)


# --- Field introspection (used by form drafts) ---

def _unwrap(annotation):
    """Strip Optional/Union and Annotated wrappers down to the concrete type."""
    origin = typing.get_origin(annotation)
    if origin is Annotated:
        return _unwrap(typing.get_args(annotation)[0])
    if origin is typing.Union:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        return _unwrap(members[0])
    return annotation


def is_model(annotation) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def field_type(model, name):
    """Return the unwrapped annotation of ``model.name``; KeyError if undeclared."""
    if name not in model.model_fields:
        raise KeyError(f"{model.__name__} has no field '{name}'")
    return _unwrap(model.model_fields[name].annotation)


def list_item_type(annotation):
    """Item type of a ``List[...]`` annotation, or None when it is not a list."""
    if typing.get_origin(annotation) in (list, List):
        return _unwrap(typing.get_args(annotation)[0])
    return None


def blank_value(annotation):
    annotation = _unwrap(annotation)
    if is_model(annotation):
        return blank_document(annotation)
    if list_item_type(annotation) is not None:
        return []
    if typing.get_origin(annotation) is Literal:
        return typing.get_args(annotation)[0]
    if annotation is bool:
        return False
    if annotation in (int, float):
        return 0
    return ''


def blank_document(model) -> dict:
    """Create-form defaults for ``model``: declared defaults, else blanks by type."""
    document = {}
    for name, info in model.model_fields.items():
        default = None if info.is_required() else info.get_default(call_default_factory=True)
        if isinstance(default, BaseModel):
            document[name] = default.model_dump()
        elif default is not None:
            document[name] = copy.deepcopy(default)
        else:
            document[name] = blank_value(info.annotation)
    return document
