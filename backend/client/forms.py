# backend/client/forms.py
"""
Form drafts: the unsaved copy of one entity while it is being created or
edited.

Every edit goes through ``FormDraft.set``, which writes one value at a
dotted path (``ipDetails.gateway``, ``bridgeDetails.stpi.ssid``,
``servicePeriods.0.date``) after checking the path against the entity
schema. Only the containers along the path are copied; everything else in
the draft is shared with the previous state.
"""

import copy
import math
import logging

from models.schemas import (
    blank_document,
    blank_value,
    field_type,
    get_schema,
    is_model,
    list_item_type,
)

logger = logging.getLogger(__name__)

BANDWIDTH_INPUTS = ('bandwidthDetails.free', 'bandwidthDetails.purchased')
BANDWIDTH_TOTAL = 'bandwidthDetails.total'


def to_number(value):
    """Numeric form input; blank or unparseable input counts as 0."""
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(str(value).strip() or 0)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) if number.is_integer() else number


def _is_blank(value):
    if isinstance(value, dict):
        return all(_is_blank(item) for item in value.values())
    if isinstance(value, list):
        return all(_is_blank(item) for item in value)
    return value is None or value == ''


def _merge_defaults(blank, value):
    """Deep copy of ``value`` with missing keys of nested objects taken from ``blank``."""
    if isinstance(blank, dict) and isinstance(value, dict):
        merged = copy.deepcopy(blank)
        for key, item in value.items():
            if item is None and key in blank:
                continue
            merged[key] = _merge_defaults(blank.get(key), item)
        return merged
    return copy.deepcopy(value)


def _assign(container, segments, value):
    """Copy-on-write assignment of ``value`` at ``segments`` inside ``container``."""
    head, rest = segments[0], segments[1:]
    if isinstance(container, list):
        index = int(head)
        if not 0 <= index < len(container):
            raise IndexError(f"Row {index} does not exist")
        updated = list(container)
        updated[index] = value if not rest else _assign(updated[index], rest, value)
        return updated

    updated = dict(container or {})
    updated[head] = value if not rest else _assign(updated.get(head) or {}, rest, value)
    return updated


class FormDraft:
    """Draft of one entity, seeded from an existing document or from defaults."""

    def __init__(self, kind, seed=None):
        self.kind = kind
        self.schema = get_schema(kind)
        self.data = self._seed(seed or {})

    def __repr__(self):
        return f'<FormDraft kind={self.kind}>'

    def _seed(self, seed):
        data = blank_document(self.schema)
        for name, blank in data.items():
            value = seed.get(name)
            if value is None:
                continue
            data[name] = _merge_defaults(blank, value)

        # list editors always show at least one row
        for name in self._list_fields():
            if not data.get(name):
                data[name] = [self._blank_row(name)]
        return data

    def _list_fields(self):
        return [name for name in self.schema.model_fields
                if list_item_type(field_type(self.schema, name)) is not None]

    def _row_type(self, field):
        item = list_item_type(field_type(self.schema, field))
        if item is None:
            raise KeyError(f"'{field}' is not a list field")
        return item

    def _blank_row(self, field):
        return blank_value(self._row_type(field))

    def _check_path(self, segments):
        annotation = self.schema
        for segment in segments:
            if is_model(annotation):
                annotation = field_type(annotation, segment)
            elif list_item_type(annotation) is not None:
                if not segment.isdigit():
                    raise KeyError(f"Expected a row index, got '{segment}'")
                annotation = list_item_type(annotation)
            else:
                raise KeyError(f"Cannot descend into '{segment}'")
        return annotation

    # --- edits ---

    def get(self, path, default=None):
        value = self.data
        for segment in path.split('.'):
            try:
                value = value[int(segment)] if isinstance(value, list) else value[segment]
            except (KeyError, IndexError, ValueError, TypeError):
                return default
        return value

    def set(self, path, value):
        """
        Set the value at a dotted ``path`` and return the new draft data

        Raises:
            KeyError: The path is not declared by the entity schema
            IndexError: A row index is out of range
            ValueError: The path is the derived bandwidth total
        """
        if path == BANDWIDTH_TOTAL:
            raise ValueError(f"{BANDWIDTH_TOTAL} is derived from free + purchased")

        segments = path.split('.')
        self._check_path(segments)

        if path in BANDWIDTH_INPUTS:
            value = to_number(value)
        self.data = _assign(self.data, segments, value)

        if path in BANDWIDTH_INPUTS:
            self._recompute_total()
        return self.data

    def update(self, values):
        """Set several top-level or dotted paths at once."""
        for path, value in values.items():
            self.set(path, value)
        return self.data

    def _recompute_total(self):
        details = self.data.get('bandwidthDetails') or {}
        total = to_number(details.get('free')) + to_number(details.get('purchased'))
        self.data = _assign(self.data, BANDWIDTH_TOTAL.split('.'), total)

    @property
    def total(self):
        return self.get(BANDWIDTH_TOTAL, 0)

    # --- list rows ---

    def rows(self, field):
        return list(self.data.get(field) or [])

    def append_row(self, field):
        self.data = _assign(self.data, [field], self.rows(field) + [self._blank_row(field)])
        return self.data

    def remove_row(self, field, index):
        rows = self.rows(field)
        if not 0 <= index < len(rows):
            raise IndexError(f"Row {index} does not exist")
        del rows[index]
        self.data = _assign(self.data, [field], rows or [self._blank_row(field)])
        return self.data

    def update_row(self, field, index, column, value):
        """Update one cell; ``column`` is None for lists of plain strings."""
        self._row_type(field)
        path = f'{field}.{index}' if column is None else f'{field}.{index}.{column}'
        return self.set(path, value)

    # --- submission ---

    def payload(self):
        """The whole draft, with blank placeholder rows left out."""
        payload = copy.deepcopy(self.data)
        for name in self._list_fields():
            payload[name] = [row for row in payload.get(name) or [] if not _is_blank(row)]
        return payload

    def submit(self, callback):
        payload = self.payload()
        logger.debug(f"Submitting {self.kind} draft")
        return callback(payload)
