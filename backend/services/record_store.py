# backend/services/record_store.py
"""
Document store over the SQLAlchemy collection tables.

One ``RecordStore`` wraps one collection. Writes are validated against the
collection's entity schema; reads return plain dicts shaped like the wire
format (``_id``, body fields, ``createdAt``, ``updatedAt``).
"""

import time
import secrets
import logging

from flask import current_app, has_app_context
from pydantic import ValidationError as SchemaError

from models import db, COLLECTIONS, get_schema
from models.schemas import format_validation_error
from services.date_utils import format_datetime_for_response, utcnow
from services.legacy import upgrade_document

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """A write failed schema validation. ``str(error)`` is the client-facing message."""


def generate_id():
    """24 hex digits: 4-byte creation time followed by 8 random bytes."""
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


class RecordStore:
    """create / find / update_by_id / delete_by_id over one collection."""

    def __init__(self, schema):
        self.schema = schema
        self.model = COLLECTIONS[schema.collection]

    @classmethod
    def for_kind(cls, kind):
        return cls(get_schema(kind))

    def __repr__(self):
        return f'<RecordStore collection={self.schema.collection}>'

    # --- helpers ---

    def _validate(self, body):
        try:
            document = self.schema.model_validate(upgrade_document(body))
        except SchemaError as e:
            message = format_validation_error(self.schema, e)
            logger.info(f"Rejected {self.schema.entity_name} write: {message}")
            raise ValidationError(message)
        return document.model_dump(mode='json', exclude_none=True)

    def _discriminator_of(self, data):
        if self.schema.discriminator:
            return data.get(self.schema.discriminator)
        return None

    def _timezone(self):
        if has_app_context():
            return current_app.config.get('OFFICE_TIMEZONE')
        return None

    def serialize(self, record):
        """Wire representation of a stored record."""
        tz_name = self._timezone()
        document = {'_id': record.id}
        document.update(upgrade_document(record.data or {}))
        document['createdAt'] = format_datetime_for_response(record.created_at, tz_name)
        document['updatedAt'] = format_datetime_for_response(record.updated_at, tz_name)
        return document

    def _get(self, doc_id):
        if not doc_id:
            return None
        return self.model.query.filter_by(id=str(doc_id)).first()

    def _commit(self):
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    # --- operations ---

    def create(self, doc):
        """
        Validate and persist a new document.

        Args:
            doc (dict): Document body; unknown fields are dropped

        Returns:
            dict: The stored document with its generated ``_id``

        Raises:
            ValidationError: Missing required field, bad enum value or bad cast
        """
        data = self._validate(doc)
        now = utcnow()
        record = self.model(
            id=generate_id(),
            discriminator=self._discriminator_of(data),
            data=data,
            created_at=now,
            updated_at=now,
        )
        db.session.add(record)
        self._commit()
        logger.info(f"Created {self.schema.entity_name} {record.id}")
        return self.serialize(record)

    def find(self, filters=None):
        """
        Documents matching equality ``filters``, in creation order.

        The discriminator key is matched on its indexed column; any other key
        is compared against the stored body.
        """
        filters = dict(filters or {})
        query = self.model.query
        discriminator = self.schema.discriminator
        if discriminator and discriminator in filters:
            query = query.filter_by(discriminator=filters.pop(discriminator))

        documents = [self.serialize(record) for record in query.order_by(self.model.pk).all()]
        if filters:
            documents = [
                document for document in documents
                if all(document.get(key) == value for key, value in filters.items())
            ]
        return documents

    def find_by_id(self, doc_id):
        record = self._get(doc_id)
        return self.serialize(record) if record else None

    def update_by_id(self, doc_id, patch):
        """
        Shallow-merge ``patch`` over the stored document and re-validate.

        Top-level keys in the patch replace the stored values whole; keys not
        in the patch keep their stored values.

        Returns:
            dict | None: The post-update document, or None if the id is unknown

        Raises:
            ValidationError: The merged document fails the schema
        """
        record = self._get(doc_id)
        if record is None:
            return None

        merged = dict(record.data or {})
        merged.update(patch or {})
        data = self._validate(merged)

        record.data = data
        record.discriminator = self._discriminator_of(data)
        record.updated_at = utcnow()
        self._commit()
        logger.info(f"Updated {self.schema.entity_name} {record.id}")
        return self.serialize(record)

    def delete_by_id(self, doc_id):
        """Remove a document. Returns the deleted document, or None if the id is unknown."""
        record = self._get(doc_id)
        if record is None:
            return None

        document = self.serialize(record)
        db.session.delete(record)
        self._commit()
        logger.info(f"Deleted {self.schema.entity_name} {document['_id']}")
        return document
