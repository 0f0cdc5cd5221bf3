# backend/models/documents.py

from datetime import datetime
from .base import db


class DocumentMixin:
    """Columns shared by every document collection.

    The document body lives in ``data`` as JSON. ``discriminator`` mirrors the
    body's section/type value so list queries can filter on an indexed column.
    """

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(24), unique=True, index=True, nullable=False)
    discriminator = db.Column(db.String(32), index=True)
    data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<{type(self).__name__} id={self.id} discriminator={self.discriminator}>'


class CustomerDocument(DocumentMixin, db.Model):
    __tablename__ = 'customers'


class UnitDocument(DocumentMixin, db.Model):
    __tablename__ = 'units'


class CoLocationDocument(DocumentMixin, db.Model):
    __tablename__ = 'colocations'


# Collection name -> table model
COLLECTIONS = {
    'customers': CustomerDocument,
    'units': UnitDocument,
    'colocations': CoLocationDocument,
}
