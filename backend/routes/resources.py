# backend/routes/resources.py
"""
Shared CRUD handlers for the document resources.

``register_resource`` attaches list / create / update / delete (and
optionally get-one) views for one record store to a blueprint. When the
store's schema has a discriminator, every list is filtered by the route's
fixed value and every create or update stamps that value over whatever the
client sent.
"""

from flask import request, jsonify
from models import db
from services.record_store import ValidationError
import logging

logger = logging.getLogger(__name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return dict(data)


def _body_error():
    return jsonify({'error': 'Request body must be a JSON object'}), 400


def register_resource(bp, store, name, entity_label, rule='', discriminator_value=None,
                      create_rule=None, get_one=False):
    """
    Register the CRUD views for ``store`` on ``bp``.

    Args:
        bp (Blueprint): Blueprint to attach the views to
        store (RecordStore): Store backing the resource
        name (str): Endpoint name prefix, unique within the blueprint
        entity_label (str): Name used in not-found and delete messages
        rule (str): Collection rule relative to the blueprint prefix
        discriminator_value (str, optional): Fixed section/type for this route
        create_rule (str, optional): Rule for POST when it differs from ``rule``
        get_one (bool): Also register GET on the item rule
    """
    discriminator = store.schema.discriminator
    item_rule = f'{rule}/<doc_id>'
    not_found_message = f'{entity_label} not found'

    def stamp(body):
        # the route decides the discriminator, never the client
        if discriminator:
            body[discriminator] = discriminator_value
        return body

    def list_documents():
        """List documents for this route"""
        try:
            filters = {discriminator: discriminator_value} if discriminator else None
            return jsonify(store.find(filters))
        except Exception as e:
            logger.error(f"Error listing {name}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    def get_document(doc_id):
        """Get a single document"""
        try:
            document = store.find_by_id(doc_id)
            if document is None:
                return jsonify({'error': not_found_message}), 404
            return jsonify(document)
        except Exception as e:
            logger.error(f"Error retrieving {name} {doc_id}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    def create_document():
        """Create a document"""
        body = _json_body()
        if body is None:
            return _body_error()
        try:
            document = store.create(stamp(body))
            return jsonify(document), 201
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {name}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    def update_document(doc_id):
        """Update a document by id"""
        body = _json_body()
        if body is None:
            return _body_error()
        try:
            document = store.update_by_id(doc_id, stamp(body))
            if document is None:
                return jsonify({'error': not_found_message}), 404
            return jsonify(document)
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error updating {name} {doc_id}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    def delete_document(doc_id):
        """Delete a document by id"""
        try:
            document = store.delete_by_id(doc_id)
            if document is None:
                return jsonify({'error': not_found_message}), 404
            return jsonify({'message': f'{entity_label} deleted successfully'})
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error deleting {name} {doc_id}: {str(e)}")
            return jsonify({'error': str(e)}), 500

    bp.add_url_rule(rule, endpoint=f'{name}_list', view_func=list_documents, methods=['GET'])
    bp.add_url_rule(rule if create_rule is None else create_rule,
                    endpoint=f'{name}_create', view_func=create_document, methods=['POST'])
    if get_one:
        bp.add_url_rule(item_rule, endpoint=f'{name}_get', view_func=get_document, methods=['GET'])
    bp.add_url_rule(item_rule, endpoint=f'{name}_update', view_func=update_document, methods=['PUT'])
    bp.add_url_rule(item_rule, endpoint=f'{name}_delete', view_func=delete_document, methods=['DELETE'])
