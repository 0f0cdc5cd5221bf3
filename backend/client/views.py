# backend/client/views.py
"""
Page-level data views.

A ``DataView`` holds the list for one resource tab and walks the page
states:

    idle -> loading -> loaded | error
    loaded -> form-open | detail-open -> loaded

The list is a read-through cache. Every successful create, update or
delete re-reads it from the server instead of patching the local copy.
"""

import logging

from client.api import ApiError
from client.forms import FormDraft
from services.departments import get_department

logger = logging.getLogger(__name__)

IDLE = 'idle'
LOADING = 'loading'
LOADED = 'loaded'
ERROR = 'error'
FORM_OPEN = 'form-open'
DETAIL_OPEN = 'detail-open'


class InvalidTransition(RuntimeError):
    """The requested action is not available in the view's current state."""


class Notifier:
    """Collects user-facing notifications (the toast area) and logs them."""

    def __init__(self):
        self.messages = []

    def notify(self, title, description, variant='default'):
        message = {'title': title, 'description': description, 'variant': variant}
        self.messages.append(message)
        if variant == 'destructive':
            logger.error(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")
        return message

    def success(self, description):
        return self.notify('Success', description)

    def error(self, description):
        return self.notify('Error', description, variant='destructive')

    @property
    def last(self):
        return self.messages[-1] if self.messages else None


class DataView:
    """List, detail and form state for one resource."""

    def __init__(self, resource, notifier=None):
        self.resource = resource
        self.notifier = notifier or Notifier()
        self.state = IDLE
        self.items = []
        self.draft = None
        self.editing_id = None
        self.viewing = None

    def __repr__(self):
        return f'<DataView {self.resource.name} state={self.state} items={len(self.items)}>'

    def _require(self, *states):
        if self.state not in states:
            raise InvalidTransition(f"Cannot do that while the view is {self.state}")

    def _find(self, doc_id):
        for item in self.items:
            if item.get('_id') == doc_id:
                return item
        raise KeyError(f"No {self.resource.name} record with id {doc_id}")

    # --- list ---

    def load(self):
        """Fetch the list. On failure the last-known list is kept."""
        self.state = LOADING
        try:
            self.items = self.resource.list() or []
        except ApiError as e:
            self.state = ERROR
            self.notifier.error(f"Failed to fetch {self.resource.label or self.resource.name}: {e.message}")
            return self.items
        self.state = LOADED
        return self.items

    # --- dialogs ---

    def open_create(self):
        self._require(LOADED)
        self.draft = FormDraft(self.resource.kind)
        self.editing_id = None
        self.state = FORM_OPEN
        return self.draft

    def open_edit(self, doc_id):
        self._require(LOADED)
        document = self._find(doc_id)
        self.draft = FormDraft(self.resource.kind, seed=document)
        self.editing_id = doc_id
        self.state = FORM_OPEN
        return self.draft

    def open_detail(self, doc_id):
        self._require(LOADED)
        self.viewing = self._find(doc_id)
        self.state = DETAIL_OPEN
        return self.viewing

    def close(self):
        self._require(FORM_OPEN, DETAIL_OPEN)
        self.draft = None
        self.editing_id = None
        self.viewing = None
        self.state = LOADED

    # --- mutations ---

    def submit(self):
        """
        Send the open draft through create or update.

        Returns the saved document, or None when the call failed; on failure
        the form stays open so the user can correct and resubmit.
        """
        self._require(FORM_OPEN)
        editing_id = self.editing_id
        try:
            if editing_id:
                saved = self.draft.submit(lambda payload: self.resource.update(editing_id, payload))
            else:
                saved = self.draft.submit(self.resource.create)
        except ApiError as e:
            self.notifier.error(e.message)
            return None

        self.notifier.success('Record updated successfully' if editing_id else 'Record added successfully')
        self.close()
        self.load()
        return saved

    def delete(self, doc_id, confirm):
        """
        Delete a record after ``confirm(document)`` returns True.

        Returns True when the record was deleted.
        """
        self._require(LOADED)
        document = self._find(doc_id)
        if not confirm(document):
            return False

        try:
            self.resource.delete(doc_id)
        except ApiError as e:
            self.notifier.error(e.message)
            return False

        self.notifier.success('Record deleted successfully')
        self.load()
        return True


def department_views(api, department_key, notifier=None):
    """One DataView per resource tab of a department, sharing a notifier."""
    department = get_department(department_key)
    notifier = notifier or Notifier()
    return {
        name: DataView(api.resource(name), notifier=notifier)
        for name in department['resources']
    }
