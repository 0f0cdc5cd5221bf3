# backend/routes/incubation.py
from flask import Blueprint
from services.record_store import RecordStore
from routes.resources import register_resource

incubation_bp = Blueprint('incubation', __name__)

# Incubation tenants live in the customers collection under their own section
register_resource(incubation_bp, RecordStore.for_kind('customer'), 'incubation', 'Customer',
                  discriminator_value='incubation')
