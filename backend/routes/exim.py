# backend/routes/exim.py
from flask import Blueprint
from services.record_store import RecordStore
from routes.resources import register_resource

exim_bp = Blueprint('exim', __name__)

unit_store = RecordStore.for_kind('unit')

register_resource(exim_bp, unit_store, 'stpi', 'Unit', rule='/stpi', discriminator_value='stpi')
register_resource(exim_bp, unit_store, 'non_stpi', 'Unit', rule='/non-stpi', discriminator_value='non-stpi')
