# backend/routes/datacom.py
from flask import Blueprint
from services.record_store import RecordStore
from routes.resources import register_resource

datacom_bp = Blueprint('datacom', __name__)

customer_store = RecordStore.for_kind('customer')

# RF and LAN customers share the customers collection, split by section
register_resource(datacom_bp, customer_store, 'rf', 'Customer', rule='/rf', discriminator_value='rf')
register_resource(datacom_bp, customer_store, 'lan', 'Customer', rule='/lan', discriminator_value='lan')
