# backend/routes/projects.py
from flask import Blueprint
from services.record_store import RecordStore
from routes.resources import register_resource

projects_bp = Blueprint('projects', __name__)

# Co-Location customers; the wire name stays "projects"
register_resource(projects_bp, RecordStore.for_kind('colocation'), 'colocation', 'Co Location',
                  create_rule='/add', get_one=True)
