from flask import Blueprint

production_bp = Blueprint('production', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
