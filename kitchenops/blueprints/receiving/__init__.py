from flask import Blueprint

receiving_bp = Blueprint('receiving', __name__)
discrepancies_bp = Blueprint('discrepancies', __name__)

# Import routes to register them with the blueprints
from . import routes  # noqa: E402,F401
