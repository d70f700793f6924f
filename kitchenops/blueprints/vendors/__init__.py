from flask import Blueprint

vendors_bp = Blueprint('vendors', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
