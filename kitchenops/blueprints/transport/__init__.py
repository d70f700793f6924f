from flask import Blueprint

transport_bp = Blueprint('transport', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
