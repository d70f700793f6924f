from flask import Blueprint

clients_bp = Blueprint('clients', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
