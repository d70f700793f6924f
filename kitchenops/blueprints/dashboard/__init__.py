from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
