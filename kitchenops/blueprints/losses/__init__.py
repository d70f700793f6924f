from flask import Blueprint

losses_bp = Blueprint('losses', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
