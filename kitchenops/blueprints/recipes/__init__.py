from flask import Blueprint

recipes_bp = Blueprint('recipes', __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402,F401
