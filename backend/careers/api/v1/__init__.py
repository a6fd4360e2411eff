from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import companies
from . import pages
from . import jobs
from . import media
from . import audit
from . import public
