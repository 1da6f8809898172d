from flask import Blueprint
from sitecms.middleware.tenant_middleware import tenant_middleware

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)
tenant_middleware(v1_bp)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import content
from . import requests
from . import site
