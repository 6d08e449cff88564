from flask import Blueprint

api_bp = Blueprint("api", __name__)

# Import route modules so they register with api_bp
from . import health
from . import auth
from . import users
from . import pages
from . import media
from . import posts
from . import categories
from . import comments
from . import newsletter
from . import admin
