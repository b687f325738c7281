from flask import Blueprint
from paypal_checkout.blueprints import register_blueprint

bp = Blueprint('payments', __name__)

from . import routes

register_blueprint(bp, url_prefix='/paypal')
