from flask import Blueprint, redirect, url_for

home_bp = Blueprint("home", __name__)

@home_bp.route("/")
def index():
    """Landing page is the open orders list."""
    return redirect(url_for("open_orders.index"))
