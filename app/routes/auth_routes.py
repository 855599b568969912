from flask import Blueprint
from app.controllers.auth_controller import (
    login_page_handler,
    login_submit_handler,
    logout_handler,
    api_login_handler,
)

auth_bp = Blueprint("auth", __name__)

@auth_bp.get("/login")
def login_page():
    return login_page_handler()

@auth_bp.post("/login")
def login_submit():
    return login_submit_handler()

@auth_bp.get("/logout")
def logout():
    return logout_handler()

@auth_bp.post("/api/auth/login")
def api_login():
    return api_login_handler()
