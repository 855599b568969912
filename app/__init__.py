import logging
from datetime import timedelta

from flask import Flask, request, session

from app.extensions import db, cors, migrate
from app.routes import register_routes
from app.utils.http import register_error_handlers
from app.services.cart_service import cart_totals


def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.permanent_session_lifetime = timedelta(minutes=app.config["SESSION_MINUTES"])

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database + migrations
    db.init_app(app)
    migrate.init_app(app, db)

    origins = app.config.get("CORS_ORIGINS", "*")
    cors.init_app(app,
                  origins=origins.split(",") if origins != "*" else "*",
                  supports_credentials=True,
                  allow_headers=["Content-Type", "Authorization"],
                  methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"])

    @app.before_request
    def trace_request():
        app.logger.debug("%s %s", request.method, request.full_path.rstrip("?"))
        session.permanent = True

    @app.context_processor
    def inject_cart():
        count, total = cart_totals(session.get("cart") or [])
        return {
            "cart_count": count,
            "cart_total": total,
            "GOOGLE_MAPS_API_KEY": app.config.get("GOOGLE_MAPS_API_KEY", ""),
            "user_role": session.get("user_role"),
        }

    register_routes(app)
    register_error_handlers(app)

    return app
