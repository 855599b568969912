from .home_routes import home_bp
from .catalog_routes import api_bp
from .cart_routes import cart_bp, session_bp, favorites_bp
from .order_routes import order_bp
from .auth_routes import auth_bp
from .driver_routes import driver_bp, delivery_bp
from .dashboard_routes import dashboard_bp, reports_bp
from .admin_routes import admin_bp

def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(session_bp)
    app.register_blueprint(favorites_bp)
    app.register_blueprint(order_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(driver_bp)
    app.register_blueprint(delivery_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(admin_bp)
