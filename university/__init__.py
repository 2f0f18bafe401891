import logging
import click
from flask import Flask, render_template
from .extensions import db, migrate, login_manager, csrf

def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)

def register_error_handlers(app):
    @app.errorhandler(403)
    def forbidden(e):
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def not_found(e):
        return render_template("errors/404.html"), 404

def register_commands(app):
    from .seed import seed_roles_and_admin

    @app.cli.command("seed")
    def seed_command():
        """Create the fixed roles and the default admin account."""
        admin = seed_roles_and_admin()
        click.echo(f"Roles ready; admin account: {admin.email}")

    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables, then seed."""
        db.create_all()
        admin = seed_roles_and_admin()
        click.echo(f"Database initialised; admin account: {admin.email}")

def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"

    from . import models
    from .models.user import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    from .blueprints.auth import bp as auth_bp
    from .blueprints.admin import bp as admin_bp
    from .blueprints.courses import bp as courses_bp
    from .blueprints.instructor import bp as instructor_bp
    from .blueprints.student import bp as student_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(courses_bp, url_prefix="/courses")
    app.register_blueprint(instructor_bp, url_prefix="/instructor")
    app.register_blueprint(student_bp, url_prefix="/student")

    from .blueprints.auth.routes import index
    app.add_url_rule("/", "index", index)

    register_error_handlers(app)
    register_commands(app)

    if app.config.get("SEED_ON_STARTUP"):
        from .seed import seed_roles_and_admin
        with app.app_context():
            db.create_all()
            seed_roles_and_admin()

    return app
