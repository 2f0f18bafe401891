import logging
from flask import current_app
from .extensions import db
from .models.user import User, Role, ALL_ROLES, ROLE_ADMIN

logger = logging.getLogger(__name__)

def seed_roles_and_admin(email=None, password=None):
    """Make sure the fixed roles and the default admin account exist.

    Safe to run on every startup: existing rows are left alone.
    """
    email = (email or current_app.config["ADMIN_EMAIL"]).strip().lower()
    password = password or current_app.config["ADMIN_PASSWORD"]

    roles = {r.name: r for r in Role.query.filter(Role.name.in_(ALL_ROLES)).all()}
    for name in ALL_ROLES:
        if name not in roles:
            roles[name] = Role(name=name)
            db.session.add(roles[name])
            logger.info("Created role %s", name)

    admin = User.query.filter_by(email=email).one_or_none()
    if admin is None:
        admin = User(email=email)
        admin.set_password(password)
        admin.roles.append(roles[ROLE_ADMIN])
        db.session.add(admin)
        logger.info("Provisioned admin account %s", email)

    db.session.commit()
    return admin
