from university.extensions import db
from university.models.user import Role, User
from university.seed import seed_roles_and_admin

from conftest import ADMIN_EMAIL


def test_seed_creates_roles_and_admin(app):
    with app.app_context():
        assert sorted(r.name for r in Role.query.all()) == ["Admin", "Instructor", "Student"]
        admin = User.query.filter_by(email=ADMIN_EMAIL).one()
        assert admin.role_names == ["Admin"]
        assert admin.check_password("Admin@123")


def test_seed_is_idempotent(app):
    with app.app_context():
        seed_roles_and_admin()
        seed_roles_and_admin()
        assert Role.query.count() == 3
        assert User.query.count() == 1


def test_seed_leaves_existing_admin_password_alone(app):
    with app.app_context():
        seed_roles_and_admin(password="something-else")
        assert User.query.filter_by(email=ADMIN_EMAIL).one().check_password("Admin@123")


def test_seed_command(app):
    with app.app_context():
        db.session.delete(User.query.filter_by(email=ADMIN_EMAIL).one())
        db.session.commit()
    result = app.test_cli_runner().invoke(args=["seed"])
    assert result.exit_code == 0
    assert ADMIN_EMAIL in result.output
    with app.app_context():
        assert User.query.filter_by(email=ADMIN_EMAIL).count() == 1
