"""Shared fixtures.

Setup helpers open their own application context and hand back plain ids, so
that requests made through the test client never share a context (and the
Flask-Login user cached on ``g``) with the test body.
"""
from datetime import datetime
from decimal import Decimal

import pytest

from university import create_app
from university.extensions import db
from university.models import Course, Department, Enrollment, Instructor, Student, StudentCard
from university.models.user import Role, User
from university.seed import seed_roles_and_admin

PASSWORD = "secret123"
ADMIN_EMAIL = "admin@xyz.edu.jo"
ADMIN_PASSWORD = "Admin@123"


class Factory:
    """Creates rows directly in the database for a test."""

    def __init__(self, app):
        self.app = app

    def user(self, email, role=None, password=PASSWORD):
        with self.app.app_context():
            u = User(email=email)
            u.set_password(password)
            if role:
                u.roles.append(Role.query.filter_by(name=role).one())
            db.session.add(u)
            db.session.commit()
            return u.id

    def department(self, name="Computer Science"):
        with self.app.app_context():
            d = Department(name=name)
            db.session.add(d)
            db.session.commit()
            return d.id

    def instructor(self, user_id, department_id, first="Ada", last="Lovelace"):
        with self.app.app_context():
            u = db.session.get(User, user_id)
            i = Instructor(user_id=user_id, first_name=first, last_name=last, email=u.email,
                           hire_date=datetime(2020, 9, 1), department_id=department_id)
            db.session.add(i)
            db.session.commit()
            return i.id

    def student(self, user_id=None, first="Sam", last="Student", email=None):
        with self.app.app_context():
            if user_id is not None:
                email = db.session.get(User, user_id).email
            s = Student(user_id=user_id, first_name=first, last_name=last,
                        email=email or f"{first.lower()}@example.edu",
                        enrollment_date=datetime(2023, 9, 1))
            db.session.add(s)
            db.session.commit()
            return s.id

    def course(self, department_id, title="Databases", credits=3, instructor_id=None):
        with self.app.app_context():
            c = Course(title=title, credits=credits, department_id=department_id,
                       instructor_id=instructor_id)
            db.session.add(c)
            db.session.commit()
            return c.id

    def enrollment(self, student_id, course_id, mark=None):
        with self.app.app_context():
            db.session.add(Enrollment(student=db.session.get(Student, student_id),
                                      course=db.session.get(Course, course_id),
                                      mark=Decimal(str(mark)) if mark is not None else None))
            db.session.commit()

    def card(self, student_id):
        with self.app.app_context():
            card = StudentCard.issue(db.session.get(Student, student_id))
            db.session.add(card)
            db.session.commit()


@pytest.fixture
def app():
    app = create_app("config.TestConfig")
    with app.app_context():
        db.create_all()
        seed_roles_and_admin()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def factory(app):
    return Factory(app)


@pytest.fixture
def login(client):
    def do_login(email, password=PASSWORD):
        return client.post("/auth/login", data={"email": email, "password": password})
    return do_login


@pytest.fixture
def admin_client(client, login):
    login(ADMIN_EMAIL, ADMIN_PASSWORD)
    return client
