from sqlalchemy.orm import declared_attr
from ..extensions import db

class Person(db.Model):
    """Shared columns for students and instructors.

    Each concrete subclass gets its own table; ``user_id`` links the row to the
    login account and stays empty until the owner completes their profile.
    """
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False)

    @declared_attr
    def user_id(cls):
        return db.Column(db.Integer, db.ForeignKey("user.id"), unique=True, index=True)

    def full_name(self):
        return f"{self.first_name} {self.last_name}"

class Department(db.Model):
    __tablename__ = "department"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)

    instructors = db.relationship("Instructor", back_populates="department")
    courses = db.relationship("Course", back_populates="department")

class Student(Person):
    __tablename__ = "student"
    enrollment_date = db.Column(db.DateTime, nullable=False)

    user = db.relationship("User", backref=db.backref("student", uselist=False))
    enrollments = db.relationship(
        "Enrollment", back_populates="student", cascade="all, delete-orphan"
    )
    card = db.relationship(
        "StudentCard", back_populates="student", uselist=False,
        cascade="all, delete-orphan"
    )

class Instructor(Person):
    __tablename__ = "instructor"
    hire_date = db.Column(db.DateTime, nullable=False)
    department_id = db.Column(db.Integer, db.ForeignKey("department.id"), nullable=False)

    user = db.relationship("User", backref=db.backref("instructor", uselist=False))
    department = db.relationship("Department", back_populates="instructors")
    courses = db.relationship("Course", back_populates="instructor")
