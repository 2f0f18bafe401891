from ..extensions import db
from .people import Person, Student, Instructor, Department
from .course import Course
from .enrollment import Enrollment
from .card import StudentCard
from .user import User, Role

__all__ = [
    "Person", "Student", "Instructor", "Department", "Course",
    "Enrollment", "StudentCard", "User", "Role",
]
