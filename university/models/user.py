from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from ..extensions import db

ROLE_ADMIN = "Admin"
ROLE_INSTRUCTOR = "Instructor"
ROLE_STUDENT = "Student"
ALL_ROLES = (ROLE_ADMIN, ROLE_INSTRUCTOR, ROLE_STUDENT)
# roles an admin may hand out from the user screen
ASSIGNABLE_ROLES = (ROLE_STUDENT, ROLE_INSTRUCTOR)

user_roles = db.Table(
    "user_roles",
    db.Column("user_id", db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    db.Column("role_id", db.Integer, db.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
)

class Role(db.Model):
    __tablename__ = "role"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), unique=True, nullable=False)

    def __repr__(self):
        return f"<Role {self.name}>"

class User(UserMixin, db.Model):
    __tablename__ = "user"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    roles = db.relationship("Role", secondary=user_roles, lazy="selectin",
                            order_by="Role.name")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def role_names(self):
        return [r.name for r in self.roles]

    def has_role(self, *names):
        return any(r.name in names for r in self.roles)

    def __repr__(self):
        return f"<User {self.email}>"
