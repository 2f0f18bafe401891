from datetime import datetime
from ..extensions import db

def add_years(moment, years):
    """Shift ``moment`` by whole calendar years; 29 Feb falls back to 28 Feb."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)

def make_card_number(student_id, issued_at):
    return f"STU-{issued_at:%Y%m%d}-{student_id:04d}"

class StudentCard(db.Model):
    __tablename__ = "student_card"
    # shared primary key with student
    student_id = db.Column(db.Integer, db.ForeignKey("student.id"), primary_key=True)
    card_number = db.Column(db.String(32), nullable=False)
    issue_date = db.Column(db.DateTime, nullable=False)
    expiry_date = db.Column(db.DateTime, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    student = db.relationship("Student", back_populates="card")

    @classmethod
    def issue(cls, student, now=None):
        """Build a fresh active card for ``student`` valid for one year."""
        issued_at = now or datetime.now()
        return cls(
            student=student,
            student_id=student.id,
            card_number=make_card_number(student.id, issued_at),
            issue_date=issued_at,
            expiry_date=add_years(issued_at, 1),
            is_active=True,
        )
