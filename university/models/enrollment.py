from ..extensions import db

class Enrollment(db.Model):
    __tablename__ = "enrollment"
    # composite key: one row per (student, course)
    student_id = db.Column(db.Integer, db.ForeignKey("student.id"), primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("course.id"), primary_key=True)
    mark = db.Column(db.Numeric(5, 2))
    __table_args__ = (
        db.CheckConstraint("mark IS NULL OR (mark >= 0 AND mark <= 100)", name="ck_mark_0_100"),
    )

    student = db.relationship("Student", back_populates="enrollments")
    course = db.relationship("Course", back_populates="enrollments")
