from ..extensions import db

MIN_CREDITS = 1
MAX_CREDITS = 6

class Course(db.Model):
    __tablename__ = "course"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500))
    credits = db.Column(db.Integer, nullable=False)
    department_id = db.Column(db.Integer, db.ForeignKey("department.id"), nullable=False)
    instructor_id = db.Column(db.Integer, db.ForeignKey("instructor.id", ondelete="SET NULL"))
    __table_args__ = (
        db.CheckConstraint(f"credits >= {MIN_CREDITS} AND credits <= {MAX_CREDITS}",
                           name="ck_credits_1_6"),
    )

    department = db.relationship("Department", back_populates="courses")
    instructor = db.relationship("Instructor", back_populates="courses")
    enrollments = db.relationship("Enrollment", back_populates="course",
                                  cascade="all, delete-orphan")
