from datetime import datetime
from decimal import Decimal, InvalidOperation
from flask import render_template, request, redirect, url_for, flash, abort, current_app
from flask_login import login_required, current_user
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from ...extensions import db
from ...models import Course, Department, Enrollment, Instructor, Student
from ...models.user import ROLE_INSTRUCTOR
from ..auth.routes import role_required
from . import bp

def get_current_instructor():
    return (Instructor.query.options(selectinload(Instructor.department))
            .filter_by(user_id=current_user.id).one_or_none())

def get_owned_course(ins, course_id, *options):
    """A course taught by ``ins``; anything else is a 404."""
    return (Course.query.options(*options)
            .filter_by(id=course_id, instructor_id=ins.id).first_or_404())

def parse_mark(raw):
    raw = (raw or "").strip()
    if raw == "":
        return None
    mark = Decimal(raw)
    if not mark.is_finite() or not (0 <= mark <= 100):
        raise ValueError("mark out of range")
    # stored as Numeric(5,2); a third decimal would be rounded away silently
    if mark != mark.quantize(Decimal("0.01")):
        raise ValueError("too many decimals")
    return mark

def is_enrolled(student_id, course_id):
    return db.session.get(Enrollment, (student_id, course_id)) is not None

def to_profile():
    return redirect(url_for("instructor.complete_profile"))

@bp.route("/complete-profile", methods=["GET", "POST"])
@login_required
@role_required(ROLE_INSTRUCTOR)
def complete_profile():
    if get_current_instructor() is not None:
        flash("Your profile is already complete")
        return redirect(url_for("instructor.dashboard"))

    departments = Department.query.order_by(Department.name).all()
    if request.method == "POST":
        first = (request.form.get("first_name") or "").strip()
        last = (request.form.get("last_name") or "").strip()
        dept_id = request.form.get("department_id", type=int)
        if not first or not last:
            flash("First and last name are required")
        elif len(first) > 100 or len(last) > 100:
            flash("Names must be at most 100 characters")
        elif not dept_id or not db.session.get(Department, dept_id):
            flash("Please choose a department")
        else:
            ins = Instructor(user_id=current_user.id, first_name=first, last_name=last,
                             email=current_user.email, hire_date=datetime.now(),
                             department_id=dept_id)
            db.session.add(ins)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                flash("Your profile is already complete")
                return redirect(url_for("instructor.dashboard"))
            current_app.logger.info("Instructor profile created for %s", current_user.email)
            return redirect(url_for("instructor.dashboard"))
        return render_template("instructor/complete_profile.html", departments=departments,
                               first_name=first, last_name=last, department_id=dept_id)
    return render_template("instructor/complete_profile.html", departments=departments)

@bp.get("/dashboard")
@login_required
@role_required(ROLE_INSTRUCTOR)
def dashboard():
    ins = get_current_instructor()
    if ins is None:
        return to_profile()
    courses = (Course.query.options(selectinload(Course.department),
                                    selectinload(Course.enrollments))
               .filter_by(instructor_id=ins.id).order_by(Course.title).all())
    return render_template("instructor/dashboard.html", instructor=ins, courses=courses,
                           course_count=len(courses),
                           total_students=sum(len(c.enrollments) for c in courses))

@bp.get("/courses")
@login_required
@role_required(ROLE_INSTRUCTOR)
def my_courses():
    ins = get_current_instructor()
    if ins is None:
        return to_profile()
    courses = (Course.query.options(selectinload(Course.department),
                                    selectinload(Course.enrollments))
               .filter_by(instructor_id=ins.id).order_by(Course.title).all())
    return render_template("instructor/my_courses.html", courses=courses)

@bp.get("/courses/<int:cid>")
@login_required
@role_required(ROLE_INSTRUCTOR)
def course_details(cid):
    ins = get_current_instructor()
    if ins is None:
        return to_profile()
    course = get_owned_course(ins, cid, selectinload(Course.department),
                              selectinload(Course.enrollments).selectinload(Enrollment.student))
    return render_template("instructor/course_details.html", course=course)

@bp.get("/courses/<int:cid>/students")
@login_required
@role_required(ROLE_INSTRUCTOR)
def course_students(cid):
    ins = get_current_instructor()
    if ins is None:
        return to_profile()
    course = get_owned_course(ins, cid,
                              selectinload(Course.enrollments).selectinload(Enrollment.student))
    return render_template("instructor/course_students.html", course=course)

@bp.post("/courses/<int:cid>/mark")
@login_required
@role_required(ROLE_INSTRUCTOR)
def update_mark(cid):
    ins = get_current_instructor()
    if ins is None:
        return to_profile()
    course = get_owned_course(ins, cid)
    student_id = request.form.get("student_id", type=int)
    en = db.session.get(Enrollment, (student_id, course.id)) if student_id else None
    if en is None:
        abort(404)

    try:
        mark = parse_mark(request.form.get("mark"))
    except (InvalidOperation, ValueError):
        flash("Mark must be a number between 0 and 100 with at most two decimals")
        return redirect(url_for("instructor.course_students", cid=cid))

    en.mark = mark
    db.session.commit()
    current_app.logger.info("Mark for student %s in course %s set to %s",
                            student_id, cid, mark)
    flash("Mark saved")
    return redirect(url_for("instructor.course_students", cid=cid))

@bp.route("/courses/<int:cid>/enroll", methods=["GET", "POST"])
@login_required
@role_required(ROLE_INSTRUCTOR)
def enroll_student(cid):
    ins = get_current_instructor()
    if ins is None:
        return to_profile()
    course = get_owned_course(ins, cid)

    if request.method == "POST":
        student_id = request.form.get("student_id", type=int)
        stu = db.session.get(Student, student_id) if student_id else None
        if stu is None:
            abort(404)
        if is_enrolled(stu.id, course.id):
            flash("Student is already enrolled")
            return redirect(url_for("instructor.course_students", cid=cid))

        db.session.add(Enrollment(student=stu, course=course, mark=None))
        try:
            db.session.commit()
            current_app.logger.info("Enrolled student %s in course %s", student_id, cid)
            flash("Student enrolled")
        except IntegrityError:
            db.session.rollback()
            flash("Student is already enrolled")
        return redirect(url_for("instructor.course_students", cid=cid))

    enrolled = select(Enrollment.student_id).where(Enrollment.course_id == course.id)
    available = (Student.query.filter(Student.id.not_in(enrolled))
                 .order_by(Student.email).all())
    return render_template("instructor/enroll_student.html", course=course, students=available)
