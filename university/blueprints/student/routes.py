from datetime import datetime
from flask import render_template, request, redirect, url_for, flash, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from ...extensions import db
from ...grading import calculate_gpa, graded, total_credits
from ...models import Course, Enrollment, Student, StudentCard
from ...models.user import ROLE_STUDENT
from ..auth.routes import role_required
from . import bp

def get_current_student(with_courses=False):
    q = Student.query.options(selectinload(Student.card))
    if with_courses:
        q = q.options(
            selectinload(Student.enrollments).selectinload(Enrollment.course)
            .selectinload(Course.department),
            selectinload(Student.enrollments).selectinload(Enrollment.course)
            .selectinload(Course.instructor),
        )
    return q.filter_by(user_id=current_user.id).one_or_none()

def to_profile():
    return redirect(url_for("student.complete_profile"))

@bp.route("/complete-profile", methods=["GET", "POST"])
@login_required
@role_required(ROLE_STUDENT)
def complete_profile():
    if get_current_student() is not None:
        flash("Your profile is already complete")
        return redirect(url_for("student.my_courses"))

    if request.method == "POST":
        first = (request.form.get("first_name") or "").strip()
        last = (request.form.get("last_name") or "").strip()
        if not first or not last:
            flash("First and last name are required")
        elif len(first) > 100 or len(last) > 100:
            flash("Names must be at most 100 characters")
        else:
            stu = Student(user_id=current_user.id, first_name=first, last_name=last,
                          email=current_user.email, enrollment_date=datetime.now())
            db.session.add(stu)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                flash("Your profile is already complete")
                return redirect(url_for("student.my_courses"))
            current_app.logger.info("Student profile created for %s", current_user.email)
            return redirect(url_for("student.my_courses"))
        return render_template("student/complete_profile.html", first_name=first, last_name=last)
    return render_template("student/complete_profile.html")

@bp.get("/courses")
@login_required
@role_required(ROLE_STUDENT)
def my_courses():
    stu = get_current_student(with_courses=True)
    if stu is None:
        return to_profile()
    return render_template("student/my_courses.html", student=stu,
                           enrollments=stu.enrollments, gpa=calculate_gpa(stu.enrollments))

@bp.get("/gpa")
@login_required
@role_required(ROLE_STUDENT)
def my_gpa():
    stu = get_current_student(with_courses=True)
    if stu is None:
        return to_profile()
    rows = graded(stu.enrollments)
    return render_template("student/my_gpa.html", student=stu, enrollments=rows,
                           gpa=calculate_gpa(stu.enrollments),
                           total_credits=total_credits(rows),
                           completed_courses=len(rows))

# ---------- ID card ----------
@bp.get("/card")
@login_required
@role_required(ROLE_STUDENT)
def my_card():
    stu = get_current_student()
    if stu is None:
        return to_profile()
    if stu.card is None:
        return redirect(url_for("student.create_card"))
    return render_template("student/my_card.html", student=stu, card=stu.card)

@bp.route("/card/create", methods=["GET", "POST"])
@login_required
@role_required(ROLE_STUDENT)
def create_card():
    stu = get_current_student()
    if stu is None:
        return to_profile()
    # a card is issued once; later attempts just show it
    if stu.card is not None:
        return redirect(url_for("student.my_card"))

    if request.method == "POST":
        card = StudentCard.issue(stu)
        db.session.add(card)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash("A card has already been issued")
            return redirect(url_for("student.my_card"))
        current_app.logger.info("Issued card %s to student %s", card.card_number, stu.id)
        flash("Card issued")
        return redirect(url_for("student.my_card"))
    return render_template("student/create_card.html", student=stu)

@bp.route("/card/edit", methods=["GET", "POST"])
@login_required
@role_required(ROLE_STUDENT)
def edit_card():
    stu = get_current_student()
    if stu is None:
        return to_profile()
    if stu.card is None:
        return redirect(url_for("student.create_card"))

    if request.method == "POST":
        stu.card.is_active = request.form.get("is_active") in ("on", "true", "1")
        db.session.commit()
        current_app.logger.info("Card of student %s active=%s", stu.id, stu.card.is_active)
        flash("Card updated")
        return redirect(url_for("student.my_card"))
    return render_template("student/edit_card.html", student=stu, card=stu.card)
