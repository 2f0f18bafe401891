from flask import render_template, request, redirect, url_for, flash, abort, current_app
from flask_login import login_required
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError
from ...extensions import db
from ...models import Course, Department, Instructor
from ...models.course import MIN_CREDITS, MAX_CREDITS
from ...models.user import ROLE_ADMIN
from ..auth.routes import role_required
from . import bp

def read_course_form(form):
    """Pull course fields out of a submitted form; returns (values, errors)."""
    values = {
        "title": (form.get("title") or "").strip(),
        "description": (form.get("description") or "").strip() or None,
        "credits": form.get("credits", type=int),
        "department_id": form.get("department_id", type=int),
        "instructor_id": form.get("instructor_id", type=int),
    }
    errors = []
    if not values["title"]:
        errors.append("Title is required")
    elif len(values["title"]) > 100:
        errors.append("Title must be at most 100 characters")
    if values["description"] and len(values["description"]) > 500:
        errors.append("Description must be at most 500 characters")
    if values["credits"] is None or not (MIN_CREDITS <= values["credits"] <= MAX_CREDITS):
        errors.append(f"Credits must be between {MIN_CREDITS} and {MAX_CREDITS}")
    if not values["department_id"] or not db.session.get(Department, values["department_id"]):
        errors.append("Department is required")
    if values["instructor_id"] and not db.session.get(Instructor, values["instructor_id"]):
        errors.append("Instructor does not exist")
    return values, errors

def render_form(course, values=None, errors=()):
    for e in errors:
        flash(e)
    return render_template(
        "courses/form.html", course=course, values=values or {},
        departments=Department.query.order_by(Department.name).all(),
        instructors=Instructor.query.order_by(Instructor.email).all(),
    )

def course_exists(cid):
    return db.session.query(Course.id).filter_by(id=cid).first() is not None

def load_course(cid):
    return (Course.query
            .options(selectinload(Course.department), selectinload(Course.instructor))
            .filter_by(id=cid).first_or_404())

@bp.get("/")
@login_required
@role_required(ROLE_ADMIN)
def index():
    items = (Course.query
             .options(selectinload(Course.department), selectinload(Course.instructor))
             .order_by(Course.title).all())
    return render_template("courses/index.html", items=items, total=len(items))

@bp.get("/<int:cid>")
@login_required
@role_required(ROLE_ADMIN)
def details(cid):
    return render_template("courses/details.html", course=load_course(cid))

@bp.route("/create", methods=["GET", "POST"])
@login_required
@role_required(ROLE_ADMIN)
def create():
    if request.method == "POST":
        values, errors = read_course_form(request.form)
        if errors:
            return render_form(None, values, errors)
        c = Course(**values)
        db.session.add(c)
        db.session.commit()
        current_app.logger.info("Created course %s (%s)", c.id, c.title)
        flash("Course created")
        return redirect(url_for("courses.index"))
    return render_form(None)

@bp.route("/<int:cid>/edit", methods=["GET", "POST"])
@login_required
@role_required(ROLE_ADMIN)
def edit(cid):
    c = db.get_or_404(Course, cid)
    if request.method == "POST":
        values, errors = read_course_form(request.form)
        if errors:
            return render_form(c, values, errors)
        for key, val in values.items():
            setattr(c, key, val)
        try:
            db.session.commit()
        except StaleDataError:
            # the row went away between load and save
            db.session.rollback()
            if not course_exists(cid):
                abort(404)
            raise
        current_app.logger.info("Updated course %s", cid)
        flash("Course updated")
        return redirect(url_for("courses.index"))
    return render_form(c)

@bp.route("/<int:cid>/delete", methods=["GET", "POST"])
@login_required
@role_required(ROLE_ADMIN)
def delete(cid):
    if request.method == "POST":
        c = db.session.get(Course, cid)
        if c is not None:
            db.session.delete(c)
            db.session.commit()
            current_app.logger.info("Deleted course %s", cid)
            flash("Course deleted")
        return redirect(url_for("courses.index"))
    return render_template("courses/delete.html", course=load_course(cid))
