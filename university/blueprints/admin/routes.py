from flask import render_template, request, redirect, url_for, flash, current_app
from flask_login import login_required, current_user
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from ...extensions import db
from ...models import Department, Instructor, Student, Course
from ...models.user import User, Role, ROLE_ADMIN, ASSIGNABLE_ROLES
from ..auth.routes import role_required
from . import bp

@bp.get("/dashboard")
@login_required
@role_required(ROLE_ADMIN)
def dashboard():
    user_count = db.session.query(func.count(User.id)).scalar()
    role_count = db.session.query(func.count(Role.id)).scalar()
    return render_template("admin/dashboard.html",
                           user_count=user_count, role_count=role_count)

# ---------- Users ----------
@bp.get("/users")
@login_required
@role_required(ROLE_ADMIN)
def users():
    items = User.query.options(selectinload(User.roles)).order_by(User.email).all()
    return render_template("admin/users.html", items=items)

@bp.get("/users/<int:uid>")
@login_required
@role_required(ROLE_ADMIN)
def user_details(uid):
    u = db.get_or_404(User, uid)
    student = Student.query.filter_by(user_id=u.id).one_or_none()
    instructor = (Instructor.query.options(selectinload(Instructor.department))
                  .filter_by(user_id=u.id).one_or_none())
    return render_template("admin/user_details.html", user=u, roles=u.role_names,
                           student=student, instructor=instructor)

@bp.route("/users/<int:uid>/role", methods=["GET", "POST"])
@login_required
@role_required(ROLE_ADMIN)
def set_role(uid):
    u = db.get_or_404(User, uid)
    if request.method == "POST":
        if u.id == current_user.id:
            flash("You cannot change your own role.")
            return redirect(url_for("admin.users"))
        role = (request.form.get("role") or "").strip()
        if role and role not in ASSIGNABLE_ROLES:
            flash(f"Role {role} cannot be assigned here")
            return redirect(url_for("admin.set_role", uid=uid))
        # a user holds at most one of the assignable roles
        u.roles.clear()
        if role:
            u.roles.append(Role.query.filter_by(name=role).one())
        db.session.commit()
        current_app.logger.info("Admin %s set role of %s to %s",
                                current_user.email, u.email, role or "<none>")
        flash("Role updated")
        return redirect(url_for("admin.users"))
    return render_template("admin/set_role.html", user=u,
                           current_roles=u.role_names, roles=ASSIGNABLE_ROLES)

@bp.post("/users/<int:uid>/delete")
@login_required
@role_required(ROLE_ADMIN)
def delete_user(uid):
    u = db.get_or_404(User, uid)
    if u.id == current_user.id:
        flash("You cannot delete your own account.")
        return redirect(url_for("admin.users"))

    student = Student.query.filter_by(user_id=u.id).one_or_none()
    if student is not None:
        db.session.delete(student)
    instructor = Instructor.query.filter_by(user_id=u.id).one_or_none()
    if instructor is not None:
        db.session.delete(instructor)
    email = u.email
    db.session.flush()
    db.session.delete(u)
    db.session.commit()
    current_app.logger.info("Admin %s deleted user %s", current_user.email, email)
    flash("User deleted")
    return redirect(url_for("admin.users"))

# ---------- Departments ----------
@bp.get("/departments")
@login_required
@role_required(ROLE_ADMIN)
def departments():
    items = (Department.query
             .options(selectinload(Department.instructors), selectinload(Department.courses))
             .order_by(Department.name).all())
    return render_template("admin/departments.html", items=items)

@bp.post("/departments")
@login_required
@role_required(ROLE_ADMIN)
def create_department():
    name = (request.form.get("name") or "").strip()
    if not name:
        flash("Department name is required"); return redirect(url_for("admin.departments"))
    if len(name) > 100:
        flash("Department name must be at most 100 characters")
        return redirect(url_for("admin.departments"))
    db.session.add(Department(name=name))
    try:
        db.session.commit(); flash("Department created")
    except IntegrityError:
        db.session.rollback(); flash("Department name must be unique")
    return redirect(url_for("admin.departments"))

@bp.post("/departments/<int:did>/delete")
@login_required
@role_required(ROLE_ADMIN)
def delete_department(did):
    d = db.session.get(Department, did)
    if not d:
        flash("Department does not exist"); return redirect(url_for("admin.departments"))
    in_use = (Course.query.filter_by(department_id=d.id).count()
              + Instructor.query.filter_by(department_id=d.id).count())
    if in_use:
        flash("Department still has courses or instructors")
        return redirect(url_for("admin.departments"))
    name = d.name
    db.session.delete(d); db.session.commit(); flash("Department deleted")
    current_app.logger.info("Deleted department %s", name)
    return redirect(url_for("admin.departments"))
