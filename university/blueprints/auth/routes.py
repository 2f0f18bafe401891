import re
from functools import wraps
from flask import render_template, request, redirect, url_for, flash, abort, current_app
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import IntegrityError
from ...extensions import db
from ...models.user import User, ROLE_ADMIN, ROLE_INSTRUCTOR, ROLE_STUDENT
from . import bp

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD = 6

def role_required(*roles):
    def deco(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated or not current_user.has_role(*roles):
                abort(403)
            return f(*args, **kwargs)
        return wrapper
    return deco

def role_home_url(user):
    if user.has_role(ROLE_ADMIN):
        return url_for("admin.dashboard")
    if user.has_role(ROLE_INSTRUCTOR):
        return url_for("instructor.dashboard")
    if user.has_role(ROLE_STUDENT):
        return url_for("student.my_courses")
    return url_for("auth.home")

def index():
    if not current_user.is_authenticated:
        return redirect(url_for("auth.login"))
    return redirect(role_home_url(current_user))

@bp.get("/home")
@login_required
def home():
    # accounts land here until an admin gives them a role
    return render_template("home.html", user=current_user)

@bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        password = request.form.get("password", "")
        u = User.query.filter_by(email=email).one_or_none()
        if u and u.check_password(password):
            login_user(u)
            current_app.logger.info("User %s logged in", u.email)
            return redirect(role_home_url(u))
        flash("Incorrect email or password")
    return render_template("auth/login.html")

@bp.get("/logout")
@login_required
def logout():
    logout_user()
    return redirect(url_for("auth.login"))

@bp.route("/register", methods=["GET", "POST"])
def register():
    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        password = request.form.get("password", "")
        confirm = request.form.get("confirm_password", "")
        if not EMAIL_RE.match(email):
            flash("A valid email address is required")
        elif len(password) < MIN_PASSWORD:
            flash(f"Password must be at least {MIN_PASSWORD} characters")
        elif password != confirm:
            flash("Passwords do not match")
        elif User.query.filter_by(email=email).first():
            flash("Email already registered")
        else:
            u = User(email=email)
            u.set_password(password)
            db.session.add(u)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                flash("Email already registered")
                return render_template("auth/register.html", email=email)
            current_app.logger.info("Registered account %s", email)
            flash("Registration successful. Please log in.")
            return redirect(url_for("auth.login"))
        return render_template("auth/register.html", email=email)
    return render_template("auth/register.html")

@bp.route("/account", methods=["GET", "POST"])
@login_required
def account():
    u = current_user
    if request.method == "POST":
        old = request.form.get("old_password", "")
        new = request.form.get("new_password", "")
        confirm = request.form.get("confirm_password", "")
        if not u.check_password(old):
            flash("Current password is incorrect")
        elif len(new) < MIN_PASSWORD:
            flash(f"New password must be at least {MIN_PASSWORD} characters")
        elif new != confirm:
            flash("Passwords do not match")
        else:
            u.set_password(new)
            db.session.commit()
            flash("Password updated")
            return redirect(url_for("auth.account"))
    return render_template("auth/account.html", user=u)
