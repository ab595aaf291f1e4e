from __future__ import annotations

from functools import wraps

from flask import flash, redirect, render_template, session, url_for

from ..core.enums import UserType
from ..records.model import ANONYMOUS_VIEWER, ViewerContext, coerce_int
from .service import SessionUser


def store_session_user(s_user: SessionUser) -> None:
    session["user_id"] = s_user.user_id
    session["name"] = s_user.full_name
    session["user_type"] = int(s_user.user_type)
    session["grade"] = s_user.grade
    session["section"] = s_user.section


def viewer_from_session() -> ViewerContext:
    """Read the viewer context once per request; the core never touches the session."""

    if "user_id" not in session:
        return ANONYMOUS_VIEWER
    try:
        user_type = UserType(int(session.get("user_type")))
    except (TypeError, ValueError):
        user_type = None
    return ViewerContext(
        user_type=user_type,
        grade=coerce_int(session.get("grade")),
        section=session.get("section"),
        user_id=coerce_int(session.get("user_id")),
        full_name=session.get("name") or "",
    )


def render_forbidden():
    current_user = {"full_name": session.get("name"), "user_type": session.get("user_type")}
    return render_template("403.html", current_user=current_user), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("Please log in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return redirect(url_for("login"))

        if session.get("user_type") != int(UserType.ADMIN):
            return render_forbidden()

        return view(*args, **kwargs)

    return wrapper
