"""Custom decorators for authorization."""
from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt_identity
from internship_attendance import db
from internship_attendance.models.user import User, UserRole
from internship_attendance.utils.helpers import error_response
from internship_attendance.utils.validators import Validator

def _load_current_user():
    user_id = Validator.coerce_int(get_jwt_identity())
    if user_id is None:
        return None
    return db.session.get(User, user_id)

def admin_required(f):
    """Decorator to require admin role."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = _load_current_user()

        if not user or not user.is_active:
            return error_response("User not found", 404)

        if user.role != UserRole.ADMIN:
            return error_response("Admin access required", 403)

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function

def student_required(f):
    """Decorator to require student role."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = _load_current_user()

        if not user or not user.is_active:
            return error_response("User not found", 404)

        if user.role != UserRole.STUDENT:
            return error_response("Student access required", 403)

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function
