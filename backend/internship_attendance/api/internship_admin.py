"""Internship Management API - Admin Only."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required
from internship_attendance import db
from internship_attendance.models.attendance import InternshipAttendance
from internship_attendance.models.internship import InternshipAssignment, InternshipLocation
from internship_attendance.models.user import User, UserRole
from internship_attendance.utils.decorators import admin_required
from internship_attendance.utils.helpers import success_response, error_response
from internship_attendance.utils.validators import Validator

internship_admin_bp = Blueprint('internship_admin', __name__)

LOCATION_FIELDS = ['company_name', 'address', 'latitude', 'longitude',
                   'allowed_start_time', 'allowed_end_time']

def _parse_location(data: dict, partial: bool = False):
    """Validate a location payload; returns (values, errors)."""
    errors = []
    values = {}

    if not partial:
        required = Validator.validate_required_fields(data, LOCATION_FIELDS)
        if not required['is_valid']:
            return None, required['errors']

    for field in ('company_name', 'address'):
        if field in data:
            text = str(data[field] or '').strip()
            if not text:
                errors.append(f"{field.replace('_', ' ').capitalize()} cannot be empty")
            values[field] = text

    if 'latitude' in data or 'longitude' in data:
        reading = Validator.validate_location_reading(
            data.get('latitude'), data.get('longitude'), 0
        )
        errors.extend(reading['errors'])
        values['latitude'] = reading['latitude']
        values['longitude'] = reading['longitude']

    if data.get('radius') is not None:
        radius = Validator.coerce_int(data['radius'])
        if radius is None or radius < 0:
            errors.append("Radius must be a non-negative integer")
        values['radius_meters'] = radius
    elif not partial:
        values['radius_meters'] = current_app.config['INTERNSHIP_DEFAULT_RADIUS_METERS']

    for field in ('allowed_start_time', 'allowed_end_time'):
        if field in data:
            normalized = Validator.normalize_time_of_day(data[field])
            if normalized is None:
                errors.append(f"{field.replace('_', ' ').capitalize()} must be HH:MM")
            values[field] = normalized

    if 'is_active' in data:
        if isinstance(data['is_active'], bool):
            values['is_active'] = data['is_active']
        else:
            errors.append("Is active must be true or false")

    start = values.get('allowed_start_time')
    end = values.get('allowed_end_time')
    if start and end and start > end:
        errors.append("Allowed start time must not be after allowed end time")

    return values, errors

@internship_admin_bp.route('/', methods=['GET'])
@jwt_required()
@admin_required
def get_internships():
    """List active internship locations."""
    try:
        locations = InternshipLocation.query.filter_by(is_active=True).all()
        current_app.logger.info(f"Fetched {len(locations)} internship locations")
        return success_response(data=[location.to_dict() for location in locations])

    except Exception as e:
        current_app.logger.exception('Error fetching internships')
        return error_response(f"Error fetching internships: {str(e)}", 500)

@internship_admin_bp.route('/', methods=['POST'])
@jwt_required()
@admin_required
def create_internship():
    """Create an internship location."""
    data = request.get_json(silent=True) or {}
    values, errors = _parse_location(data)
    if errors:
        return error_response('; '.join(errors), 400)

    try:
        location = InternshipLocation(**values)
        location.save()
        current_app.logger.info(f"Internship location created with ID: {location.id}")

        return success_response(
            data=location.to_dict(),
            message='Internship location created successfully.',
            status_code=201
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception('Error creating internship')
        return error_response(f"Error creating internship: {str(e)}", 500)

@internship_admin_bp.route('/<int:internship_id>', methods=['PUT'])
@jwt_required()
@admin_required
def update_internship(internship_id):
    """Update an internship location."""
    location = db.session.get(InternshipLocation, internship_id)
    if location is None:
        return error_response('Internship location not found.', 404)

    data = request.get_json(silent=True) or {}
    values, errors = _parse_location(data, partial=True)
    if errors:
        return error_response('; '.join(errors), 400)

    start = values.get('allowed_start_time', location.allowed_start_time)
    end = values.get('allowed_end_time', location.allowed_end_time)
    if start > end:
        return error_response("Allowed start time must not be after allowed end time", 400)

    try:
        location.update(**values)
        return success_response(
            data=location.to_dict(),
            message='Internship location updated successfully.'
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception('Error updating internship location')
        return error_response(f"Error updating location: {str(e)}", 500)

@internship_admin_bp.route('/assign', methods=['POST'])
@jwt_required()
@admin_required
def assign_internship():
    """Assign an internship to students by id or admission number."""
    data = request.get_json(silent=True) or {}

    required = Validator.validate_required_fields(
        data, ['internship_id', 'start_date', 'end_date', 'allowed_days', 'students']
    )
    if not required['is_valid']:
        return error_response('; '.join(required['errors']), 400)

    internship_id = Validator.coerce_int(data['internship_id'])
    location = db.session.get(InternshipLocation, internship_id) if internship_id is not None else None
    if location is None:
        return error_response('Internship location not found.', 404)

    start_date = Validator.parse_date(data['start_date'])
    end_date = Validator.parse_date(data['end_date'])
    if start_date is None or end_date is None:
        return error_response('Dates must be YYYY-MM-DD', 400)
    if start_date > end_date:
        return error_response('Start date must not be after end date', 400)

    days = Validator.validate_allowed_days(data['allowed_days'])
    if not days['is_valid']:
        return error_response('; '.join(days['errors']), 400)

    identifiers = data['students']
    if not isinstance(identifiers, list):
        return error_response('Students must be a list', 400)

    ids = [Validator.coerce_int(value) for value in identifiers]
    ids = [value for value in ids if value is not None]
    admission_numbers = [str(value) for value in identifiers]
    students = User.query.filter(
        User.role == UserRole.STUDENT,
        User.is_active.is_(True),
        db.or_(User.id.in_(ids), User.admission_number.in_(admission_numbers))
    ).all()

    if not students:
        return error_response('No valid students found matching the selection.', 404)

    try:
        for student in students:
            db.session.add(InternshipAssignment(
                student_id=student.id,
                internship_id=location.id,
                start_date=start_date,
                end_date=end_date,
                allowed_days=data['allowed_days']
            ))
        db.session.commit()
        current_app.logger.info(
            f"Assigned internship {location.id} to {len(students)} students"
        )

        return success_response(
            data={'assigned': [student.id for student in students]},
            message=f"Successfully assigned internship to {len(students)} students.",
            status_code=201
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception('Error assigning internship')
        return error_response(f"Error assigning internship: {str(e)}", 500)

@internship_admin_bp.route('/<int:internship_id>/students', methods=['GET'])
@jwt_required()
@admin_required
def get_assigned_students(internship_id):
    """Students assigned to an internship location."""
    if db.session.get(InternshipLocation, internship_id) is None:
        return error_response('Internship location not found.', 404)

    rows = db.session.query(InternshipAssignment, User).join(
        User, InternshipAssignment.student_id == User.id
    ).filter(
        InternshipAssignment.internship_id == internship_id
    ).order_by(User.name.asc()).all()

    return success_response(data=[
        {
            'assignment_id': assignment.id,
            'student_id': student.id,
            'student_name': student.name,
            'admission_number': student.admission_number,
            'start_date': assignment.start_date.isoformat(),
            'end_date': assignment.end_date.isoformat(),
            'allowed_days': assignment.allowed_days
        }
        for assignment, student in rows
    ])

@internship_admin_bp.route('/assignments/<int:assignment_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def remove_assignment(assignment_id):
    """Remove a student's internship assignment."""
    assignment = db.session.get(InternshipAssignment, assignment_id)
    if assignment is None:
        return error_response('Assignment not found', 404)

    assignment.delete()
    return success_response(message='Assignment removed successfully')

@internship_admin_bp.route('/assignments/<int:assignment_id>', methods=['PUT'])
@jwt_required()
@admin_required
def update_assignment(assignment_id):
    """Change a student's internship, dates or allowed days."""
    assignment = db.session.get(InternshipAssignment, assignment_id)
    if assignment is None:
        return error_response('Assignment not found', 404)

    data = request.get_json(silent=True) or {}
    values = {}

    if 'internship_id' in data:
        internship_id = Validator.coerce_int(data['internship_id'])
        if internship_id is None or db.session.get(InternshipLocation, internship_id) is None:
            return error_response('Internship location not found.', 404)
        values['internship_id'] = internship_id

    for field in ('start_date', 'end_date'):
        if field in data:
            parsed = Validator.parse_date(data[field])
            if parsed is None:
                return error_response('Dates must be YYYY-MM-DD', 400)
            values[field] = parsed

    if values.get('start_date', assignment.start_date) > values.get('end_date', assignment.end_date):
        return error_response('Start date must not be after end date', 400)

    if 'allowed_days' in data:
        days = Validator.validate_allowed_days(data['allowed_days'])
        if not days['is_valid']:
            return error_response('; '.join(days['errors']), 400)
        values['allowed_days'] = data['allowed_days']

    try:
        assignment.update(**values)
        return success_response(
            data=assignment.to_dict(),
            message='Assignment updated successfully'
        )

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception('Error updating assignment')
        return error_response(f"Error updating assignment: {str(e)}", 500)

@internship_admin_bp.route('/students/search', methods=['GET'])
@jwt_required()
@admin_required
def find_student_assignment():
    """Look up a student by admission number or name with their assignment."""
    term = (request.args.get('query') or '').strip()
    if not term:
        return error_response('Query is required', 400)

    pattern = f"%{term}%"
    candidates = User.query.filter(
        User.role == UserRole.STUDENT,
        db.or_(User.admission_number.ilike(pattern), User.name.ilike(pattern))
    ).order_by(User.admission_number.asc()).limit(5).all()

    if not candidates:
        return error_response('Student not found', 404)

    student = next(
        (candidate for candidate in candidates if candidate.admission_number == term),
        candidates[0]
    )
    assignment = student.internship_assignments.order_by(
        InternshipAssignment.start_date.desc(),
        InternshipAssignment.id.desc()
    ).first()

    return success_response(data={
        'student': student.to_dict(),
        'assignment': assignment.to_dict() if assignment else None,
        'alternatives': [candidate.to_dict() for candidate in candidates] if len(candidates) > 1 else []
    })

def _unmarked_entry(assignment: InternshipAssignment, day) -> dict:
    student = assignment.student
    return {
        'id': None,
        'student_id': student.id,
        'internship_id': assignment.internship_id,
        'attendance_date': day.isoformat(),
        'check_in_time': None,
        'check_in_location': None,
        'check_out_time': None,
        'check_out_location': None,
        'status': 'Not Marked',
        'is_suspicious': False,
        'suspicious_reason': None,
        'student_name': student.name,
        'admission_number': student.admission_number,
        'company_name': assignment.internship.company_name
    }

@internship_admin_bp.route('/report', methods=['GET'])
@jwt_required()
@admin_required
def get_attendance_report():
    """Attendance for a day (default today).

    Marked records come first, suspicious ones on top, followed by every
    student whose assignment covers the day but who has not marked yet.
    """
    day = request.args.get('date')
    if day:
        day = Validator.parse_date(day)
        if day is None:
            return error_response('Date must be YYYY-MM-DD', 400)
    else:
        day = current_app.extensions['attendance_clock'].today()

    internship_id = request.args.get('internship_id', type=int)
    suspicious_only = request.args.get('suspicious') == 'true'

    query = InternshipAttendance.query.filter_by(attendance_date=day)
    if internship_id is not None:
        query = query.filter_by(internship_id=internship_id)
    if suspicious_only:
        query = query.filter_by(is_suspicious=True)

    records = query.order_by(
        InternshipAttendance.is_suspicious.desc(),
        InternshipAttendance.check_in_time.desc()
    ).all()

    report = []
    for record in records:
        entry = record.to_dict()
        entry['student_name'] = record.student.name
        entry['admission_number'] = record.student.admission_number
        entry['company_name'] = record.internship.company_name
        report.append(entry)

    if not suspicious_only:
        marked = {
            student_id for (student_id,) in db.session.query(InternshipAttendance.student_id)
            .filter(InternshipAttendance.attendance_date == day).distinct()
        }
        assignments = InternshipAssignment.query.join(
            User, InternshipAssignment.student_id == User.id
        ).filter(
            User.is_active.is_(True),
            InternshipAssignment.start_date <= day,
            InternshipAssignment.end_date >= day
        )
        if internship_id is not None:
            assignments = assignments.filter(InternshipAssignment.internship_id == internship_id)

        # Latest-starting assignment wins when several cover the day
        for assignment in assignments.order_by(
            InternshipAssignment.start_date.desc(),
            InternshipAssignment.id.desc()
        ).all():
            if assignment.student_id in marked:
                continue
            marked.add(assignment.student_id)
            report.append(_unmarked_entry(assignment, day))

    return success_response(data={'date': day.isoformat(), 'records': report})
