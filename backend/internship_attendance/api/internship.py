"""Internship attendance API - Students."""
from flask import Blueprint, current_app, g, request
from flask_jwt_extended import jwt_required
from internship_attendance import db, limiter
from internship_attendance.models.internship import InternshipLocation
from internship_attendance.services.internship_service import InternshipAttendanceService
from internship_attendance.services.results import AttendanceError, TodayStatus
from internship_attendance.utils.decorators import student_required
from internship_attendance.utils.helpers import success_response, error_response

internship_bp = Blueprint('internship', __name__)

@internship_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Internship attendance service is running')

@internship_bp.route('/attendance', methods=['POST'])
@limiter.limit("30 per hour")
@jwt_required()
@student_required
def mark_attendance():
    """Check in, check out or be rejected for today's internship attendance."""
    data = request.get_json(silent=True) or {}
    student = g.current_user

    current_app.logger.info(
        f"Student {student.id} marking attendance for internship {data.get('internship_id')}"
    )

    try:
        service = InternshipAttendanceService.from_app()
        result = service.mark_attendance(
            student_id=student.id,
            internship_id=data.get('internship_id'),
            latitude=data.get('latitude'),
            longitude=data.get('longitude'),
            accuracy=data.get('accuracy'),
            photo=data.get('image'),
            ip_address=request.remote_addr
        )
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Error marking attendance')
        return error_response('Server error while marking attendance.', 500)

    if isinstance(result, AttendanceError):
        extra = {'kind': result.kind.code}
        if result.requires_photo:
            extra['requires_photo'] = True
        return error_response(result.message, result.kind.status_code, **extra)

    return success_response(
        data={
            'type': result.type.value,
            'record': result.record.to_dict()
        },
        message=result.message
    )

@internship_bp.route('/status', methods=['GET'])
@jwt_required()
@student_required
def get_today_status():
    """Today's attendance status for the current student."""
    try:
        service = InternshipAttendanceService.from_app()
        report = service.get_today_status(g.current_user.id)
    except Exception:
        current_app.logger.exception('Error getting student status')
        return error_response('Error fetching status', 500)

    if report.status is TodayStatus.NOT_STARTED or report.record is None:
        return success_response(data={'status': report.status.value})

    record = report.record.to_dict()
    location = report.record.internship
    record['internship'] = {
        'company_name': location.company_name,
        'address': location.address
    }
    return success_response(data={'status': report.status.value, 'record': record})

@internship_bp.route('/my-assignment', methods=['GET'])
@jwt_required()
@student_required
def get_my_assignment():
    """Current internship assignment for the student, if any."""
    try:
        service = InternshipAttendanceService.from_app()
        assignment = service.get_current_assignment(g.current_user.id)
    except Exception:
        current_app.logger.exception('Error fetching my assignment')
        return error_response('Server error', 500)

    return success_response(
        data={'assignment': assignment.to_dict() if assignment else None}
    )

@internship_bp.route('/locations', methods=['GET'])
@jwt_required()
@student_required
def get_locations():
    """Active internship sites with their geofence and time window."""
    locations = InternshipLocation.query.filter_by(is_active=True).order_by(
        InternshipLocation.company_name.asc()
    ).all()
    return success_response(data=[
        location.to_dict(exclude=['created_at', 'updated_at']) for location in locations
    ])
