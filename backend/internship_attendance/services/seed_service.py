"""Database seeding service for demo data."""
from datetime import timedelta
from flask import current_app
from internship_attendance import db
from internship_attendance.models.user import User, UserRole
from internship_attendance.models.internship import InternshipAssignment, InternshipLocation

class SeedService:
    """Service to seed database with demo data."""

    @staticmethod
    def seed_all():
        """Seed all demo data."""
        location = SeedService.seed_locations()
        students = SeedService.seed_students()
        SeedService.seed_assignments(location, students)

    @staticmethod
    def seed_locations() -> InternshipLocation:
        """Seed a demo internship site."""
        location = InternshipLocation.query.filter_by(company_name='Demo Tech Park').first()
        if location:
            return location

        location = InternshipLocation(
            company_name='Demo Tech Park',
            address='Plot 12, HITEC City, Hyderabad',
            latitude=17.4474,
            longitude=78.3762,
            radius_meters=current_app.config['INTERNSHIP_DEFAULT_RADIUS_METERS'],
            allowed_start_time='09:00',
            allowed_end_time='18:00'
        )
        db.session.add(location)
        db.session.commit()
        print(f"Created internship location {location.company_name}")
        return location

    @staticmethod
    def seed_students() -> list:
        """Seed demo students."""
        students = []
        for index in range(1, 6):
            admission_number = f"22A91A05{index:02d}"
            student = User.query.filter_by(admission_number=admission_number).first()
            if not student:
                student = User(
                    email=f"{admission_number.lower()}@college.edu",
                    name=f"Demo Student {index}",
                    admission_number=admission_number,
                    role=UserRole.STUDENT
                )
                db.session.add(student)
            students.append(student)

        db.session.commit()
        print(f"Seeded {len(students)} students")
        return students

    @staticmethod
    def seed_assignments(location: InternshipLocation, students: list) -> None:
        """Assign every demo student to the demo site for the next month."""
        today = current_app.extensions['attendance_clock'].today()
        for student in students:
            if student.internship_assignments.filter_by(internship_id=location.id).first():
                continue
            db.session.add(InternshipAssignment(
                student_id=student.id,
                internship_id=location.id,
                start_date=today,
                end_date=today + timedelta(days=30),
                allowed_days=['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']
            ))

        db.session.commit()
        print(f"Assigned {len(students)} students to {location.company_name}")
