"""Swagger/OpenAPI specification for the application."""

def _secured(summary: str, tag: str, responses: dict, request_schema: str = None, parameters: list = None) -> dict:
    operation = {
        "tags": [tag],
        "summary": summary,
        "security": [{"bearerAuth": []}],
        "responses": responses
    }
    if request_schema:
        operation["requestBody"] = {
            "required": True,
            "content": {
                "application/json": {
                    "schema": {"$ref": f"#/components/schemas/{request_schema}"}
                }
            }
        }
    if parameters:
        operation["parameters"] = parameters
    return operation

def _response(description: str, schema: str = "Success") -> dict:
    return {
        "description": description,
        "content": {
            "application/json": {
                "schema": {"$ref": f"#/components/schemas/{schema}"}
            }
        }
    }

def _path_id(name: str) -> dict:
    return {"name": name, "in": "path", "required": True, "schema": {"type": "integer"}}

def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    location_stamp = {
        "type": "object",
        "nullable": True,
        "properties": {
            "latitude": {"type": "number"},
            "longitude": {"type": "number"},
            "accuracy": {"type": "number"},
            "distance_from_site": {"type": "number"},
            "ip_address": {"type": "string", "nullable": True},
            "has_photo": {"type": "boolean"}
        }
    }

    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Internship Attendance API",
            "description": "Location-based internship attendance with geofence, "
                           "accuracy and time-window checks and photo overrides",
            "version": "1.0.0"
        },
        "servers": [
            {"url": "http://127.0.0.1:5000/api", "description": "Development server"}
        ],
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT"
                }
            },
            "schemas": {
                "MarkAttendanceRequest": {
                    "type": "object",
                    "required": ["internship_id", "latitude", "longitude", "accuracy"],
                    "properties": {
                        "internship_id": {"type": "integer"},
                        "latitude": {"type": "number"},
                        "longitude": {"type": "number"},
                        "accuracy": {"type": "number", "description": "Reported GPS accuracy in meters"},
                        "image": {"type": "string", "description": "Base64 photo evidence"}
                    }
                },
                "AttendanceRecord": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer"},
                        "student_id": {"type": "integer"},
                        "internship_id": {"type": "integer"},
                        "attendance_date": {"type": "string", "format": "date"},
                        "check_in_time": {"type": "string", "format": "date-time", "nullable": True},
                        "check_out_time": {"type": "string", "format": "date-time", "nullable": True},
                        "check_in_location": location_stamp,
                        "check_out_location": location_stamp,
                        "status": {"type": "string", "enum": ["Present", "Rejected"]},
                        "is_suspicious": {"type": "boolean"},
                        "suspicious_reason": {"type": "string", "nullable": True}
                    }
                },
                "InternshipLocation": {
                    "type": "object",
                    "required": ["company_name", "address", "latitude", "longitude",
                                 "allowed_start_time", "allowed_end_time"],
                    "properties": {
                        "company_name": {"type": "string"},
                        "address": {"type": "string"},
                        "latitude": {"type": "number"},
                        "longitude": {"type": "number"},
                        "radius": {"type": "integer", "default": 200},
                        "allowed_start_time": {"type": "string", "example": "09:00"},
                        "allowed_end_time": {"type": "string", "example": "17:00"},
                        "is_active": {"type": "boolean"}
                    }
                },
                "AssignInternshipRequest": {
                    "type": "object",
                    "required": ["internship_id", "start_date", "end_date", "allowed_days", "students"],
                    "properties": {
                        "internship_id": {"type": "integer"},
                        "start_date": {"type": "string", "format": "date"},
                        "end_date": {"type": "string", "format": "date"},
                        "allowed_days": {"type": "array", "items": {"type": "string"}},
                        "students": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "User ids or admission numbers"
                        }
                    }
                },
                "UpdateAssignmentRequest": {
                    "type": "object",
                    "properties": {
                        "internship_id": {"type": "integer"},
                        "start_date": {"type": "string", "format": "date"},
                        "end_date": {"type": "string", "format": "date"},
                        "allowed_days": {"type": "array", "items": {"type": "string"}}
                    }
                },
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "message": {"type": "string"},
                        "status_code": {"type": "integer"},
                        "kind": {"type": "string"},
                        "requires_photo": {"type": "boolean"}
                    }
                },
                "Success": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean", "default": False},
                        "message": {"type": "string"},
                        "data": {"type": "object"}
                    }
                }
            }
        },
        "paths": {
            "/internship/attendance": {
                "post": _secured(
                    "Check in or check out of today's internship attendance",
                    "Internship Attendance",
                    {
                        "200": _response("CHECK_IN, CHECK_OUT or REJECTED with the record"),
                        "400": _response("Gate or lifecycle failure", "Error"),
                        "404": _response("Internship location not found", "Error")
                    },
                    request_schema="MarkAttendanceRequest"
                )
            },
            "/internship/status": {
                "get": _secured(
                    "Today's status: NOT_STARTED, CHECKED_IN, COMPLETED or UNKNOWN",
                    "Internship Attendance",
                    {"200": _response("Status with today's record")}
                )
            },
            "/internship/my-assignment": {
                "get": _secured(
                    "Current internship assignment",
                    "Internship Attendance",
                    {"200": _response("Assignment or null")}
                )
            },
            "/internship/locations": {
                "get": _secured(
                    "Active internship locations",
                    "Internship Attendance",
                    {"200": _response("Locations with geofence and time window")}
                )
            },
            "/admin/internships/": {
                "get": _secured(
                    "List active internship locations",
                    "Internship Management",
                    {"200": _response("Locations")}
                ),
                "post": _secured(
                    "Create internship location",
                    "Internship Management",
                    {"201": _response("Created"), "400": _response("Invalid payload", "Error")},
                    request_schema="InternshipLocation"
                )
            },
            "/admin/internships/{internship_id}": {
                "put": _secured(
                    "Update internship location",
                    "Internship Management",
                    {"200": _response("Updated"), "404": _response("Not found", "Error")},
                    request_schema="InternshipLocation",
                    parameters=[_path_id("internship_id")]
                )
            },
            "/admin/internships/assign": {
                "post": _secured(
                    "Assign an internship to students",
                    "Internship Management",
                    {"201": _response("Assigned"), "404": _response("No students found", "Error")},
                    request_schema="AssignInternshipRequest"
                )
            },
            "/admin/internships/{internship_id}/students": {
                "get": _secured(
                    "Students assigned to a location",
                    "Internship Management",
                    {"200": _response("Assigned students")},
                    parameters=[_path_id("internship_id")]
                )
            },
            "/admin/internships/assignments/{assignment_id}": {
                "put": _secured(
                    "Change an assignment's internship, dates or allowed days",
                    "Internship Management",
                    {"200": _response("Updated"), "400": _response("Invalid payload", "Error"), "404": _response("Not found", "Error")},
                    request_schema="UpdateAssignmentRequest",
                    parameters=[_path_id("assignment_id")]
                ),
                "delete": _secured(
                    "Remove an assignment",
                    "Internship Management",
                    {"200": _response("Removed"), "404": _response("Not found", "Error")},
                    parameters=[_path_id("assignment_id")]
                )
            },
            "/admin/internships/students/search": {
                "get": _secured(
                    "Find a student by admission number or name with their assignment",
                    "Internship Management",
                    {"200": _response("Student, assignment and alternatives"), "404": _response("Student not found", "Error")},
                    parameters=[{"name": "query", "in": "query", "required": True, "schema": {"type": "string"}}]
                )
            },
            "/admin/internships/report": {
                "get": _secured(
                    "Attendance report for a day",
                    "Internship Management",
                    {"200": _response("Marked records, then assigned students not marked yet")},
                    parameters=[
                        {"name": "date", "in": "query", "schema": {"type": "string", "format": "date"}},
                        {"name": "internship_id", "in": "query", "schema": {"type": "integer"}},
                        {"name": "suspicious", "in": "query", "schema": {"type": "boolean"}}
                    ]
                )
            }
        }
    }
