"""Attendance services."""
