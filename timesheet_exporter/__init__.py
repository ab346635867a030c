"""Timesheet Exporter - Clockify weekly timesheets to Excel"""
