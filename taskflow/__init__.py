"""Taskflow: task management REST API."""
