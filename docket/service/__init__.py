"""Scheduling services: availability, booking and hearing events."""
