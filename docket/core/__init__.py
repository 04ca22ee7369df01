"""Domain entities: courts, cases, hearings and time windows."""
