"""Case-state authorization and case administration."""
