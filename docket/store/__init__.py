"""In-memory stores: court directory, cases and booked hearings."""
