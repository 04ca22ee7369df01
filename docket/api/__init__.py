"""HTTP interface for availability and booking."""
