"""REST transport for the gym API."""
