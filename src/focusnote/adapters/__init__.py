"""Storage adapters implementing the TaskStore and SessionStore ports."""
