"""Services: storage access behind the routes."""
