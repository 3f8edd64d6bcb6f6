"""Auth module - Registration and login."""
