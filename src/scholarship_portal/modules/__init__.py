"""Feature modules: users, auth, schemes, applications."""
