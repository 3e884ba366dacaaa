"""Route modules for the web app."""
