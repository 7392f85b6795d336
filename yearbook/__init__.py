"""College yearbook and social-memory API."""
