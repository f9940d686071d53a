"""Version 1 API package."""
