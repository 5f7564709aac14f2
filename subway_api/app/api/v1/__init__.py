"""Version 1 of the Subway Line API."""
