"""
profile_service tests

Covers the backend of the profile service:

- Bearer-token authenticator and token issuing (`auth.py`)
- The `protect` dependency and its 401 responses (`middleware.py`)
- Registration, login and profile routes (`routes/users.py`)
- Health endpoints and configuration
"""
