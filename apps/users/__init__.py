"""Users app package.

Defines the email-login user model used as ``AUTH_USER_MODEL`` and the
register/login/profile endpoints that hand an authenticated identity to
the rental domain.
"""
