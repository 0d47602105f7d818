"""Users app package.

Hosts are the only accounts of the platform. A host signs in with a
4-digit access code and sees only the bookings of their own place.
Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
