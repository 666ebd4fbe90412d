"""TaskNest - account verification and workspace invitation backend.

Registration with emailed one-time codes, promotion into accounts with a
default workspace, and team invitations with membership grants.
"""

__version__ = "0.1.0"
