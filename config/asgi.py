"""ASGI config for the turf booking project.

Booking requests are synchronous units of work; under ASGI Django runs the
views in a thread pool, so each request still owns one database
connection and one transaction at a time.
"""

import os
from django.core.asgi import get_asgi_application  # type: ignore

# Use the development settings by default. Production servers should set
# DJANGO_SETTINGS_MODULE accordingly.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
