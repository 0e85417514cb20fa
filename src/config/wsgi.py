"""WSGI entry point.

Builds the application first, then fires the initial database connection
attempt on a background thread.  Traffic is served whether or not that
attempt has finished (or succeeded).
"""

import os

from django.core.wsgi import get_wsgi_application

from modules.core.apps import get_gateway

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()

get_gateway().start()
