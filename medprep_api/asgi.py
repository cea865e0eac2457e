"""ASGI config for the NextGen MedPrep API."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medprep_api.settings")

application = get_asgi_application()
