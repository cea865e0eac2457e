"""Production server startup script for the MedPrep API.

Entry point for running the Django application under Gunicorn in
containerised deployments.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the MedPrep API using Gunicorn.

    Bind address, worker count and timeout can be tuned with the
    ``PORT``, ``WEB_CONCURRENCY`` and ``GUNICORN_TIMEOUT`` environment
    variables. Uploads of personal statements go through this process, so
    the default timeout leaves room for a 10MB upload to Supabase Storage.
    """
    port = os.getenv("PORT", "5000")
    workers = os.getenv("WEB_CONCURRENCY", "3")
    timeout = os.getenv("GUNICORN_TIMEOUT", "120")

    sys.argv = [
        "gunicorn",
        "medprep_api.wsgi:application",
        "--bind",
        f"0.0.0.0:{port}",
        "--workers",
        workers,
        "--threads",
        "2",
        "--timeout",
        timeout,
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
