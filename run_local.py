#!/usr/bin/env python
"""Script to run the MedPrep API development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the Django development server on the port the frontend expects.

    Uses the custom 'runlocal' command, which skips migration checks because
    the schema is owned by Supabase.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medprep_api.settings")
    port = os.getenv("PORT", "5000")
    execute_from_command_line([sys.argv[0], "runlocal", f"0.0.0.0:{port}"])


if __name__ == "__main__":
    main()
