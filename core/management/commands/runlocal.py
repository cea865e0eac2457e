"""Development server command that does not touch the migration graph.

Every table this API reads is owned by Supabase, so ``runserver``'s
migration check would only fail or warn about unapplied contrib migrations.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """``runserver`` without the unapplied-migrations check."""

    help = "Start the MedPrep API development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Report that the Supabase schema is not checked."""
        self.stdout.write(
            self.style.WARNING(
                "Skipping migration checks (schema is managed in Supabase)"
            )
        )
