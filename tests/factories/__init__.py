"""Row builders for tests, filled with Faker data."""

from faker import Faker

from core.models import (
    Booking,
    NewJoiner,
    PersonalStatement,
    Resource,
    Subscription,
    Tutor,
    User,
)

fake = Faker("en_GB")


def make_subscription(**overrides) -> Subscription:
    """Create an active, opted-in subscription."""
    values = {
        "email": fake.unique.email(),
        "subscription_tier": "free",
        "opt_in_newsletter": True,
    }
    values.update(overrides)
    return Subscription.objects.create(**values)


def make_user(**overrides) -> User:
    """Create a student user."""
    values = {
        "email": fake.unique.email(),
        "full_name": fake.name(),
        "role": "student",
    }
    values.update(overrides)
    return User.objects.create(**values)


def make_booking(**overrides) -> Booking:
    """Create an interview package booking."""
    values = {
        "email": fake.unique.email(),
        "package": "interview_prep",
        "status": "confirmed",
    }
    values.update(overrides)
    return Booking.objects.create(**values)


def make_tutor(**overrides) -> Tutor:
    """Create a tutor."""
    values = {
        "name": fake.name(),
        "email": fake.unique.email(),
        "subjects": ["Biology"],
        "role": "tutor",
    }
    values.update(overrides)
    return Tutor.objects.create(**values)


def new_joiner_payload(**overrides) -> dict:
    """Complete tutor application body."""
    payload = {
        "full_name": fake.name(),
        "email": fake.unique.email(),
        "phone_number": "07700 900123",
        "alevel_subjects_grades": "Biology A*, Chemistry A*, Maths A",
        "university_year": "Year 3",
        "med_dent_grades": "First",
        "ucat": "3100",
        "med_school_offers": "Imperial, UCL",
        "subjects_can_tutor": ["UCAT", "Interview"],
        "tutoring_experience": "Two years of GCSE tutoring",
        "why_tutor": "To help applicants from state schools",
        "availability": ["weekday_evenings", "weekends"],
    }
    payload.update(overrides)
    return payload


def make_new_joiner(**overrides) -> NewJoiner:
    """Create a stored tutor application."""
    return NewJoiner.objects.create(**new_joiner_payload(**overrides))


def make_personal_statement(**overrides) -> PersonalStatement:
    """Create a paid, pending personal statement."""
    values = {
        "email": fake.unique.email(),
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "statement_type": "medicine",
        "personal_statement_file_path": "statements/student_1700000000000.pdf",
        "stripe_session_id": f"cs_test_{fake.unique.pyint(min_value=1000)}",
    }
    values.update(overrides)
    return PersonalStatement.objects.create(**values)


def make_resource(**overrides) -> Resource:
    """Create an active resource open to the free tier."""
    values = {
        "name": fake.sentence(nb_words=3),
        "file_path": f"guides/{fake.unique.slug()}.pdf",
        "allowed_tiers": ["free"],
    }
    values.update(overrides)
    return Resource.objects.create(**values)
