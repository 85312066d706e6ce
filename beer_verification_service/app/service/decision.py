# Age based beer verification decision
import datetime

from .models import VerificationResult

LEGAL_DRINKING_AGE = 21

# Canned demo patrons. A real deployment would replace these with a lookup/policy call.
REJECTED_VERIFICATION = VerificationResult(
    name="sebastian vasquez",
    approved=False,
    beers_count=0,
    city="new york",
    date_of_birth=datetime.datetime(2011, 2, 15, 15, 15, 15, tzinfo=datetime.timezone.utc),
)

ACCEPTED_VERIFICATION = VerificationResult(
    name="santiago vasquez",
    approved=True,
    beers_count=7,
    city="medellin",
    date_of_birth=datetime.datetime(1975, 4, 1, 12, 0, 0, tzinfo=datetime.timezone.utc),
)


def decide(age: int) -> VerificationResult:
    """Returns the verification result for a patron of the given age. Total over all integers."""
    if age < LEGAL_DRINKING_AGE:
        return REJECTED_VERIFICATION.model_copy()
    return ACCEPTED_VERIFICATION.model_copy()
