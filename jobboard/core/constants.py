from enum import Enum

JOB_CATEGORIES = (
    "Programming",
    "Data Science",
    "Designing",
    "Networking",
    "Management",
    "Marketing",
    "Cybersecurity",
)

JOB_LOCATIONS = (
    "Bangalore",
    "Washington",
    "Hyderabad",
    "Mumbai",
    "California",
    "Chennai",
    "New York",
)

JOB_LEVELS = (
    "Beginner level",
    "Intermediate level",
    "Senior level",
)


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    REVIEWED = "Reviewed"
    INTERVIEW = "Interview"


# Statuses a company may move a Pending application to. Nothing leaves these.
DECISION_STATUSES = frozenset(
    {
        ApplicationStatus.ACCEPTED.value,
        ApplicationStatus.REJECTED.value,
        ApplicationStatus.REVIEWED.value,
        ApplicationStatus.INTERVIEW.value,
    }
)
