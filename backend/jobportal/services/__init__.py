from jobportal.services import applications, candidates, jobs, recruiters, users

__all__ = [
    "applications",
    "candidates",
    "jobs",
    "recruiters",
    "users",
]
