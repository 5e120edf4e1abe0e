"""Demo login: maps an email to a dashboard role. Grants no access by itself."""

DEMO_ROLE_HINTS = (
    (("hod",), "HOD"),
    (("admin",), "Admin"),
    (("staff", "prof", "dr."), "Staff"),
    (("student",), "Student"),
)


def guess_role(email):
    lowered = email.lower()
    for hints, role in DEMO_ROLE_HINTS:
        if any(h in lowered for h in hints):
            return role
    return None


def resolve_role(store, email):
    """Stored role first, then the demo email hint; None when neither applies."""
    return store.get_user_role(email) or guess_role(email)
