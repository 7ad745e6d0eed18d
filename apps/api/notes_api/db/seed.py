"""Demo data: two free-plan tenants, each with an admin, a member and two notes.

Idempotent: existing tenants (by slug) and users (by email) are left as they
are, and notes are only added to a tenant that has none.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from notes_api.auth.passwords import DEFAULT_ROUNDS, hash_password
from notes_api.db.models import PLAN_FREE, ROLE_ADMIN, ROLE_MEMBER, Note, Tenant, User
from notes_api.db.repo_notes import NoteRepository
from notes_api.db.repo_tenants import TenantRepository
from notes_api.db.repo_users import UserRepository

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_TENANTS = [
    {
        "slug": "acme",
        "name": "Acme Corporation",
        "users": [
            ("admin@acme.test", ROLE_ADMIN, "Acme", "Admin"),
            ("user@acme.test", ROLE_MEMBER, "Acme", "User"),
        ],
        "notes": [
            ("Welcome to Acme Notes", "Shared notes for the Acme team."),
            ("Quarterly planning", "Draft goals for next quarter."),
        ],
    },
    {
        "slug": "globex",
        "name": "Globex Corporation",
        "users": [
            ("admin@globex.test", ROLE_ADMIN, "Globex", "Admin"),
            ("user@globex.test", ROLE_MEMBER, "Globex", "User"),
        ],
        "notes": [
            ("Welcome to Globex Notes", "Shared notes for the Globex team."),
            ("Product roadmap", "Features under consideration."),
        ],
    },
]


@dataclass
class SeedReport:
    tenants_created: int = 0
    users_created: int = 0
    notes_created: int = 0
    tenant_ids: dict[str, str] = field(default_factory=dict)


def seed_demo_data(
    db: Session,
    password: str = DEMO_PASSWORD,
    rounds: int = DEFAULT_ROUNDS,
) -> SeedReport:
    """Create the demo tenants, users and notes that do not exist yet.

    Args:
        db: Database session
        password: Password given to every new demo user
        rounds: bcrypt cost factor

    Returns:
        SeedReport with counts of created rows and slug -> tenant id
    """
    report = SeedReport()
    tenants = TenantRepository(db)
    users = UserRepository(db)
    notes = NoteRepository(db)
    password_hash = hash_password(password, rounds=rounds)

    for entry in DEMO_TENANTS:
        tenant = tenants.get_by_slug(entry["slug"])
        if tenant is None:
            tenant = tenants.create(
                Tenant(slug=entry["slug"], name=entry["name"], subscription_plan=PLAN_FREE)
            )
            report.tenants_created += 1
        report.tenant_ids[tenant.slug] = tenant.id

        author = None
        for email, role, first_name, last_name in entry["users"]:
            user = users.get_by_email(email)
            if user is None:
                user = users.create(
                    User(
                        tenant_id=tenant.id,
                        email=email,
                        password_hash=password_hash,
                        role=role,
                        first_name=first_name,
                        last_name=last_name,
                    )
                )
                report.users_created += 1
            if role == ROLE_ADMIN:
                author = user

        if notes.count_by_tenant(tenant.id) == 0 and author is not None:
            for title, content in entry["notes"]:
                db.add(Note(tenant_id=tenant.id, user_id=author.id, title=title, content=content))
                report.notes_created += 1
            db.commit()

    logger.info(
        "Demo data seeded",
        extra={
            "event": "seed.completed",
            "tenants_created": report.tenants_created,
            "users_created": report.users_created,
            "notes_created": report.notes_created,
        },
    )
    return report
