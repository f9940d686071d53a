"""Seed demo users and properties and print an access token for each user."""

import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import select

from rentdesk.auth.jwt import create_access_token
from rentdesk.core.config import get_config
from rentdesk.database.db import get_db_session, get_engine
from rentdesk.models import Base, Property, User, UserRole

DEMO_USERS = [
    ("mgr_mira", "Mira Patel", "mira@example.com", UserRole.MANAGER),
    ("owner_oscar", "Oscar Lind", "oscar@example.com", UserRole.OWNER),
    ("tenant_tara", "Tara Osei", "tara@example.com", UserRole.TENANT),
    ("tenant_uma", "Uma Reyes", "uma@example.com", UserRole.TENANT),
]

DEMO_PROPERTIES = [
    ("Riverside", "12 Mill Lane", Decimal("1450.00")),
    ("Old Town", "3 Chapel Street", Decimal("980.00")),
]


def seed():
    config = get_config()
    Base.metadata.create_all(bind=get_engine())
    with get_db_session() as db:
        try:
            existing = db.scalar(select(User).where(User.username == DEMO_USERS[0][0]))
            if existing:
                print("Seed users already exist.")
            else:
                print("Seeding demo users and properties...")
                users = [
                    User(username=username, full_name=name, email=email, role=role)
                    for username, name, email, role in DEMO_USERS
                ]
                db.add_all(users)
                db.flush()
                owner = next(user for user in users if user.role is UserRole.OWNER)
                db.add_all(
                    Property(owner_id=owner.id, locality=locality, address=address, rent=rent)
                    for locality, address, rent in DEMO_PROPERTIES
                )
                db.commit()

            for user in db.scalars(select(User).order_by(User.id)):
                token = create_access_token(
                    user_id=user.id,
                    role=user.role.value,
                    secret=config.JWT_SECRET,
                    ttl_minutes=config.JWT_ACCESS_TTL_MINUTES,
                )
                print(f"{user.role.value:<8} {user.username:<12} id={user.id} token={token}")
            for prop in db.scalars(select(Property).order_by(Property.id)):
                print(f"property id={prop.id} {prop.label} rent={prop.rent}")
        except Exception as e:
            print(f"Error seeding data: {e}")
            db.rollback()


if __name__ == "__main__":
    seed()
