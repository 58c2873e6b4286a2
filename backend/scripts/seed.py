# scripts/seed.py
# Demo data for local development: one admin, two hosts with catalog items,
# two customers. Prints a bearer token per account.
import asyncio

from rentalhub.core.security import create_access_token
from rentalhub.db.base import Base
from rentalhub.db.session import AsyncSessionLocal, engine
from rentalhub.db import models  # noqa: F401
from rentalhub.db.crud_users import (
    create_item,
    create_user,
    get_item_by_host_and_name,
    get_user_by_email,
)

CATALOG = [
    # name, price_per_day, deposit_per_unit
    ("Camera DSLR", 100_000, 500_000),
    ("Tripod", 25_000, 50_000),
    ("Camping Tent 4p", 60_000, 200_000),
    ("Sleeping Bag", 15_000, 0),
]


async def _account(db, name, email, role):
    user = await get_user_by_email(db, email)
    if not user:
        user = await create_user(
            db, name=name, email=email, password='password', phone='081234567890', role=role
        )
    return user


async def seed_catalog(db, hosts):
    """Spread CATALOG over hosts round-robin; items a host already has are skipped."""
    created = []
    for i, (name, per_day, deposit) in enumerate(CATALOG):
        host = hosts[i % len(hosts)]
        if await get_item_by_host_and_name(db, host.id, name):
            continue
        created.append(
            await create_item(
                db,
                host_id=host.id,
                name=name,
                price_per_day=per_day,
                deposit_per_unit=deposit,
                stock=3,
            )
        )
    return created


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        accounts = [await _account(db, 'Admin', 'admin@example.com', 'admin')]

        hosts = []
        for i in range(2):
            hosts.append(await _account(db, f'Host {i}', f'host{i}@example.com', 'host'))
        accounts.extend(hosts)

        for i in range(2):
            accounts.append(await _account(db, f'Customer {i}', f'customer{i}@example.com', 'customer'))

        await seed_catalog(db, hosts)

        for user in accounts:
            token = create_access_token({"user_id": user.id, "role": user.role})
            print(f'{user.role:<9} {user.email:<24} {token}')
        print('Seed complete')

if __name__ == '__main__':
    asyncio.run(seed())
