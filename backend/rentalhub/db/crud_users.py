# rentalhub/db/crud_users.py

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.core.security import get_password_hash
from rentalhub.db.models import Item, User


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    role: str = "customer",
) -> User:
    """
    Create an account with a hashed password. Development seeding only;
    real accounts come from the auth service.
    """
    user = User(
        name=name,
        email=email,
        phone=phone,
        hashed_password=get_password_hash(password),
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_item_by_host_and_name(db: AsyncSession, host_id: int, name: str) -> Optional[Item]:
    res = await db.execute(select(Item).where(Item.host_id == host_id, Item.name == name))
    return res.scalars().first()


async def create_item(db: AsyncSession, **kwargs) -> Item:
    item = Item(**kwargs)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item
