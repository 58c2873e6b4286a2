# rentalhub/db/models.py

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Text,
    ForeignKey,
    Boolean,
)
from sqlalchemy.orm import relationship

from rentalhub.core.clock import utcnow
from rentalhub.db.base import Base


class User(Base):
    """
    Accounts are owned by the auth service; this service only reads them
    to resolve the caller and to show renter names to admins.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(32), nullable=True)

    # DB column name: password_hash
    hashed_password = Column("password_hash", String(255), nullable=False)

    # "admin" | "host" | "customer"
    role = Column(String(20), nullable=False, default="customer")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    items = relationship("Item", back_populates="host")

    identities = relationship(
        "Identity",
        back_populates="user",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class Item(Base):
    """Rental catalog entry. Read-only here; hosts manage it elsewhere."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)

    host_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # smallest currency unit
    price_per_day = Column(Integer, nullable=False)
    deposit_per_unit = Column(Integer, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=1)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    host = relationship("User", back_populates="items")


class Identity(Base):
    __tablename__ = "identity"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    document_url = Column(String(1024), nullable=False)

    # verified == (status == "approved"), verified_at set only when approved
    verified = Column(Boolean, nullable=False, default=False)
    # "pending" | "approved" | "rejected"
    status = Column(String(20), nullable=False, default="pending", index=True)
    reason = Column(Text, nullable=True)
    verified_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="identities")


class Booking(Base):
    __tablename__ = "booking"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    host_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    identity_id = Column(
        Integer,
        ForeignKey("identity.id", ondelete="SET NULL"),
        nullable=True,
    )
    # denormalized copy of the renter's identity status
    identity_status = Column(String(20), nullable=True)

    status = Column(String(20), nullable=False, default="pending", index=True)
    locked_until = Column(DateTime, nullable=False)

    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    total_days = Column(Integer, nullable=False)
    # "pickup" | "delivery"
    delivery_type = Column(String(20), nullable=False)

    rental = Column(Integer, nullable=False)
    deposit = Column(Integer, nullable=False)
    discount = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False)
    outstanding = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    items = relationship(
        "BookingItem",
        back_populates="booking",
        cascade="all,delete-orphan",
        passive_deletes=True,
        order_by="BookingItem.id",
    )
    customer = relationship(
        "BookingCustomer",
        back_populates="booking",
        uselist=False,
        cascade="all,delete-orphan",
        passive_deletes=True,
    )
    # the record referenced at creation, not necessarily the renter's latest
    identity = relationship("Identity")


class BookingItem(Base):
    """Price snapshot of one cart line; never recomputed after creation."""

    __tablename__ = "booking_item"

    id = Column(Integer, primary_key=True, index=True)

    booking_id = Column(
        Integer,
        ForeignKey("booking.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_id = Column(
        Integer,
        ForeignKey("items.id"),
        nullable=False,
        index=True,
    )

    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    price_per_day = Column(Integer, nullable=False)
    deposit_per_unit = Column(Integer, nullable=False)
    subtotal_rental = Column(Integer, nullable=False)
    subtotal_deposit = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    booking = relationship("Booking", back_populates="items")


class BookingCustomer(Base):
    """Renter contact details as given at booking time."""

    __tablename__ = "booking_customer"

    id = Column(Integer, primary_key=True, index=True)

    booking_id = Column(
        Integer,
        ForeignKey("booking.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    email = Column(String(255), nullable=False)
    delivery_address = Column(String(512), nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    booking = relationship("Booking", back_populates="customer")
