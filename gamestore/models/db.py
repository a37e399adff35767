"""
SQLAlchemy ORM models for persistent storage.

Models mirror the domain classes but add database persistence.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Money columns: up to 99,999,999.99
MONEY = Numeric(10, 2, asdecimal=True)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class GameDB(Base):
    """A catalog entry. The name is the business key and is unique."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    price: Mapped[Decimal] = mapped_column(MONEY)
    category: Mapped[str] = mapped_column(String(100), index=True)
    age_rating: Mapped[int] = mapped_column(Integer, default=0)
    description: Mapped[str] = mapped_column(Text, default="")
    available: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<GameDB(id={self.id}, name={self.name}, price={self.price})>"


class CustomerDB(Base):
    """
    A store account.

    The version column enables optimistic locking: every UPDATE checks and
    bumps it, so two sessions debiting the same customer cannot both win.
    """

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    balance: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0.00"))
    age: Mapped[int] = mapped_column(Integer, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Games this customer owns, in acquisition order
    ownership: Mapped[list["GameOwnershipDB"]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="GameOwnershipDB.id",
    )
    cart_items: Mapped[list["CartItemDB"]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CartItemDB.id",
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<CustomerDB(id={self.id}, email={self.email})>"


class GameOwnershipDB(Base):
    """
    A game in a customer's library. Each game is owned at most once.

    The game's name, price, category and age rating are copied in when the
    entry is created. Deleting the game sets game_id to NULL and the copy
    keeps the entry in the library.
    """

    __tablename__ = "game_ownership"
    __table_args__ = (UniqueConstraint("customer_id", "game_id", name="uq_customer_game"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), index=True
    )
    game_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="SET NULL"), nullable=True, index=True
    )
    game_name: Mapped[str] = mapped_column(String(255))
    game_price: Mapped[Decimal] = mapped_column(MONEY)
    game_category: Mapped[str] = mapped_column(String(100))
    game_age_rating: Mapped[int] = mapped_column(Integer, default=0)
    acquired_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    customer: Mapped["CustomerDB"] = relationship(back_populates="ownership")
    game: Mapped["GameDB | None"] = relationship()

    def __repr__(self) -> str:
        return f"<GameOwnershipDB(customer={self.customer_id}, game={self.game_id})>"


class CartItemDB(Base):
    """A cart line. unit_price is the game price when the line was created."""

    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("customer_id", "game_id", name="uq_cart_customer_game"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), index=True
    )
    game_id: Mapped[int] = mapped_column(Integer, ForeignKey("games.id", ondelete="CASCADE"))
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    unit_price: Mapped[Decimal] = mapped_column(MONEY)

    customer: Mapped["CustomerDB"] = relationship(back_populates="cart_items")
    game: Mapped["GameDB"] = relationship()

    def __repr__(self) -> str:
        return f"<CartItemDB(customer={self.customer_id}, game={self.game_id}, qty={self.quantity})>"
