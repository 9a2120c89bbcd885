from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Money columns: two decimal places, returned as Decimal
Money = Numeric(10, 2, asdecimal=True)


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String, primary_key=True)  # stable slug, e.g. "margherita"
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)  # 'pizza', 'pasta', 'desserts', etc.
    description = Column(Text, nullable=True)
    price = Column(Money, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    cart_items = relationship("CartItem", back_populates="menu_item", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_menu_items_price_non_negative"),
    )


class CartItem(Base):
    """One cart line. Owned by a signed-in user or, for guests, a session id."""
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=True, index=True)
    session_id = Column(String, nullable=True, index=True)
    menu_item_id = Column(String, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    menu_item = relationship("MenuItem", back_populates="cart_items")

    __table_args__ = (
        UniqueConstraint("user_id", "menu_item_id", name="uix_cart_user_item"),
        UniqueConstraint("session_id", "menu_item_id", name="uix_cart_session_item"),
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, nullable=False, index=True)
    user_id = Column(Integer, nullable=True, index=True)  # NULL for guest checkout

    # Delivery contact
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    zip_code = Column(String, nullable=False)
    delivery_notes = Column(Text, nullable=True)

    subtotal = Column(Money, nullable=False)
    delivery_fee = Column(Money, nullable=False)
    tax = Column(Money, nullable=False)
    total = Column(Money, nullable=False)

    payment_method = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending", index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    payments = relationship(
        "Payment",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Payment.id",
    )

    # Composite index for common query pattern: filtering by status and sorting by date
    __table_args__ = (
        Index("ix_orders_status_created_at", "status", "created_at"),
    )


class OrderItem(Base):
    """A line of an order. Name and price are copied from the menu at checkout."""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # No FK: historical orders must survive menu item removal
    menu_item_id = Column(String, nullable=False)

    name = Column(String, nullable=False)
    price = Column(Money, nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Money, nullable=False)

    order = relationship("Order", back_populates="items")


class Payment(Base):
    """
    A payment attempt against an order.

    payment_status: 'pending' (collected on delivery), 'success', 'failed', 'refunded'
    """
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Money, nullable=False)
    payment_method = Column(String, nullable=False)
    payment_status = Column(String, nullable=False, default="pending")
    transaction_id = Column(String, unique=True, nullable=False, index=True)
    card_last4 = Column(String(4), nullable=True)

    payment_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    order = relationship("Order", back_populates="payments")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payments_amount_non_negative"),
    )
