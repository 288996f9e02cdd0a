import enum
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.types import DateTime, TypeDecorator

db = SQLAlchemy()


def utcnow():
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp stored and returned in UTC.

    SQLite keeps no offset, so values read back without one are UTC.
    """

    impl = DateTime
    cache_ok = True

    def __init__(self):
        super().__init__(timezone=True)

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class RoastType(enum.Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    DARK = "dark"
    EXTRA_DARK = "extra_dark"


class UserRole(enum.Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class OrderStatus(enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(UserRole, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=UserRole.CUSTOMER,
    )
    created_at = db.Column(UTCDateTime(), nullable=False, default=utcnow)

    cart_items = db.relationship("CartItem", back_populates="user", lazy="dynamic")
    orders = db.relationship("Order", back_populates="user", lazy="dynamic")

    def __repr__(self):
        return f"<User {self.email}>"


class CoffeeProduct(db.Model):
    __tablename__ = "coffee_products"
    __table_args__ = (
        db.CheckConstraint("price > 0", name="ck_coffee_products_price_positive"),
        db.CheckConstraint("stock_quantity >= 0", name="ck_coffee_products_stock_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    image_url = db.Column(db.Text)
    origin = db.Column(db.String(255), nullable=False)
    roast_type = db.Column(
        db.Enum(RoastType, name="roast_type", values_callable=_enum_values),
        nullable=False,
    )
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at = db.Column(UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<CoffeeProduct {self.name}>"


class CartItem(db.Model):
    __tablename__ = "cart_items"
    __table_args__ = (
        db.UniqueConstraint("user_id", "product_id", name="uq_cart_items_user_product"),
        db.CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("coffee_products.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    created_at = db.Column(UTCDateTime(), nullable=False, default=utcnow)

    user = db.relationship("User", back_populates="cart_items")
    product = db.relationship("CoffeeProduct", lazy="joined")


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(
        db.Enum(OrderStatus, name="order_status", values_callable=_enum_values),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    created_at = db.Column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at = db.Column(UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow)

    user = db.relationship("User", back_populates="orders", lazy="joined")
    items = db.relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        order_by="OrderItem.id",
    )


class OrderItem(db.Model):
    __tablename__ = "order_items"
    __table_args__ = (
        db.CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("coffee_products.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    price_at_time = db.Column(db.Numeric(10, 2), nullable=False)
    created_at = db.Column(UTCDateTime(), nullable=False, default=utcnow)

    order = db.relationship("Order", back_populates="items")
    product = db.relationship("CoffeeProduct", lazy="joined")
