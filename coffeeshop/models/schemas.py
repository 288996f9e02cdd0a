"""marshmallow schemas for request bodies and response views."""

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate

from coffeeshop.models.database import OrderStatus, RoastType, UserRole


def _money(**kwargs):
    return fields.Decimal(places=2, as_string=False, **kwargs)


def _not_blank(value):
    if not value.strip():
        raise ValidationError("Must not be blank.")


def _text(max_length=None, **kwargs):
    return fields.String(validate=[validate.Length(min=1, max=max_length), _not_blank], **kwargs)


# Requests

class CreateProductSchema(Schema):
    """Product fields; load with ``partial=True`` for updates."""

    name = _text(255, required=True)
    description = _text(required=True)
    price = _money(required=True, validate=validate.Range(min=0, min_inclusive=False))
    image_url = fields.Url(load_default=None, allow_none=True)
    origin = _text(255, required=True)
    roast_type = fields.Enum(RoastType, by_value=True, required=True)
    stock_quantity = fields.Integer(required=True, strict=True, validate=validate.Range(min=0))


class CreateUserSchema(Schema):
    email = fields.Email(required=True)
    name = _text(255, required=True)
    role = fields.Enum(UserRole, by_value=True, load_default=UserRole.CUSTOMER)


class AddToCartSchema(Schema):
    user_id = fields.Integer(required=True, strict=True)
    product_id = fields.Integer(required=True, strict=True)
    quantity = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))


class UpdateCartItemSchema(Schema):
    quantity = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))


class CreateOrderSchema(Schema):
    user_id = fields.Integer(required=True, strict=True)


class UpdateOrderStatusSchema(Schema):
    status = fields.Enum(OrderStatus, by_value=True, required=True)


class UserFilterArgsSchema(Schema):
    """Query string with an optional owner filter."""

    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(load_default=None)


class CartArgsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(required=True)


# Responses

class CoffeeProductSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    description = fields.String()
    price = _money()
    image_url = fields.String(allow_none=True)
    origin = fields.String()
    roast_type = fields.Enum(RoastType, by_value=True)
    stock_quantity = fields.Integer()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class UserSchema(Schema):
    id = fields.Integer()
    email = fields.String()
    name = fields.String()
    role = fields.Enum(UserRole, by_value=True)
    created_at = fields.DateTime()


class CartItemSchema(Schema):
    id = fields.Integer()
    user_id = fields.Integer()
    product_id = fields.Integer()
    quantity = fields.Integer()
    created_at = fields.DateTime()


class CartItemWithProductSchema(CartItemSchema):
    product = fields.Nested(CoffeeProductSchema)


class OrderSchema(Schema):
    id = fields.Integer()
    user_id = fields.Integer()
    total_amount = _money()
    status = fields.Enum(OrderStatus, by_value=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class OrderItemWithProductSchema(Schema):
    id = fields.Integer()
    order_id = fields.Integer()
    product_id = fields.Integer()
    quantity = fields.Integer()
    price_at_time = _money()
    created_at = fields.DateTime()
    product = fields.Nested(CoffeeProductSchema)


class OrderWithItemsSchema(OrderSchema):
    items = fields.List(fields.Nested(OrderItemWithProductSchema))
    user = fields.Nested(UserSchema)
