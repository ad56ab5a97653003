from typing import List, Optional

from .base import RequestSchema, NonEmptyStr, Number


class CreateProductSchema(RequestSchema):
    name: NonEmptyStr
    quantity: Number
    unitPrice: Number
    description: NonEmptyStr


class GetProductSchema(RequestSchema):
    productId: Optional[str] = None


class UpdateProductSchema(RequestSchema):
    productId: NonEmptyStr
    name: NonEmptyStr
    quantity: Number
    unitPrice: Number
    description: NonEmptyStr


class DeleteProductSchema(RequestSchema):
    productId: NonEmptyStr


class DeleteMultipleProductsSchema(RequestSchema):
    arrayOfProductIds: List[str]
