# product_api/router.py

from fastapi import APIRouter, Depends, status

from . import handlers
from .config import API_PREFIX
from .schemas import MessageEnvelope, ProductEnvelope, ProductListEnvelope
from .validation import (
    AVAILABILITY_RULES,
    ID_RULES,
    NAME_RULES,
    PRICE_RULES,
    validate_request,
)

router = APIRouter(prefix=API_PREFIX, tags=["products"])

router.add_api_route(
    "/",
    handlers.list_products,
    methods=["GET"],
    response_model=ProductListEnvelope,
    summary="Retrieve all products",
)

router.add_api_route(
    "/{product_id}",
    handlers.get_product,
    methods=["GET"],
    response_model=ProductEnvelope,
    dependencies=[Depends(validate_request(ID_RULES))],
    summary="Retrieve a single product by ID",
)

router.add_api_route(
    "/",
    handlers.create_product,
    methods=["POST"],
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(validate_request(NAME_RULES, PRICE_RULES))],
    summary="Create a new product",
)

router.add_api_route(
    "/{product_id}",
    handlers.update_product,
    methods=["PUT"],
    response_model=ProductEnvelope,
    dependencies=[
        Depends(validate_request(ID_RULES, NAME_RULES, PRICE_RULES, AVAILABILITY_RULES))
    ],
    summary="Replace an existing product",
)

router.add_api_route(
    "/{product_id}",
    handlers.toggle_availability,
    methods=["PATCH"],
    response_model=ProductEnvelope,
    dependencies=[Depends(validate_request(ID_RULES))],
    summary="Toggle the availability of a product",
)

router.add_api_route(
    "/{product_id}",
    handlers.delete_product,
    methods=["DELETE"],
    response_model=MessageEnvelope,
    dependencies=[Depends(validate_request(ID_RULES))],
    summary="Delete a product by ID",
)
