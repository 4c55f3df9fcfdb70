# product_api/handlers.py

import logging

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from .errors import NotFoundError, PersistenceError
from .repository import ProductRepository, get_repository
from .schemas import (
    MessageEnvelope,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ProductUpdate,
)

logger = logging.getLogger(__name__)


def _store_failure(repo: ProductRepository, action: str, error: SQLAlchemyError) -> PersistenceError:
    repo.rollback()
    logger.error(f"Product API: Error {action}: {error}", exc_info=True)
    return PersistenceError()


def _require_product(repo: ProductRepository, product_id: int):
    product = repo.find_by_id(product_id)
    if product is None:
        logger.warning(f"Product API: Product with ID {product_id} not found.")
        raise NotFoundError()
    return product


def list_products(repo: ProductRepository = Depends(get_repository)):
    """
    Lists every product, newest first.
    """
    logger.info("Product API: Listing products")
    try:
        products = repo.find_all()
    except SQLAlchemyError as e:
        raise _store_failure(repo, "listing products", e) from e
    logger.info(f"Product API: Retrieved {len(products)} products.")
    return ProductListEnvelope(data=[ProductResponse.model_validate(p) for p in products])


def get_product(product_id: int, repo: ProductRepository = Depends(get_repository)):
    logger.info(f"Product API: Fetching product with ID: {product_id}")
    try:
        product = _require_product(repo, product_id)
    except SQLAlchemyError as e:
        raise _store_failure(repo, f"fetching product {product_id}", e) from e
    return ProductEnvelope(data=ProductResponse.model_validate(product))


def create_product(product: ProductCreate, repo: ProductRepository = Depends(get_repository)):
    """
    Creates a new product. Availability always starts out true.
    """
    logger.info(f"Product API: Creating product: {product.name}")
    try:
        db_product = repo.insert(**product.model_dump())
    except SQLAlchemyError as e:
        raise _store_failure(repo, "creating product", e) from e
    logger.info(
        f"Product API: Product '{db_product.name}' (ID: {db_product.id}) created successfully."
    )
    return ProductEnvelope(data=ProductResponse.model_validate(db_product))


def update_product(
    product_id: int, product: ProductUpdate, repo: ProductRepository = Depends(get_repository)
):
    """
    Replaces name, price and availability of an existing product.
    """
    logger.info(
        f"Product API: Updating product with ID: {product_id} with data: {product.model_dump()}"
    )
    try:
        db_product = _require_product(repo, product_id)
        db_product = repo.update(db_product, **product.model_dump())
    except SQLAlchemyError as e:
        raise _store_failure(repo, f"updating product {product_id}", e) from e
    logger.info(f"Product API: Product {product_id} updated successfully.")
    return ProductEnvelope(data=ProductResponse.model_validate(db_product))


def toggle_availability(product_id: int, repo: ProductRepository = Depends(get_repository)):
    """
    Flips availability of an existing product. Any request body is ignored.
    """
    logger.info(f"Product API: Toggling availability of product with ID: {product_id}")
    try:
        db_product = _require_product(repo, product_id)
        db_product = repo.update(db_product, availability=not db_product.availability)
    except SQLAlchemyError as e:
        raise _store_failure(repo, f"toggling availability of product {product_id}", e) from e
    logger.info(
        f"Product API: Product {product_id} availability is now {db_product.availability}."
    )
    return ProductEnvelope(data=ProductResponse.model_validate(db_product))


def delete_product(product_id: int, repo: ProductRepository = Depends(get_repository)):
    logger.info(f"Product API: Attempting to delete product with ID: {product_id}")
    try:
        db_product = _require_product(repo, product_id)
        repo.delete(db_product)
    except SQLAlchemyError as e:
        raise _store_failure(repo, f"deleting product {product_id}", e) from e
    logger.info(f"Product API: Product {product_id} deleted successfully.")
    return MessageEnvelope(data="deleted")
