# product_api/repository.py

from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .models import Product


class ProductRepository:
    """Store operations for Product rows. Every write commits immediately."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id.desc()).all()

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def insert(self, **fields) -> Product:
        product = Product(**fields)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update(self, product: Product, **fields) -> Product:
        for key, value in fields.items():
            setattr(product, key, value)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()


def get_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)
