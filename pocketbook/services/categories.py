"""Category management, including reassignment of transactions on delete."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from pocketbook.models.category import Category
from pocketbook.models.transaction import Transaction

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_category(self, type_: str) -> Category | None:
        return self.db.query(Category).filter(Category.type == type_).first()

    def list_categories(self) -> list[Category]:
        return self.db.query(Category).order_by(Category.id).all()

    def create_category(self, type_: str, color: str) -> Category:
        """Create a category; types are unique."""
        if self.get_category(type_) is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category already exists",
            )
        category = Category(type=type_, color=color)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update_category(self, current_type: str, new_type: str, color: str) -> int:
        """Rename/recolor a category and follow the rename on its transactions.

        Returns the number of transactions moved to the new type.
        """
        category = self.get_category(current_type)
        if category is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

        if new_type != current_type and self.get_category(new_type) is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category already exists",
            )

        category.type = new_type
        category.color = color

        count = 0
        if new_type != current_type:
            count = (
                self.db.query(Transaction)
                .filter(Transaction.type == current_type)
                .update({Transaction.type: new_type}, synchronize_session=False)
            )

        self.db.commit()
        return count

    def delete_categories(self, types: list[str]) -> tuple[int, Category]:
        """Delete categories and reassign their transactions.

        Every requested type must exist, otherwise nothing is touched. The
        transactions are moved to the oldest category that is not being
        deleted; when every category is listed, the oldest one is kept and
        becomes the target.

        Returns the number of reassigned transactions and the fallback category.
        """
        requested = list(dict.fromkeys(types))

        found = self.db.query(Category).filter(Category.type.in_(requested)).count()
        if found != len(requested):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="One or more categories do not exist",
            )

        total = self.db.query(func.count(Category.id)).scalar()
        if total <= 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete the only remaining category",
            )

        fallback = (
            self.db.query(Category)
            .filter(Category.type.not_in(requested))
            .order_by(Category.id)
            .first()
        )
        if fallback is None:
            fallback = self.db.query(Category).order_by(Category.id).first()

        doomed = [type_ for type_ in requested if type_ != fallback.type]

        count = (
            self.db.query(Transaction)
            .filter(Transaction.type.in_(doomed))
            .update({Transaction.type: fallback.type}, synchronize_session=False)
        )
        self.db.query(Category).filter(Category.type.in_(doomed)).delete(
            synchronize_session=False
        )
        self.db.commit()

        logger.info(
            f"Deleted categories {doomed}, reassigned {count} transactions to '{fallback.type}'"
        )
        return count, fallback
