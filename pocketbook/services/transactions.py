"""Transaction queries and mutations."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Query, Session

from pocketbook.models.category import Category
from pocketbook.models.group import Group
from pocketbook.models.transaction import Transaction
from pocketbook.models.user import User
from pocketbook.services.filters import RangeFilter

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for transaction operations.

    Listings return `(Transaction, color)` rows. Transactions whose type has
    no matching category are left out, like an inner join on `type`.
    """

    def __init__(self, db: Session):
        self.db = db

    def _with_colors(self) -> Query:
        return (
            self.db.query(Transaction, Category.color)
            .join(Category, Category.type == Transaction.type)
            .order_by(Transaction.date, Transaction.id)
        )

    def list_all(self) -> list[tuple[Transaction, str]]:
        return self._with_colors().all()

    def list_for_user(
        self,
        username: str,
        category: str | None = None,
        date_filter: RangeFilter | None = None,
        amount_filter: RangeFilter | None = None,
    ) -> list[tuple[Transaction, str]]:
        """Transactions of one user, optionally narrowed by category and ranges."""
        query = self._with_colors().filter(Transaction.username == username)
        if category is not None:
            query = query.filter(Transaction.type == category)
        if date_filter is not None:
            query = query.filter(*date_filter.clauses(Transaction.date))
        if amount_filter is not None:
            query = query.filter(*amount_filter.clauses(Transaction.amount))
        return query.all()

    def list_for_group(
        self, group: Group, category: str | None = None
    ) -> list[tuple[Transaction, str]]:
        """Transactions of every member of `group`."""
        query = (
            self._with_colors()
            .join(User, User.username == Transaction.username)
            .filter(User.email.in_(group.member_emails))
        )
        if category is not None:
            query = query.filter(Transaction.type == category)
        return query.all()

    def create_transaction(self, username: str, type_: str, amount: float) -> Transaction:
        transaction = Transaction(username=username, type=type_, amount=amount)
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(transaction)
        return transaction

    def get_transaction(self, transaction_id: int) -> Transaction:
        transaction = self.db.query(Transaction).filter(Transaction.id == transaction_id).first()
        if transaction is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found"
            )
        return transaction

    def delete_transaction(self, transaction: Transaction) -> None:
        self.db.delete(transaction)
        self.db.commit()

    def delete_transactions(self, transaction_ids: list[int]) -> int:
        """Delete all listed transactions, or none if any id is unknown."""
        requested = set(transaction_ids)
        found = self.db.query(Transaction).filter(Transaction.id.in_(requested)).count()
        if found != len(requested):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="One or more ids do not have a corresponding transaction",
            )

        deleted = (
            self.db.query(Transaction)
            .filter(Transaction.id.in_(requested))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info(f"Bulk deleted {deleted} transactions")
        return deleted
