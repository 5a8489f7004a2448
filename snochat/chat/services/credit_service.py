"""
Service: CreditService

Per-user, per-service credit ledger (table sno_user_credits).

Design:
  - Balances are created lazily with the free-plan allotment the first time
    a user touches the ledger; get_balance() on its own never creates rows.
  - try_deduct() is one conditional UPDATE guarded by `amount >= :n`.
    When two requests race for the last credit, the database lets exactly
    one UPDATE match the row; the other sees rowcount 0 and reports failure.
    No read-modify-write happens in Python.
  - add() is an atomic increment and is NOT idempotent: every call adds.
  - Any SQLAlchemy failure rolls back the session and is raised as
    StorageException so it is never mistaken for "insufficient credit".
"""

# Python Packages
import logging
import time

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# Database
from ...config.database import db

# Models
from ...models.sno_user_credit import UserCredit

# Config
from ..config import credit_config

# Exceptions
from ...util.exceptions import NotFoundException, StorageException, ValidationException
from ...util import messages

logger = logging.getLogger(__name__)


class CreditService:
    """
    Check, deduct and restore credit balances.
    """

    def __init__(self, default_credits: dict = None):
        self.default_credits = default_credits or credit_config.DEFAULT_FREE_PLAN_CREDITS

    # ── Reads ──────────────────────────────────────────────────────────────────

    def get_balance(self, user_id: str, service_name: str) -> int:
        """
        Current balance for one service.

        Raises:
            NotFoundException: the balance was never initialized.
            StorageException:  the read failed.
        """
        try:
            amount = (
                db.session.query(UserCredit.amount)
                .filter_by(user_id=user_id, service_name=service_name)
                .scalar()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

        if amount is None:
            raise NotFoundException(messages.ERROR["CREDIT_NOT_INITIALIZED"])

        return amount

    # ── Initialization ─────────────────────────────────────────────────────────

    def initialize_balance(self, user_id: str, service_name: str = None) -> None:
        """
        Create balance rows with the free-plan allotment.

        With *service_name* only that service is initialized, otherwise every
        service of the free plan. Existing rows are left untouched, and a
        concurrent insert of the same row is treated as success.
        """
        if service_name is not None and service_name not in self.default_credits:
            raise ValidationException(
                message=messages.ERROR["UNKNOWN_CREDIT_SERVICE"].format(service_name=service_name)
            )

        services = [service_name] if service_name else list(self.default_credits)

        for name in services:
            if self._exists(user_id, name):
                continue

            try:
                db.session.add(UserCredit(
                    user_id=user_id,
                    service_name=name,
                    amount=self.default_credits[name]
                ))
                db.session.commit()
                logger.info("Initialized %s credit for user %s", name, user_id)

            except IntegrityError:
                # Another request created the row first
                db.session.rollback()

            except SQLAlchemyError as exc:
                db.session.rollback()
                raise StorageException(details=str(exc))

    def get_or_initialize_balance(self, user_id: str, service_name: str) -> int:
        """ Balance for *service_name*, creating the free-plan row on first use. """
        try:
            return self.get_balance(user_id, service_name)
        except NotFoundException:
            self.initialize_balance(user_id, service_name)
            return self.get_balance(user_id, service_name)

    # ── Mutations ──────────────────────────────────────────────────────────────

    def try_deduct(self, user_id: str, service_name: str, amount: int) -> bool:
        """
        Atomically subtract *amount* if the balance covers it.

        Returns:
            True if the balance was decremented, False if it was insufficient
            (or the row does not exist). The balance never goes negative.
        """
        self._validate_amount(amount)

        statement = (
            update(UserCredit)
            .where(
                UserCredit.user_id == user_id,
                UserCredit.service_name == service_name,
                UserCredit.amount >= amount
            )
            .values(amount=UserCredit.amount - amount, updated_at=int(time.time()))
            .execution_options(synchronize_session=False)
        )

        try:
            result = db.session.execute(statement)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

        return result.rowcount == 1

    def add(self, user_id: str, service_name: str, amount: int) -> int:
        """
        Add *amount* credits (refunds, purchases, bonuses).

        Returns:
            The new balance.

        Raises:
            NotFoundException: the balance was never initialized.
        """
        self._validate_amount(amount)

        statement = (
            update(UserCredit)
            .where(UserCredit.user_id == user_id, UserCredit.service_name == service_name)
            .values(amount=UserCredit.amount + amount, updated_at=int(time.time()))
            .execution_options(synchronize_session=False)
        )

        try:
            result = db.session.execute(statement)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

        if result.rowcount != 1:
            raise NotFoundException(messages.ERROR["CREDIT_NOT_INITIALIZED"])

        return self.get_balance(user_id, service_name)

    # ── Private ────────────────────────────────────────────────────────────────

    def _exists(self, user_id: str, service_name: str) -> bool:
        try:
            return db.session.query(
                UserCredit.query.filter_by(user_id=user_id, service_name=service_name).exists()
            ).scalar()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageException(details=str(exc))

    def _validate_amount(self, amount) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            raise ValidationException(message=messages.ERROR["INVALID_CREDIT_AMOUNT"])
