"""
Model: UserCredit
Table: sno_user_credits

One balance row per (user, service). Rows are created lazily with the
free-plan allotment and are never deleted. The amount can only move through
conditional UPDATE statements in CreditService, and the CHECK constraint
keeps it non-negative even if a caller bypasses the service.
"""

# Python Packages
import time

# Database
from ..config.database import db





def _epoch_seconds():
    return int(time.time())


class UserCredit(db.Model):
    """ Credit balance of a user for one named service... """

    # Table Name
    __tablename__ = "sno_user_credits"

    __table_args__ = (
        db.UniqueConstraint("user_id", "service_name", name = "uq_sno_user_credits_user_service"),
        db.CheckConstraint("amount >= 0", name = "ck_sno_user_credits_amount_non_negative"),
    )

    credit_id = db.Column(db.Integer, primary_key = True, autoincrement = True)

    user_id = db.Column(
        db.String(255),
        nullable = False,
        index = True,
        doc = "Identifier of the user owning this balance."
    )

    service_name = db.Column(
        db.String(50),
        nullable = False,
        doc = "Named service the credit is spent on, e.g. 'sno'."
    )

    amount = db.Column(db.Integer, nullable = False, default = 0)

    created_at = db.Column(db.Integer, nullable = False, default = _epoch_seconds)

    updated_at = db.Column(
        db.Integer,
        nullable = False,
        default = _epoch_seconds,
        onupdate = _epoch_seconds
    )

    def __repr__(self):
        return f"<UserCredit {self.user_id}:{self.service_name}={self.amount}>"
