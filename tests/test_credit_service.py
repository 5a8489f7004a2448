import threading

import pytest
from flask import Flask

from snochat.chat.config import credit_config
from snochat.chat.services import CreditService
from snochat.config.database import db
from snochat.models import UserCredit
from snochat.util.exceptions import NotFoundException, StorageException, ValidationException


def test_get_balance_requires_initialization(credits):
    with pytest.raises(NotFoundException):
        credits.get_balance("user-1", "sno")


def test_lazy_initialization_grants_free_plan(credits):
    assert credits.get_or_initialize_balance("user-1", "sno") == 40
    assert credits.get_balance("user-1", "sno") == 40


def test_initialize_all_services(credits):
    credits.initialize_balance("user-1")

    for service_name, amount in credit_config.DEFAULT_FREE_PLAN_CREDITS.items():
        assert credits.get_balance("user-1", service_name) == amount


def test_initialize_does_not_reset_existing_balance(credits):
    credits.initialize_balance("user-1", "sno")
    assert credits.try_deduct("user-1", "sno", 5)

    credits.initialize_balance("user-1", "sno")

    assert credits.get_balance("user-1", "sno") == 35


def test_initialize_unknown_service_is_rejected(credits):
    with pytest.raises(ValidationException):
        credits.initialize_balance("user-1", "teleport")


def test_try_deduct_success_and_insufficient(credits, give_credit):
    give_credit("user-1", 2)

    assert credits.try_deduct("user-1", "sno", 2) is True
    assert credits.get_balance("user-1", "sno") == 0

    assert credits.try_deduct("user-1", "sno", 1) is False
    assert credits.get_balance("user-1", "sno") == 0


def test_try_deduct_never_goes_negative(credits, give_credit):
    give_credit("user-1", 3)

    results = [credits.try_deduct("user-1", "sno", 1) for _ in range(5)]

    assert results.count(True) == 3
    assert credits.get_balance("user-1", "sno") == 3 - results.count(True)


def test_try_deduct_larger_than_balance_leaves_balance_untouched(credits, give_credit):
    give_credit("user-1", 4)

    assert credits.try_deduct("user-1", "sno", 5) is False
    assert credits.get_balance("user-1", "sno") == 4


def test_try_deduct_without_row_fails(credits):
    assert credits.try_deduct("ghost", "sno", 1) is False


def test_only_one_of_two_stale_readers_wins_last_credit(app, give_credit):
    give_credit("user-1", 1)
    first, second = CreditService(), CreditService()

    # Both checks pass before either deduction runs
    assert first.get_balance("user-1", "sno") == 1
    assert second.get_balance("user-1", "sno") == 1

    assert [first.try_deduct("user-1", "sno", 1), second.try_deduct("user-1", "sno", 1)] == [True, False]
    assert first.get_balance("user-1", "sno") == 0


def test_add_credits(credits, give_credit):
    give_credit("user-1", 1)

    assert credits.add("user-1", "sno", 10) == 11
    assert credits.add("user-1", "sno", 10) == 21


def test_add_requires_initialized_balance(credits):
    with pytest.raises(NotFoundException):
        credits.add("ghost", "sno", 1)


@pytest.mark.parametrize("amount", [0, -1, 1.5, True])
def test_amount_must_be_positive_integer(credits, give_credit, amount):
    give_credit("user-1", 10)

    with pytest.raises(ValidationException):
        credits.try_deduct("user-1", "sno", amount)

    with pytest.raises(ValidationException):
        credits.add("user-1", "sno", amount)

    assert credits.get_balance("user-1", "sno") == 10


def test_balances_are_per_service(credits, give_credit):
    give_credit("user-1", 1, "sno")
    give_credit("user-1", 7, "pano")

    assert credits.try_deduct("user-1", "sno", 1)
    assert credits.get_balance("user-1", "pano") == 7


@pytest.fixture
def file_ledger_app(tmp_path):
    """ Separate app on a file-backed SQLite DB so threads get their own connections. """
    ledger_app = Flask(__name__)
    ledger_app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{tmp_path / 'ledger.db'}"
    ledger_app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    db.init_app(ledger_app)

    with ledger_app.app_context():
        db.create_all()
        yield ledger_app
        db.session.remove()
        db.drop_all()


def test_concurrent_deductions_conserve_credit(file_ledger_app):
    starting_balance, workers = 5, 12
    db.session.add(UserCredit(user_id="user-1", service_name="sno", amount=starting_balance))
    db.session.commit()

    barrier = threading.Barrier(workers)
    results = []
    lock = threading.Lock()

    def spend():
        with file_ledger_app.app_context():
            barrier.wait()
            try:
                deducted = CreditService().try_deduct("user-1", "sno", 1)
            except StorageException:
                # A locked database counts as a failed deduction with no effect
                deducted = False
            finally:
                db.session.remove()

            with lock:
                results.append(deducted)

    threads = [threading.Thread(target=spend) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    successes = results.count(True)
    final = CreditService().get_balance("user-1", "sno")

    assert len(results) == workers
    assert successes <= starting_balance
    assert final == starting_balance - successes
    assert final >= 0
