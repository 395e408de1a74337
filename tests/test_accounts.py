from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select

from app.db.models import Transaction, User, UserCopiedTrader, Wallet
from app.models import CompleteProfile, DepositRequest, ProfileUpdate
from app.services import accounts


def _create(db, uid="uid-1", email="jane@apexora.com", username="JaneTrader"):
    result = accounts.create_user(db, firebase_uid=uid, email=email, username=username)
    assert result.success, result.message
    return accounts.get_user_by_firebase_uid(db, uid)


def _add_txn(db, user_id, kind, amount, status="COMPLETED", minutes_ago=0):
    db.add(
        Transaction(
            user_id=user_id,
            transaction_type=kind,
            amount_usd_equivalent=Decimal(amount),
            status=status,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        )
    )
    db.commit()


class TestCreateUser:
    def test_creates_user_and_empty_wallet(self, db):
        user = _create(db)

        assert user.username == "janetrader"
        assert user.trading_plan_id == 1
        wallet = db.execute(select(Wallet).where(Wallet.user_id == user.id)).scalar_one()
        assert wallet.balance == 0
        assert wallet.profit_loss_balance == 0

    def test_duplicate_email(self, db):
        _create(db)

        result = accounts.create_user(db, firebase_uid="uid-2", email="jane@apexora.com", username="other")

        assert result.success is False
        assert result.message == accounts.EMAIL_TAKEN
        assert len(db.execute(select(User)).scalars().all()) == 1

    def test_duplicate_username_is_case_insensitive(self, db):
        _create(db)

        result = accounts.create_user(db, firebase_uid="uid-2", email="other@apexora.com", username="JANETRADER")

        assert result.success is False
        assert result.message == accounts.USERNAME_TAKEN

    def test_username_exists(self, db):
        _create(db)

        assert accounts.username_exists(db, "JaneTrader") is True
        assert accounts.username_exists(db, "someone_else") is False

    def test_unknown_uid(self, db):
        assert accounts.get_user_by_firebase_uid(db, "nobody") is None
        assert accounts.get_user_by_firebase_uid(db, "") is None


class TestProfile:
    def test_no_fields_means_no_changes(self, db):
        _create(db)

        result = accounts.update_user_profile(db, "uid-1", ProfileUpdate())

        assert result.success is True
        assert result.message == "No changes were made."

    def test_updates_only_given_fields(self, db):
        _create(db)

        result = accounts.update_user_profile(db, "uid-1", ProfileUpdate(first_name="Jane", country_code="gb"))

        assert result.success is True
        assert result.user.first_name == "Jane"
        assert result.user.country_code == "GB"
        assert result.user.last_name is None

    def test_unknown_user(self, db):
        result = accounts.update_user_profile(db, "ghost", ProfileUpdate(first_name="Jane"))

        assert result.success is False
        assert result.message == "User not found or no update was made."

    def test_username_taken(self, db):
        _create(db)
        _create(db, uid="uid-2", email="bob@apexora.com", username="bob")

        result = accounts.update_user_profile(db, "uid-2", ProfileUpdate(username="JaneTrader"))

        assert result.success is False
        assert result.message == accounts.USERNAME_TAKEN

    def test_complete_profile_stamps_completion(self, db):
        _create(db)
        form = CompleteProfile(
            first_name="Jane", last_name="Doe", phone_number="+44 7700 900123", country_code="gb", trading_plan_id=3
        )

        result = accounts.complete_user_profile(db, "uid-1", form)

        assert result.success is True
        assert result.user.trading_plan_id == 3
        assert result.user.profile_completed_at is not None

    def test_complete_profile_rejects_unknown_plan(self, db):
        _create(db)
        form = CompleteProfile(
            first_name="Jane", last_name="Doe", phone_number="+44 7700 900123", country_code="GB", trading_plan_id=99
        )

        assert accounts.complete_user_profile(db, "uid-1", form).success is False

    def test_pin_is_stored_hashed(self, db):
        _create(db)

        result = accounts.complete_pin_setup(db, "uid-1", "4821")

        assert result.success is True
        assert result.user.pin_setup_completed_at is not None
        stored = db.execute(select(User.admin_pin).where(User.firebase_auth_uid == "uid-1")).scalar_one()
        assert stored.startswith("pbkdf2_sha256$")
        assert "4821" not in stored


class TestDashboard:
    def test_aggregates_wallet_and_transactions(self, db):
        user = _create(db)
        wallet = db.execute(select(Wallet).where(Wallet.user_id == user.id)).scalar_one()
        wallet.balance = Decimal("1500.00")
        wallet.profit_loss_balance = Decimal("-120.50")
        db.commit()
        _add_txn(db, user.id, "DEPOSIT", "1000", minutes_ago=10)
        _add_txn(db, user.id, "DEPOSIT", "800", minutes_ago=9)
        _add_txn(db, user.id, "DEPOSIT", "300", status="PENDING", minutes_ago=8)
        _add_txn(db, user.id, "WITHDRAWAL", "200", minutes_ago=7)
        for minutes in (6, 5, 4):
            _add_txn(db, user.id, "COPY_TRADE_PNL", "10", minutes_ago=minutes)
        accounts.copy_trader(db, user.id, "trader_001")

        data = accounts.get_dashboard_data(db, "uid-1")

        assert data.username == "janetrader"
        assert data.total_assets == Decimal("1379.50")
        assert data.profit_loss == Decimal("-120.50")
        assert data.total_deposited == Decimal("1800")
        assert data.total_withdrawn == Decimal("200")
        assert data.active_copy_trades == 1
        assert len(data.recent_transactions) == 5
        assert data.recent_transactions[0].transaction_type == "COPY_TRADE_PNL"
        assert data.recent_transactions[-1].transaction_type == "DEPOSIT"

    def test_missing_wallet_reads_as_zero(self, db):
        user = _create(db)
        db.query(Wallet).filter(Wallet.user_id == user.id).delete()
        db.commit()

        data = accounts.get_dashboard_data(db, "uid-1")

        assert data.total_assets == 0
        assert data.recent_transactions == []

    def test_unknown_user_returns_none(self, db):
        assert accounts.get_dashboard_data(db, "ghost") is None

    def test_transaction_history_is_newest_first(self, db):
        user = _create(db)
        _add_txn(db, user.id, "DEPOSIT", "500", minutes_ago=30)
        _add_txn(db, user.id, "WITHDRAWAL", "50", minutes_ago=1)

        history = accounts.get_transaction_history(db, user.id)

        assert [t.transaction_type for t in history] == ["WITHDRAWAL", "DEPOSIT"]


class TestDeposits:
    def test_first_deposit_must_meet_plan_minimum(self, db):
        user = _create(db)

        result = accounts.create_deposit_transaction(db, user, DepositRequest(crypto="BTC", amount_usd=Decimal("100")))

        assert result.success is False
        assert result.message == "Minimum first deposit for your Starter plan is $500."
        assert accounts.check_if_first_deposit(db, user.id) is True

    def test_deposit_is_recorded_pending(self, db):
        user = _create(db)

        result = accounts.create_deposit_transaction(db, user, DepositRequest(crypto="ETH", amount_usd=Decimal("750")))

        assert result.success is True
        txn = db.execute(select(Transaction).where(Transaction.user_id == user.id)).scalar_one()
        assert (txn.transaction_type, txn.status, txn.asset_name) == ("DEPOSIT", "PENDING", "ETH")
        assert accounts.check_if_first_deposit(db, user.id) is False

    def test_later_deposits_have_no_minimum(self, db):
        user = _create(db)
        _add_txn(db, user.id, "DEPOSIT", "600")

        result = accounts.create_deposit_transaction(db, user, DepositRequest(crypto="USDT", amount_usd=Decimal("25")))

        assert result.success is True

    def test_failed_deposits_do_not_count(self, db):
        user = _create(db)
        _add_txn(db, user.id, "DEPOSIT", "600", status="FAILED")

        status = accounts.get_deposit_status(db, user)

        assert status.is_first_deposit is True
        assert status.minimum_deposit_usd == Decimal("500")
        assert status.plan_name == "Starter"


class TestCopyTrading:
    def test_copy_and_stop(self, db):
        user = _create(db)

        assert accounts.copy_trader(db, user.id, "trader_002").success
        assert accounts.copy_trader(db, user.id, "trader_007").success
        assert accounts.get_copied_trader_ids(db, user.id) == ["trader_002", "trader_007"]

        result = accounts.stop_copying_trader(db, user.id, "trader_002")

        assert result.message == "Stopped copying trader."
        assert accounts.get_copied_trader_ids(db, user.id) == ["trader_007"]

    def test_copy_twice_is_a_no_op(self, db):
        user = _create(db)
        accounts.copy_trader(db, user.id, "trader_001")

        result = accounts.copy_trader(db, user.id, "trader_001")

        assert result.success is True
        rows = db.execute(select(UserCopiedTrader).where(UserCopiedTrader.user_id == user.id)).scalars().all()
        assert len(rows) == 1

    def test_unknown_trader(self, db):
        user = _create(db)

        result = accounts.copy_trader(db, user.id, "trader_999")

        assert result.success is False
        assert result.message == "Trader not found."

    def test_stop_when_not_copying(self, db):
        user = _create(db)

        assert accounts.stop_copying_trader(db, user.id, "trader_001").message == "You were not copying this trader."
