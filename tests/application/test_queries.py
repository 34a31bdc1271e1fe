"""Integration tests for rental queries, payments and the dashboard."""

from datetime import datetime, timedelta, timezone

import pytest

from shuttering.application.dashboard import DashboardHandler
from shuttering.application.dto import RentalLineSpec, ReturnLineSpec
from shuttering.application.issue_rental import ReissueRentalHandler
from shuttering.application.process_return import ProcessReturnHandler
from shuttering.application.record_payment import RecordPaymentHandler
from shuttering.application.show_rental import RentalQueries
from shuttering.domain.exceptions import EntityNotFoundError, ValidationError
from shuttering.domain.model.customer import Customer
from shuttering.domain.model.item import Item
from shuttering.domain.model.value_objects import Money
from tests.fakes import FakeCustomerRepository, FakeItemRepository, FakeRentalRepository

T0 = datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc)


def _setup():
    """Three rentals: #1 issued, #2 partially returned, #3 returned."""
    items = [
        Item("1", "Chali", "Construction support item", Money.of("10"), 100, 100),
        Item("2", "Balli", "Construction support beam", Money.of("2"), 150, 150),
    ]
    customers = [
        Customer("1", "Raj Construction", "9876543210"),
        Customer("2", "Singh Builders", "8765432109"),
    ]
    rental_repo = FakeRentalRepository()
    item_repo = FakeItemRepository(items)
    customer_repo = FakeCustomerRepository(customers)

    issue = ReissueRentalHandler(rental_repo, item_repo, customer_repo)
    returns = ProcessReturnHandler(rental_repo, item_repo)
    issue.handle("1", [RentalLineSpec("1", 10)], issued_at=T0)
    r2 = issue.handle("2", [RentalLineSpec("2", 30)], issued_at=T0)
    r3 = issue.handle("1", [RentalLineSpec("1", 20)], issued_at=T0)

    returns.handle(r2.id, [ReturnLineSpec(r2.items[0].id, 10, T0 + timedelta(days=2))])
    returns.handle(r3.id, [ReturnLineSpec(r3.items[0].id, 20, T0 + timedelta(days=3))])
    return rental_repo, item_repo, customer_repo


class TestRentalQueries:

    def test_get(self):
        rental_repo, _, _ = _setup()
        queries = RentalQueries(rental_repo)
        assert queries.get("2").customer_name == "Singh Builders"
        assert queries.get("99") is None

    def test_pending_returns_excludes_returned(self):
        rental_repo, _, _ = _setup()
        assert [r.id for r in RentalQueries(rental_repo).pending_returns()] == ["1", "2"]

    def test_issued_only(self):
        rental_repo, _, _ = _setup()
        assert [r.id for r in RentalQueries(rental_repo).issued()] == ["1"]

    @pytest.mark.parametrize(
        "status_filter, expected",
        [
            ("all", ["1", "2", "3"]),
            ("partially", ["2"]),
            ("returned", ["3"]),
        ],
    )
    def test_filters(self, status_filter, expected):
        rental_repo, _, _ = _setup()
        found = RentalQueries(rental_repo).find(status_filter=status_filter)
        assert [r.id for r in found] == expected

    def test_search_combines_with_filter(self):
        rental_repo, _, _ = _setup()
        queries = RentalQueries(rental_repo)
        assert [r.id for r in queries.find(search="raj")] == ["1", "3"]
        assert [r.id for r in queries.find("pending", search="chali")] == ["1"]
        assert [r.id for r in queries.find(search="BALLI")] == ["2"]

    def test_unknown_filter_rejected(self):
        rental_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown rental filter"):
            RentalQueries(rental_repo).find(status_filter="overdue")

    def test_booked_rent(self):
        rental_repo, _, _ = _setup()
        queries = RentalQueries(rental_repo)
        assert queries.booked_rent(queries.get("1")) == Money.zero()
        assert queries.booked_rent(queries.get("2")) == Money.of("40")
        assert queries.booked_rent(queries.get("3")) == Money.of("600")


class TestShowRental:

    def test_open_lines_show_accrued_amount(self):
        rental_repo, _, _ = _setup()
        dto = RentalQueries(rental_repo).show("2", as_of=T0 + timedelta(days=5))

        returned, remaining = dto.items
        assert returned.is_returned
        assert returned.days_rented == 2
        assert returned.amount == "₹40.00"
        assert not remaining.is_returned
        assert remaining.days_rented == 5
        assert remaining.amount == "₹200.00"  # 5 x 2 x 20, not booked
        assert dto.total == "₹40.00"
        assert dto.accrued == "₹240.00"
        assert dto.has_returns

    def test_show_unknown(self):
        rental_repo, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            RentalQueries(rental_repo).show("42")

    def test_show_rejects_naive_as_of(self):
        rental_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="As-of time must carry a timezone"):
            RentalQueries(rental_repo).show("1", as_of=datetime(2024, 5, 15))


class TestRecordPayment:

    def test_payment_updates_balance(self):
        rental_repo, _, _ = _setup()
        RecordPaymentHandler(rental_repo).handle("3", "450")
        rental = rental_repo.get_by_id("3")
        assert rental.paid_amount == Money.of("450")
        assert str(rental.balance) == "150"

    def test_negative_payment_rejected(self):
        rental_repo, _, _ = _setup()
        with pytest.raises(ValidationError):
            RecordPaymentHandler(rental_repo).handle("3", "-5")

    def test_unknown_rental(self):
        rental_repo, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            RecordPaymentHandler(rental_repo).handle("8", "5")


class TestDashboard:

    def test_summary(self):
        rental_repo, item_repo, customer_repo = _setup()
        RecordPaymentHandler(rental_repo).handle("3", "100")

        dto = DashboardHandler(customer_repo, item_repo, rental_repo).handle()

        assert dto.customers == 2
        assert dto.items == 2
        assert dto.active_rentals == 2
        assert dto.units_on_rent == 30  # 10 Chali + 20 Balli
        assert dto.booked_revenue == "₹640.00"
        assert dto.outstanding_balance == "₹540.00"
