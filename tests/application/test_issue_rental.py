"""Integration tests for issuing rentals."""

from datetime import datetime, timezone

import pytest

from shuttering.application.dto import RentalLineSpec
from shuttering.application.issue_rental import IssueRentalHandler, ReissueRentalHandler
from shuttering.domain.exceptions import EntityNotFoundError, ValidationError
from shuttering.domain.model.customer import Customer
from shuttering.domain.model.item import Item
from shuttering.domain.model.rental import RentalStatus
from shuttering.domain.model.value_objects import Money
from tests.fakes import FakeCustomerRepository, FakeItemRepository, FakeRentalRepository

T0 = datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc)
RAJ = Customer("1", "Raj Construction", "9876543210", "123 Main Street, New Delhi")


def _setup():
    items = [
        Item("1", "Chali", "Construction support item", Money.of("10"), 100, 100),
        Item("2", "Balli", "Construction support beam", Money.of("2"), 150, 150),
    ]
    return FakeRentalRepository(), FakeItemRepository(items), FakeCustomerRepository([RAJ])


class TestIssueRental:

    def test_issue_reserves_stock_and_persists(self):
        rental_repo, item_repo, _ = _setup()
        handler = IssueRentalHandler(rental_repo, item_repo)

        dto = handler.handle(RAJ, [RentalLineSpec("1", 20), RentalLineSpec("2", 30)], issued_at=T0)

        assert dto.id == "1"
        assert dto.status == "issued"
        assert dto.total == "₹0.00"
        assert item_repo.get_by_id("1").available_quantity == 80
        assert item_repo.get_by_id("2").available_quantity == 120

        rental = rental_repo.get_by_id(dto.id)
        assert rental.status == RentalStatus.ISSUED
        assert [line.quantity.value for line in rental.items] == [20, 30]
        assert all(line.issue_date == T0 for line in rental.items)
        assert len({line.id for line in rental.items}) == 2

    def test_rate_is_snapshotted_from_catalog(self):
        rental_repo, item_repo, _ = _setup()
        dto = IssueRentalHandler(rental_repo, item_repo).handle(RAJ, [RentalLineSpec("1", 5)])
        assert rental_repo.get_by_id(dto.id).items[0].daily_rate == Money.of("10")

    def test_explicit_rate_overrides_catalog(self):
        rental_repo, item_repo, _ = _setup()
        dto = IssueRentalHandler(rental_repo, item_repo).handle(
            RAJ, [RentalLineSpec("1", 5, daily_rate="8")]
        )
        assert rental_repo.get_by_id(dto.id).items[0].daily_rate == Money.of("8")

    def test_per_line_issue_date(self):
        rental_repo, item_repo, _ = _setup()
        earlier = datetime(2024, 5, 1, tzinfo=timezone.utc)
        dto = IssueRentalHandler(rental_repo, item_repo).handle(
            RAJ, [RentalLineSpec("1", 5, issue_date=earlier)], issued_at=T0
        )
        rental = rental_repo.get_by_id(dto.id)
        assert rental.issue_date == T0
        assert rental.items[0].issue_date == earlier

    def test_unknown_item_rejected(self):
        rental_repo, item_repo, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="'99' not found"):
            IssueRentalHandler(rental_repo, item_repo).handle(RAJ, [RentalLineSpec("99", 1)])

    def test_insufficient_stock_reserves_nothing(self):
        rental_repo, item_repo, _ = _setup()
        handler = IssueRentalHandler(rental_repo, item_repo)
        with pytest.raises(ValidationError, match="Insufficient stock for Balli"):
            handler.handle(RAJ, [RentalLineSpec("1", 10), RentalLineSpec("2", 151)])

        assert item_repo.get_by_id("1").available_quantity == 100
        assert rental_repo.list_all() == []

    def test_same_item_twice_checked_as_a_whole(self):
        rental_repo, item_repo, _ = _setup()
        handler = IssueRentalHandler(rental_repo, item_repo)
        with pytest.raises(ValidationError, match="need 120"):
            handler.handle(RAJ, [RentalLineSpec("1", 60), RentalLineSpec("1", 60)])

    def test_zero_quantity_rejected(self):
        rental_repo, item_repo, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            IssueRentalHandler(rental_repo, item_repo).handle(RAJ, [RentalLineSpec("1", 0)])

    def test_naive_line_date_rejected_before_reserving(self):
        rental_repo, item_repo, _ = _setup()
        spec = RentalLineSpec("1", 20, issue_date=datetime(2024, 5, 10))

        with pytest.raises(ValidationError, match="must carry a timezone"):
            IssueRentalHandler(rental_repo, item_repo).handle(RAJ, [spec])

        assert item_repo.get_by_id("1").available_quantity == 100
        assert rental_repo.list_all() == []

    def test_naive_issued_at_rejected(self):
        rental_repo, item_repo, _ = _setup()
        with pytest.raises(ValidationError, match="Issue date must carry a timezone"):
            IssueRentalHandler(rental_repo, item_repo).handle(
                RAJ, [RentalLineSpec("1", 5)], issued_at=datetime(2024, 5, 10, 9, 0)
            )
        assert item_repo.get_by_id("1").available_quantity == 100


class TestReissueRental:

    def test_reissue_uses_customer_snapshot(self):
        rental_repo, item_repo, customer_repo = _setup()
        handler = ReissueRentalHandler(rental_repo, item_repo, customer_repo)

        dto = handler.handle("1", [RentalLineSpec("1", 5)])

        assert dto.customer_id == "1"
        assert dto.customer_name == "Raj Construction"
        assert dto.customer_phone == "9876543210"
        assert item_repo.get_by_id("1").available_quantity == 95

    def test_unknown_customer_rejected(self):
        rental_repo, item_repo, customer_repo = _setup()
        handler = ReissueRentalHandler(rental_repo, item_repo, customer_repo)
        with pytest.raises(EntityNotFoundError, match="Customer"):
            handler.handle("42", [RentalLineSpec("1", 5)])
        assert item_repo.get_by_id("1").available_quantity == 100

    def test_each_issue_gets_a_new_rental(self):
        rental_repo, item_repo, customer_repo = _setup()
        handler = ReissueRentalHandler(rental_repo, item_repo, customer_repo)
        first = handler.handle("1", [RentalLineSpec("1", 5)])
        second = handler.handle("1", [RentalLineSpec("2", 5)])
        assert first.id != second.id
        assert len(rental_repo.list_by_customer("1")) == 2
