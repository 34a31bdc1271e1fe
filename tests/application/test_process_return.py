"""Integration tests for processing returns against the stock ledger."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from shuttering.application.dto import RentalLineSpec, ReturnLineSpec
from shuttering.application.issue_rental import IssueRentalHandler
from shuttering.application.process_return import ProcessReturnHandler
from shuttering.domain.exceptions import EntityNotFoundError, ValidationError
from shuttering.domain.model.customer import Customer
from shuttering.domain.model.item import Item
from shuttering.domain.model.rental import RentalStatus
from shuttering.domain.model.value_objects import Money
from tests.fakes import FakeItemRepository, FakeRentalRepository

T0 = datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc)
RAJ = Customer("1", "Raj Construction", "9876543210")


def _setup():
    items = [
        Item("1", "Chali", "Construction support item", Money.of("10"), 100, 100),
        Item("2", "Balli", "Construction support beam", Money.of("2"), 150, 150),
    ]
    return FakeRentalRepository(), FakeItemRepository(items)


def _issue(rental_repo, item_repo, specs):
    dto = IssueRentalHandler(rental_repo, item_repo).handle(RAJ, specs, issued_at=T0)
    return dto.id


def _days(n: float) -> datetime:
    return T0 + timedelta(days=n)


def _unreturned(rental_repo, item_id: str) -> int:
    return sum(
        line.quantity.value
        for rental in rental_repo.list_all()
        for line in rental.open_lines
        if line.item_id == item_id
    )


# ── Scenarios ────────────────────────────────────────────────────────────────


class TestReturnScenarios:

    def test_full_return_after_three_days(self):
        rental_repo, item_repo = _setup()
        rid = _issue(rental_repo, item_repo, [RentalLineSpec("1", 20)])
        assert item_repo.get_by_id("1").available_quantity == 80

        line_id = rental_repo.get_by_id(rid).items[0].id
        handler = ProcessReturnHandler(rental_repo, item_repo)
        result = handler.handle(rid, [ReturnLineSpec(line_id, 20, _days(3))], processed_at=_days(3))

        assert result is None
        rental = rental_repo.get_by_id(rid)
        assert rental.items[0].total_amount == Money.of("600")
        assert rental.total_amount == Money.of("600")
        assert rental.status == RentalStatus.RETURNED
        assert rental.return_date == _days(3)
        assert item_repo.get_by_id("1").available_quantity == 100

    def test_partial_return_after_two_days(self):
        rental_repo, item_repo = _setup()
        rid = _issue(rental_repo, item_repo, [RentalLineSpec("1", 30)])
        line_id = rental_repo.get_by_id(rid).items[0].id

        ProcessReturnHandler(rental_repo, item_repo).handle(
            rid, [ReturnLineSpec(line_id, 10, _days(2))]
        )

        rental = rental_repo.get_by_id(rid)
        returned, remaining = rental.items
        assert returned.total_amount == Money.of("200")  # 2 x 10 x 10
        assert remaining.quantity.value == 20
        assert remaining.total_amount == Money.zero()
        assert not remaining.is_returned
        assert rental.status == RentalStatus.PARTIALLY_RETURNED
        assert rental.return_date is None
        assert item_repo.get_by_id("1").available_quantity == 80  # 70 + 10

    def test_balance_tracks_booked_total(self):
        rental_repo, item_repo = _setup()
        rid = _issue(rental_repo, item_repo, [RentalLineSpec("2", 50)])
        line_id = rental_repo.get_by_id(rid).items[0].id

        ProcessReturnHandler(rental_repo, item_repo).handle(
            rid, [ReturnLineSpec(line_id, 50, _days(4))]
        )
        assert rental_repo.get_by_id(rid).balance == Decimal("400")


# ── Ledger conservation ──────────────────────────────────────────────────────


class TestLedgerConservation:

    def test_available_matches_unreturned_lines_across_rentals(self):
        rental_repo, item_repo = _setup()
        handler = ProcessReturnHandler(rental_repo, item_repo)
        r1 = _issue(rental_repo, item_repo, [RentalLineSpec("1", 30), RentalLineSpec("2", 40)])
        r2 = _issue(rental_repo, item_repo, [RentalLineSpec("1", 25)])

        def check():
            for item_id in ("1", "2"):
                item = item_repo.get_by_id(item_id)
                assert item.available_quantity == (
                    item.total_quantity - _unreturned(rental_repo, item_id)
                )

        check()
        chali, balli = rental_repo.get_by_id(r1).items
        handler.handle(r1, [ReturnLineSpec(chali.id, 12, _days(1)), ReturnLineSpec(balli.id, 40, _days(1))])
        check()
        handler.handle(r2, [ReturnLineSpec(rental_repo.get_by_id(r2).items[0].id, 5, _days(2))])
        check()
        remainder = rental_repo.get_by_id(r1).open_lines[0]
        handler.handle(r1, [ReturnLineSpec(remainder.id, remainder.quantity.value, _days(3))])
        check()

        assert item_repo.get_by_id("1").available_quantity == 80  # r2 still holds 20
        assert item_repo.get_by_id("2").available_quantity == 150


# ── Failure paths ────────────────────────────────────────────────────────────


class TestReturnFailures:

    def test_unknown_rental(self):
        rental_repo, item_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="Rental #9 not found"):
            ProcessReturnHandler(rental_repo, item_repo).handle("9", [])

    def test_over_return_changes_nothing(self):
        rental_repo, item_repo = _setup()
        rid = _issue(rental_repo, item_repo, [RentalLineSpec("1", 10)])
        line_id = rental_repo.get_by_id(rid).items[0].id

        with pytest.raises(ValidationError, match="only 10 on rent"):
            ProcessReturnHandler(rental_repo, item_repo).handle(
                rid, [ReturnLineSpec(line_id, 11, _days(1))]
            )

        rental = rental_repo.get_by_id(rid)
        assert rental.status == RentalStatus.ISSUED
        assert len(rental.items) == 1
        assert item_repo.get_by_id("1").available_quantity == 90

    def test_ledger_failure_does_not_save_rental(self):
        rental_repo, item_repo = _setup()
        rid = _issue(rental_repo, item_repo, [RentalLineSpec("1", 10)])
        line_id = rental_repo.get_by_id(rid).items[0].id

        # Someone put the stock back by hand; the ledger refuses to over-credit.
        chali = item_repo.get_by_id("1")
        chali.available_quantity = 100
        item_repo.save(chali)

        with pytest.raises(ValidationError, match="Cannot release"):
            ProcessReturnHandler(rental_repo, item_repo).handle(
                rid, [ReturnLineSpec(line_id, 10, _days(1))]
            )
        assert rental_repo.get_by_id(rid).status == RentalStatus.ISSUED

    def test_naive_return_date_changes_nothing(self):
        rental_repo, item_repo = _setup()
        rid = _issue(rental_repo, item_repo, [RentalLineSpec("1", 10)])
        line_id = rental_repo.get_by_id(rid).items[0].id

        with pytest.raises(ValidationError, match="must carry a timezone"):
            ProcessReturnHandler(rental_repo, item_repo).handle(
                rid, [ReturnLineSpec(line_id, 10, datetime(2024, 5, 12))]
            )

        assert rental_repo.get_by_id(rid).status == RentalStatus.ISSUED
        assert item_repo.get_by_id("1").available_quantity == 90
