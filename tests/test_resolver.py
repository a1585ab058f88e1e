"""Tests for holder resolution and availability listings."""
import pytest
from datetime import datetime, timezone

from itrack.errors import InvalidFilter, NotFound
from itrack.models.asset import AssetType, Computer, PhoneLine
from itrack.models.assignment import AssignmentRecord, ActionType, TargetType
from itrack.services import transition_service, manager_service, ledger_service
from itrack.services.refs import AssetRef, TargetRef
from itrack.services.resolver import AssetFilter, current_holder, list_assets, list_available, list_assigned, assets_held_by


def _ids(summaries, kind=None):
    return [(s.asset_type, s.asset_id) for s in summaries if kind is None or s.asset_type == kind]


def _ledger(db, line, action, user_id, when):
    db.add(AssignmentRecord(
        asset_type=AssetType.phone_line, asset_id=line.id, action_type=action,
        target_type=TargetType.user, target_id=user_id, recorded_at=when,
    ))
    db.commit()


def test_filter_required(db):
    with pytest.raises(InvalidFilter):
        list_assets(db, AssetFilter())
    with pytest.raises(InvalidFilter):
        list_assets(db, AssetFilter(state="lost"))


def test_round_trip_listing(db, org, computer):
    ref = AssetRef(AssetType.computer, computer.id)
    transition_service.assign(db, ref, TargetRef(TargetType.user, org.analyst.id))

    assigned = list_assigned(db, AssetFilter(state="assigned"))
    assert (AssetType.computer, computer.id) in _ids(assigned)
    row = next(s for s in assigned if s.asset_id == computer.id and s.asset_type == AssetType.computer)
    assert row.held_by == "Javiera Pérez"
    assert row.label == "Dell Latitude 5420 (Serial: ABC123)"
    assert (AssetType.computer, computer.id) not in _ids(list_available(db, AssetFilter(state="available")))

    transition_service.unassign(db, ref)
    assert (AssetType.computer, computer.id) in _ids(list_available(db, AssetFilter(state="available")))
    assert (AssetType.computer, computer.id) not in _ids(list_assigned(db, AssetFilter(state="assigned")))


def test_available_by_model(db, org, computer, device):
    other = Computer(serial="XYZ999", model_id=org.model.id)
    db.add(other)
    db.commit()
    transition_service.assign(db, AssetRef(AssetType.computer, other.id), TargetRef(TargetType.user, org.cfo.id))

    result = list_assets(db, AssetFilter(model_id=org.model.id))
    assert _ids(result) == [(AssetType.computer, computer.id), (AssetType.device, device.id)]


def test_phone_line_assignment_then_return_is_available(db, org, phone_line):
    _ledger(db, phone_line, ActionType.assignment, org.analyst.id, datetime(2024, 1, 1, tzinfo=timezone.utc))
    _ledger(db, phone_line, ActionType.return_, org.analyst.id, datetime(2024, 2, 1, tzinfo=timezone.utc))
    result = list_assets(db, AssetFilter(provider="Entel"))
    assert _ids(result) == [(AssetType.phone_line, phone_line.id)]


def test_phone_line_only_assignment_is_not_available(db, org, phone_line):
    _ledger(db, phone_line, ActionType.assignment, org.analyst.id, datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert list_assets(db, AssetFilter(provider="Entel")) == []
    assigned = list_assets(db, AssetFilter(state="assigned", asset_type=AssetType.phone_line))
    assert _ids(assigned) == [(AssetType.phone_line, phone_line.id)]
    assert assigned[0].label == "Line Entel (+56 9 1111 2222)"


def test_phone_line_provider_filter(db, phone_line):
    db.add(PhoneLine(number="+56 9 3333 4444", provider="Movistar"))
    db.commit()
    result = list_assets(db, AssetFilter(provider="Movistar"))
    assert [s.serial for s in result] == ["+56 9 3333 4444"]


def test_latest_record_tie_break_by_id(db, org, phone_line):
    when = datetime(2024, 1, 1, tzinfo=timezone.utc)
    _ledger(db, phone_line, ActionType.assignment, org.analyst.id, when)
    _ledger(db, phone_line, ActionType.return_, org.analyst.id, when)
    latest = ledger_service.latest_record(db, AssetRef(AssetType.phone_line, phone_line.id))
    assert latest.action_type == ActionType.return_
    assert current_holder(db, AssetRef(AssetType.phone_line, phone_line.id)) is None


def test_pointer_and_ledger_agree(db, org, computer, device, phone_line):
    user = TargetRef(TargetType.user, org.analyst.id)
    for ref in (
        AssetRef(AssetType.computer, computer.id),
        AssetRef(AssetType.device, device.id),
        AssetRef(AssetType.phone_line, phone_line.id),
    ):
        transition_service.assign(db, ref, user)
        latest = ledger_service.latest_record(db, ref)
        assert latest.action_type == ActionType.assignment
        assert current_holder(db, ref) == TargetRef(latest.target_type, latest.target_id)

    transition_service.unassign(db, AssetRef(AssetType.device, device.id))
    db.refresh(device)
    assert device.held_by_user_id is None
    assert ledger_service.latest_record(db, AssetRef(AssetType.device, device.id)).action_type == ActionType.return_


def test_exclusivity(db, org, computer, device, phone_line):
    transition_service.assign(db, AssetRef(AssetType.computer, computer.id), TargetRef(TargetType.user, org.analyst.id))
    transition_service.assign(db, AssetRef(AssetType.phone_line, phone_line.id), TargetRef(TargetType.department, org.it.id))

    available = set(_ids(list_assets(db, AssetFilter(state="available"))))
    assigned = set(_ids(list_assets(db, AssetFilter(state="assigned"))))
    assert available.isdisjoint(assigned)
    assert available | assigned == {
        (AssetType.computer, computer.id), (AssetType.device, device.id), (AssetType.phone_line, phone_line.id),
    }


def test_reads_are_idempotent(db, org, computer, phone_line):
    transition_service.assign(db, AssetRef(AssetType.phone_line, phone_line.id), TargetRef(TargetType.user, org.analyst.id))
    f = AssetFilter(state="assigned")
    assert list_assets(db, f) == list_assets(db, f)
    f = AssetFilter(state="available")
    assert list_assets(db, f) == list_assets(db, f)


def test_assets_held_by(db, org, computer, device, phone_line):
    user = TargetRef(TargetType.user, org.analyst.id)
    transition_service.assign(db, AssetRef(AssetType.computer, computer.id), user)
    transition_service.assign(db, AssetRef(AssetType.phone_line, phone_line.id), user)
    transition_service.assign(db, AssetRef(AssetType.device, device.id), TargetRef(TargetType.department, org.it.id))

    assert _ids(assets_held_by(db, user)) == [
        (AssetType.computer, computer.id), (AssetType.phone_line, phone_line.id),
    ]
    assert _ids(assets_held_by(db, TargetRef(TargetType.department, org.it.id))) == [(AssetType.device, device.id)]


# ─── Default manager ─────────────────────────────────────────────────────────

def test_default_manager_for_department(db, org):
    manager = manager_service.default_manager(db, TargetRef(TargetType.department, org.it.id))
    assert manager.id == org.cfo.id


def test_default_manager_for_user(db, org):
    manager = manager_service.default_manager(db, TargetRef(TargetType.user, org.analyst.id))
    assert manager.id == org.cfo.id


def test_managers_report_to_general_manager(db, org):
    manager = manager_service.default_manager(db, TargetRef(TargetType.user, org.cfo.id))
    assert manager.id == org.ceo.id


def test_default_manager_unknown_target(db, org):
    with pytest.raises(NotFound):
        manager_service.default_manager(db, TargetRef(TargetType.user, 999))
