from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select

from app.api.models.doctor import Doctor
from app.api.models.schedule import Schedule
from app.api.services.roster_service import RosterService
from app.core.exceptions import NotAuthenticated, NotFound, NotOwnedError, StorageError, ValidationFailed
from app.schemas.doctor import DoctorIn
from app.schemas.schedule import ServiceSlot


def schedule_rows(db, doctor_id):
    db.expire_all()
    return db.execute(
        select(Schedule).where(Schedule.doctor_id == doctor_id).order_by(Schedule.id)
    ).scalars().all()


def slot(neighborhood_id, days, place="Clínica A", start="08:00", end="12:00"):
    return ServiceSlot(place_name=place, neighborhood_id=neighborhood_id, days_of_week=days,
                       start_time=start, end_time=end)


def doctor_in(specialty_id, slots=None, **fields):
    data = {"name": "Carlos Souza", "crm": "12345-MG", "phone": "", "specialty_id": specialty_id}
    data.update(fields)
    return DoctorIn(slots=slots or [], **data)


# =========================
# validação
# =========================
def test_missing_name_fails_before_touching_storage():
    db = MagicMock()

    with pytest.raises(ValidationFailed) as exc:
        RosterService.save_doctor(db, 1, DoctorIn(name="  ", specialty_id=1))

    assert exc.value.errors == {"name": "Nome é obrigatório"}
    assert db.method_calls == []


def test_missing_specialty_fails_before_touching_storage():
    db = MagicMock()

    with pytest.raises(ValidationFailed) as exc:
        RosterService.save_doctor(db, 1, DoctorIn(name="Carlos"))

    assert "specialty" in exc.value.errors
    assert db.method_calls == []


def test_invalid_days_and_times_fail_before_touching_storage():
    db = MagicMock()
    data = doctor_in(1, [slot(3, ["feriado", "domingo"], start="banana", end="xx")])

    with pytest.raises(ValidationFailed) as exc:
        RosterService.save_doctor(db, 1, data)

    assert set(exc.value.errors) == {"days_of_week", "start_time", "end_time"}
    assert db.method_calls == []


def test_invalid_day_leaves_existing_schedules_alone(db, user, specialty, centro):
    doctor_id = RosterService.save_doctor(db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda"])]))

    with pytest.raises(ValidationFailed):
        RosterService.save_doctor(db, user.id, doctor_in(specialty.id, [slot(centro.id, ["feriado"])]),
                                  doctor_id=doctor_id)

    assert [r.day_of_week for r in schedule_rows(db, doctor_id)] == ["segunda"]


def test_unknown_specialty_is_a_validation_error(db, user):
    with pytest.raises(ValidationFailed) as exc:
        RosterService.save_doctor(db, user.id, doctor_in(999))

    assert exc.value.errors == {"specialty": "Selecione uma especialidade válida"}
    assert db.execute(select(func.count(Doctor.id))).scalar() == 0


def test_save_requires_account(db, specialty):
    with pytest.raises(NotAuthenticated):
        RosterService.save_doctor(db, None, doctor_in(specialty.id))


# =========================
# criação
# =========================
def test_create_inserts_doctor_and_expanded_rows(db, user, specialty, centro):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda", "quarta"])])
    )

    doctor = db.get(Doctor, doctor_id)
    assert doctor.user_id == user.id
    assert doctor.name == "Carlos Souza"

    rows = schedule_rows(db, doctor_id)
    assert [r.day_of_week for r in rows] == ["segunda", "quarta"]
    assert all(r.user_id == user.id for r in rows)
    assert all(r.neighborhood_id == centro.id for r in rows)


def test_create_defaults_avatar_to_initials_and_masks_phone(db, user, specialty):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, name=" maria clara silva ", phone="31987654321")
    )

    doctor = db.get(Doctor, doctor_id)
    assert doctor.name == "maria clara silva"
    assert doctor.avatar_url == "MC"
    assert doctor.phone == "(31) 98765-4321"


def test_create_keeps_uploaded_avatar_url(db, user, specialty):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, avatar_url="http://cdn/avatars/1.png")
    )

    assert db.get(Doctor, doctor_id).avatar_url == "http://cdn/avatars/1.png"


def test_create_skips_incomplete_slots(db, user, specialty, centro):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(None, ["segunda"]), slot(centro.id, ["terça"], place="")])
    )

    assert schedule_rows(db, doctor_id) == []


# =========================
# edição (substituição completa)
# =========================
def test_edit_round_trip_does_not_duplicate_rows(db, user, specialty, centro):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda"]), slot(centro.id, ["terça"])])
    )
    assert len(schedule_rows(db, doctor_id)) == 2

    form = RosterService.load_for_edit(db, user.id, doctor_id)
    assert len(form.slots) == 1
    assert form.slots[0].days_of_week == ["segunda", "terça"]

    payload = DoctorIn(
        name=form.name, crm=form.crm, phone=form.phone, specialty_id=form.specialty_id,
        avatar_url=form.avatar_url, slots=form.slots,
    )
    for _ in range(3):
        RosterService.save_doctor(db, user.id, payload, doctor_id=doctor_id)

    rows = schedule_rows(db, doctor_id)
    assert sorted(r.day_of_week for r in rows) == ["segunda", "terça"]


def test_saving_zero_slots_removes_every_row(db, user, specialty, centro):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda", "sexta"])])
    )

    RosterService.save_doctor(db, user.id, doctor_in(specialty.id, []), doctor_id=doctor_id)

    assert schedule_rows(db, doctor_id) == []


def test_update_changes_fields_and_replaces_rows(db, user, specialty, centro, savassi):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda"])])
    )

    RosterService.save_doctor(
        db, user.id,
        doctor_in(specialty.id, [slot(savassi.id, ["sábado"], place="Hospital B")], name="Carlos S."),
        doctor_id=doctor_id,
    )

    db.expire_all()
    assert db.get(Doctor, doctor_id).name == "Carlos S."
    rows = schedule_rows(db, doctor_id)
    assert [(r.place_name, r.neighborhood_id, r.day_of_week) for r in rows] == [("Hospital B", savassi.id, "sábado")]


def test_update_of_someone_elses_doctor_is_rejected(db, user, other_user, specialty, centro):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda"])])
    )

    with pytest.raises(NotOwnedError):
        RosterService.save_doctor(db, other_user.id, doctor_in(specialty.id, [], name="Invasor"), doctor_id=doctor_id)

    db.expire_all()
    assert db.get(Doctor, doctor_id).name == "Carlos Souza"
    assert len(schedule_rows(db, doctor_id)) == 1


def test_failed_insert_rolls_back_the_whole_save(db, user, specialty, centro):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda", "terça"])])
    )

    # bairro inexistente: a FK falha no insert, depois do update e do delete
    with pytest.raises(StorageError) as exc:
        RosterService.save_doctor(
            db, user.id, doctor_in(specialty.id, [slot(9999, ["sexta"])], name="Outro Nome"), doctor_id=doctor_id
        )

    assert exc.value.message.startswith("Erro ao atualizar agendamentos (insert)")

    db.expire_all()
    assert db.get(Doctor, doctor_id).name == "Carlos Souza"
    assert sorted(r.day_of_week for r in schedule_rows(db, doctor_id)) == ["segunda", "terça"]


# =========================
# exclusão / carga
# =========================
def test_delete_cascades_to_schedule_rows(db, user, specialty, centro):
    doctor_id = RosterService.save_doctor(
        db, user.id, doctor_in(specialty.id, [slot(centro.id, ["segunda", "terça"])])
    )

    RosterService.delete_doctor(db, user.id, doctor_id)

    assert db.get(Doctor, doctor_id) is None
    assert schedule_rows(db, doctor_id) == []


def test_delete_of_someone_elses_doctor_is_rejected(db, user, other_user, specialty):
    doctor_id = RosterService.save_doctor(db, user.id, doctor_in(specialty.id))

    with pytest.raises(NotOwnedError):
        RosterService.delete_doctor(db, other_user.id, doctor_id)

    assert db.get(Doctor, doctor_id) is not None


def test_load_for_edit_without_rows_gives_blank_slot(db, user, specialty):
    doctor_id = RosterService.save_doctor(db, user.id, doctor_in(specialty.id))

    form = RosterService.load_for_edit(db, user.id, doctor_id)

    assert len(form.slots) == 1
    assert form.slots[0].place_name == ""
    assert form.slots[0].days_of_week == []


def test_load_for_edit_is_owner_scoped(db, user, other_user, specialty):
    doctor_id = RosterService.save_doctor(db, user.id, doctor_in(specialty.id))

    with pytest.raises(NotFound):
        RosterService.load_for_edit(db, other_user.id, doctor_id)
