# app/api/services/agenda_service.py
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from app.api.services.roster_cache import RosterCache
from app.api.services.schedule_grouping import collapse, normalize_day, slot_view
from app.core.constants import DIAS_SEMANA, NOME_DIAS, TODAS, TODOS
from app.schemas.agenda import AgendaCard, DoctorListOut, HomeFeedOut
from app.schemas.doctor import DoctorDetailOut
from app.schemas.schedule import ScheduleOut, ServiceSlot
from app.schemas.user import ProfileOut


def greeting(hour: int) -> str:
    if hour < 12:
        return "Bom dia"
    if hour < 18:
        return "Boa tarde"
    return "Boa noite"


def group_by_doctor(schedules: Iterable[ScheduleOut]) -> Dict[int, List[ServiceSlot]]:
    """
    Primeiro por médico, depois pela chave de slot dentro de cada médico.

    Linhas idênticas em (local, bairro, início, fim, dia) viram um único dia do slot,
    mesmo que o banco devolva duplicatas.
    """
    by_doctor: "OrderedDict[int, List[ScheduleOut]]" = OrderedDict()
    for s in schedules:
        by_doctor.setdefault(s.doctor_id, []).append(s)

    return {doctor_id: collapse(rows) for doctor_id, rows in by_doctor.items()}


def _is_all(value: Optional[str], sentinel: str) -> bool:
    return not value or value == sentinel


def _slot_matches(slot: ServiceSlot, day: Optional[str], neighborhood: Optional[str]) -> bool:
    if not _is_all(day, TODOS) and normalize_day(day) not in slot.days_of_week:
        return False
    if not _is_all(neighborhood, TODOS) and slot.neighborhood_name != neighborhood:
        return False
    return True


def neighborhood_options(cache: RosterCache) -> List[str]:
    names = [n.name for n in cache.neighborhoods]
    if not names:
        # sem tabela global: usa o que aparece nos horários carregados
        names = list({s.neighborhood_name for s in cache.schedules if s.neighborhood_name})
    return [TODOS] + sorted(names)


def specialty_options(cache: RosterCache) -> List[str]:
    names = [s.name for s in cache.specialties]
    if not names:
        names = list({d.specialty_name for d in cache.doctors if d.specialty_name})
    return [TODAS] + sorted(names)


def day_options() -> List[str]:
    return [NOME_DIAS[d] for d in DIAS_SEMANA]


def home_feed(
    cache: RosterCache,
    day: Optional[str] = None,
    neighborhood: Optional[str] = None,
    hour: int = 12,
    profile: Optional[ProfileOut] = None,
) -> HomeFeedOut:
    """Tela inicial: um card por (médico, slot), filtrado por dia e bairro."""
    cards: List[AgendaCard] = []
    slots_by_doctor = group_by_doctor(cache.schedules)

    for doctor in cache.doctors:
        for slot in slots_by_doctor.get(doctor.id, []):
            if _slot_matches(slot, day, neighborhood):
                cards.append(AgendaCard(doctor=doctor, slot=slot_view(slot)))

    return HomeFeedOut(
        greeting=greeting(hour),
        profile=profile,
        dias=day_options(),
        bairros=neighborhood_options(cache),
        total=len(cards),
        cards=cards,
    )


def doctor_detail(cache: RosterCache, doctor_id: int) -> Optional[DoctorDetailOut]:
    doctor = cache.get_doctor(doctor_id)
    if doctor is None:
        return None
    slots = collapse(cache.schedules_for(doctor_id))
    return DoctorDetailOut(**doctor.model_dump(), slots=[slot_view(s) for s in slots])


def doctor_list(
    cache: RosterCache,
    search: Optional[str] = None,
    specialty: Optional[str] = None,
    neighborhood: Optional[str] = None,
) -> DoctorListOut:
    """Lista de médicos: exatamente um card por médico, com todos os slots dele."""
    slots_by_doctor = group_by_doctor(cache.schedules)
    query = (search or "").strip().lower()

    result: "OrderedDict[int, DoctorDetailOut]" = OrderedDict()
    for doctor in cache.doctors:
        if doctor.id in result:
            continue

        slots = slots_by_doctor.get(doctor.id, [])

        if query and not (
            query in doctor.name.lower()
            or query in (doctor.specialty_name or "").lower()
            or query in (doctor.crm or "").lower()
        ):
            continue

        if not _is_all(specialty, TODAS) and doctor.specialty_name != specialty:
            continue

        if not _is_all(neighborhood, TODOS) and not any(s.neighborhood_name == neighborhood for s in slots):
            continue

        result[doctor.id] = DoctorDetailOut(**doctor.model_dump(), slots=[slot_view(s) for s in slots])

    doctors = list(result.values())
    return DoctorListOut(
        especialidades=specialty_options(cache),
        bairros=neighborhood_options(cache),
        total=len(doctors),
        doctors=doctors,
    )
