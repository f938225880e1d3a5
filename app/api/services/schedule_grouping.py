"""
Conversão entre as linhas gravadas (uma por dia da semana) e os slots do formulário
(um por local + bairro + faixa de horário, com a lista de dias).

Toda tela que agrupa horários passa por aqui; a chave de agrupamento não deve ser
montada em nenhum outro lugar.
"""
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.core.constants import ABREVIACAO_DIAS, DIAS_SEMANA, MAPA_DIAS_SEMANA
from app.schemas.schedule import ServiceSlot, SlotView

MergeKey = Tuple[str, Optional[int], str, str]

# "08:00" ou "08:00:00" (como o banco devolve)
HORARIO_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


def _get(obj: Any, field: str, default=None):
    # aceita linhas do ORM, schemas pydantic ou dicts crus
    if isinstance(obj, dict):
        return obj.get(field, default)
    return getattr(obj, field, default)


def normalize_place(place_name: Optional[str]) -> str:
    return (place_name or "").strip()


def normalize_day(day: Optional[str]) -> str:
    return (day or "").strip().lower()


def truncate_time(value: Any) -> str:
    """ "08:00:00" -> "08:00". Aceita também datetime.time. """
    if value is None:
        return ""
    return str(value).strip()[:5]


def merge_key(place_name, neighborhood_id, start_time, end_time) -> MergeKey:
    return (
        normalize_place(place_name),
        neighborhood_id,
        truncate_time(start_time),
        truncate_time(end_time),
    )


def row_key(row: Any) -> MergeKey:
    return merge_key(
        _get(row, "place_name"),
        _get(row, "neighborhood_id"),
        _get(row, "start_time"),
        _get(row, "end_time"),
    )


def sort_days(days: Iterable[str]) -> List[str]:
    # dias fora da tabela vão para o fim, na ordem em que chegaram
    def rank(day: str) -> int:
        d = normalize_day(day)
        return MAPA_DIAS_SEMANA.get(d, len(MAPA_DIAS_SEMANA))

    return sorted(dict.fromkeys(days), key=rank)


def collapse(rows: Iterable[Any]) -> List[ServiceSlot]:
    """
    Agrupa as linhas de um médico em slots.

    A chave é (local, bairro, início[:5], fim[:5]); linhas que diferem só nos segundos
    caem no mesmo slot. Dias repetidos entram uma única vez. Nenhuma linha é descartada,
    nem as que não têm bairro (essas agrupam sob None e são filtradas só no expand).
    A ordem dos slots é a da primeira ocorrência de cada chave.
    """
    grouped: Dict[MergeKey, ServiceSlot] = {}

    for row in rows:
        key = row_key(row)
        day = normalize_day(_get(row, "day_of_week"))

        slot = grouped.get(key)
        if slot is None:
            place_name, neighborhood_id, start_time, end_time = key
            grouped[key] = ServiceSlot(
                id=str(len(grouped) + 1),
                place_name=place_name,
                neighborhood_id=neighborhood_id,
                neighborhood_name=_get(row, "neighborhood_name"),
                days_of_week=[day],
                start_time=start_time,
                end_time=end_time,
            )
        elif day not in slot.days_of_week:
            slot.days_of_week.append(day)

    slots = list(grouped.values())
    for slot in slots:
        slot.days_of_week = sort_days(slot.days_of_week)
    return slots


def is_valid_day(day: Optional[str]) -> bool:
    return normalize_day(day) in DIAS_SEMANA


def is_valid_time(value: Any) -> bool:
    if value is None:
        return False
    return bool(HORARIO_RE.match(str(value).strip()))


def slot_errors(slots: Iterable[Any]) -> Dict[str, str]:
    """
    Dias e horários preenchidos que não podem ser gravados.

    Campos vazios não entram aqui: o slot incompleto só é ignorado no expand.
    """
    errors: Dict[str, str] = {}

    for slot in slots:
        days = [d for d in (_get(slot, "days_of_week") or []) if normalize_day(d)]
        if "days_of_week" not in errors and not all(is_valid_day(d) for d in days):
            errors["days_of_week"] = "Dia da semana inválido (use segunda a sábado)"

        for field in ("start_time", "end_time"):
            value = _get(slot, field)
            if field not in errors and str(value or "").strip() and not is_valid_time(value):
                errors[field] = "Horário inválido (use HH:MM)"

    return errors


def is_persistable(row: Dict[str, Any]) -> bool:
    return bool(
        row.get("place_name")
        and row.get("neighborhood_id") is not None
        and is_valid_day(row.get("day_of_week"))
        and is_valid_time(row.get("start_time"))
        and is_valid_time(row.get("end_time"))
    )


def expand(doctor_id: Optional[int], slots: Iterable[Any], user_id: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Gera uma linha por (slot, dia), já normalizada e pronta para o insert.

    Linhas sem local, sem bairro, sem dia válido ou sem horário HH:MM são descartadas. Pares
    (chave, dia) repetidos entre slots saem uma vez só. A ordem início < fim não é validada.
    """
    rows: List[Dict[str, Any]] = []
    seen = set()

    for slot in slots:
        place_name, neighborhood_id, start_time, end_time = row_key(slot)

        for day in _get(slot, "days_of_week") or []:
            row = {
                "doctor_id": doctor_id,
                "place_name": place_name,
                "neighborhood_id": neighborhood_id,
                "day_of_week": normalize_day(day),
                "start_time": start_time,
                "end_time": end_time,
            }
            if user_id is not None:
                row["user_id"] = user_id

            if not is_persistable(row):
                continue

            dedupe_key = (place_name, neighborhood_id, start_time, end_time, row["day_of_week"])
            if dedupe_key in seen:
                continue
            seen.add(dedupe_key)
            rows.append(row)

    return rows


def format_days(days: Iterable[str]) -> str:
    """ ["quarta", "segunda"] -> "Seg, Qua" """
    return ", ".join(ABREVIACAO_DIAS.get(normalize_day(d), d) for d in sort_days(days))


def format_time(value: Any) -> str:
    return truncate_time(value)


def blank_slot() -> ServiceSlot:
    return ServiceSlot(id="1")


def slots_for_form(rows: Iterable[Any]) -> List[ServiceSlot]:
    # o editor nunca abre sem slot para preencher
    return collapse(rows) or [blank_slot()]


def slot_view(slot: ServiceSlot) -> SlotView:
    return SlotView(
        **slot.model_dump(),
        dias=format_days(slot.days_of_week),
        horario=f"{format_time(slot.start_time)} - {format_time(slot.end_time)}",
    )
