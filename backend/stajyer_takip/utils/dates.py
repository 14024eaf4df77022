# stajyer_takip/utils/dates.py
"""Tarih anahtarları ve Türkçe tarih biçimleri."""
from datetime import date, datetime, timedelta
from typing import List, Optional, Union
from zoneinfo import ZoneInfo

TR_MONTHS = [
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
]
TR_MONTHS_SHORT = [
    "Oca", "Şub", "Mar", "Nis", "May", "Haz",
    "Tem", "Ağu", "Eyl", "Eki", "Kas", "Ara",
]

DateLike = Union[str, date, datetime, None]


def today_in(tz_name: str) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def to_date(value: DateLike, tz_name: Optional[str] = None) -> Optional[date]:
    """
    'YYYY-MM-DD', tam ISO datetime ('...T...Z' dahil), date veya datetime kabul eder.
    Saat dilimli değerler `tz_name` gününe çevrilir. Okunamayan değer → None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    else:
        text = str(value).strip()
        try:
            if "T" not in text and len(text) == 10:
                return date.fromisoformat(text)
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is not None and tz_name:
        dt = dt.astimezone(ZoneInfo(tz_name))
    return dt.date()


def date_key(value: DateLike, tz_name: Optional[str] = None) -> str:
    d = to_date(value, tz_name)
    return d.isoformat() if d else ""


def timeline_keys(days: int, today: date) -> List[str]:
    """`days` adet gün anahtarı, eskiden yeniye, bugünle biter."""
    return [(today - timedelta(days=i)).isoformat() for i in range(days - 1, -1, -1)]


def format_long(value: DateLike, tz_name: Optional[str] = None) -> str:
    """1 Haziran 2024"""
    d = to_date(value, tz_name)
    if not d:
        return ""
    return f"{d.day} {TR_MONTHS[d.month - 1]} {d.year}"


def format_short(value: DateLike, tz_name: Optional[str] = None, with_year: bool = True) -> str:
    """1 Haz 2024 / 1 Haz"""
    d = to_date(value, tz_name)
    if not d:
        return ""
    label = f"{d.day} {TR_MONTHS_SHORT[d.month - 1]}"
    return f"{label} {d.year}" if with_year else label
