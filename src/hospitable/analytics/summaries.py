"""
Unique-value extraction and financial aggregation

All functions accept either an entity list or a response envelope.
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple, Union

from .accessors import Entities, as_number, get_nested, unique_sorted, unwrap
from .filters import reservation_revenue, reservation_status


# Properties

def list_amenities(properties: Entities) -> List[str]:
    amenities = []
    for prop in unwrap(properties):
        values = prop.get('amenities')
        if isinstance(values, list):
            amenities.extend(values)
    return unique_sorted(amenities)


def list_property_types(properties: Entities) -> List[str]:
    return unique_sorted(prop.get('property_type') for prop in unwrap(properties))


def list_currencies(properties: Entities) -> List[str]:
    return unique_sorted(prop.get('currency') for prop in unwrap(properties))


# Reservations

def list_platforms(reservations: Entities) -> List[str]:
    return unique_sorted(reservation.get('platform') for reservation in unwrap(reservations))


def list_statuses(reservations: Entities) -> List[str]:
    return unique_sorted(reservation_status(reservation) for reservation in unwrap(reservations))


def total_nights(reservations: Entities) -> int:
    """Sum of ``nights``, missing values counting as 0"""
    return sum(as_number(reservation.get('nights')) for reservation in unwrap(reservations))


def total_revenue(reservations: Entities, currency: Optional[str] = None) -> Union[Dict[str, float], float]:
    """
    Host revenue summed per currency

    Args:
        reservations: Reservation list or envelope
        currency: When given, return only that currency's total (0 if absent)
    """
    totals: Dict[str, float] = {}
    for reservation in unwrap(reservations):
        revenue = reservation_revenue(reservation)
        if revenue is None:
            continue
        code, amount = revenue
        totals[code] = totals.get(code, 0) + amount

    if currency is not None:
        return totals.get(currency, 0)
    return totals


def _amount(financials, *path) -> float:
    return as_number(get_nested(financials, path + ('amount',)))


def _fee_total(financials, *path) -> float:
    fees = get_nested(financials, path, [])
    if not isinstance(fees, list):
        return 0
    return sum(as_number(fee.get('amount')) for fee in fees if isinstance(fee, dict))


def _average(total: float, count: float) -> float:
    return round(total / count, 2) if count > 0 else 0


def financial_summary(reservations: Entities) -> Dict[str, Dict[str, Any]]:
    """
    Per-currency financial totals and averages

    Reservations without ``financials`` are skipped. A reservation with
    financials but no ``nights`` counts as one night.

    Returns:
        ``{currency: {total_revenue, total_guest_fees, total_host_fees,
        total_guest_price, total_nights, reservation_count,
        average_per_night, average_per_reservation}}``
    """
    totals: Dict[str, Dict[str, float]] = {}

    for reservation in unwrap(reservations):
        financials = reservation.get('financials')
        if not isinstance(financials, dict):
            continue

        currency = financials.get('currency') or 'USD'
        nights = reservation.get('nights')
        nights = 1 if nights is None else as_number(nights)

        entry = totals.setdefault(currency, {
            'total_revenue': 0,
            'total_guest_fees': 0,
            'total_host_fees': 0,
            'total_guest_price': 0,
            'total_nights': 0,
            'reservation_count': 0
        })
        entry['total_revenue'] += _amount(financials, 'host', 'revenue')
        entry['total_guest_fees'] += _fee_total(financials, 'guest', 'fees')
        entry['total_host_fees'] += _fee_total(financials, 'host', 'host_fees')
        entry['total_guest_price'] += _amount(financials, 'guest', 'total_price')
        entry['total_nights'] += nights
        entry['reservation_count'] += 1

    for entry in totals.values():
        entry['average_per_night'] = _average(entry['total_revenue'], entry['total_nights'])
        entry['average_per_reservation'] = _average(entry['total_revenue'], entry['reservation_count'])

    return totals


def next_weeks_range(weeks: int = 2, today: Optional[date] = None) -> Tuple[date, date]:
    """(today, today + weeks) as the API's default check-in window"""
    start = today or date.today()
    return start, start + timedelta(weeks=weeks)
