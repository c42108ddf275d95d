import random
from datetime import date

from stats import (appointment_stats, calculate_age, dashboard_stats, inventory_alerts,
                   inventory_stats, lab_stats, to_date, week_bounds)

WEDNESDAY = date(2026, 10, 21)


def item(stock, minimum, name='Item'):
    return {'itemName': name, 'currentStock': stock, 'minStock': minimum}


def appointment(day, status='scheduled'):
    return {'date': day, 'status': status}


def test_inventory_stats_on_empty_and_all_zero_inventories():
    assert inventory_stats([]) == {'totalItems': 0, 'lowStock': 0, 'outOfStock': 0}
    zeros = [item(0, 0) for _ in range(4)]
    assert inventory_stats(zeros) == {'totalItems': 4, 'lowStock': 4, 'outOfStock': 4}


def test_low_stock_count_matches_generated_inventories():
    rng = random.Random(7)
    for _ in range(50):
        items = [item(rng.randint(0, 20), rng.randint(0, 20)) for _ in range(rng.randint(0, 30))]
        expected = len([i for i in items if i['currentStock'] <= i['minStock']])
        assert inventory_stats(items)['lowStock'] == expected


def test_inventory_alerts_rank_critical_first():
    items = [
        item(8, 10, 'Bandages'),
        item(20, 10, 'Gloves'),
        item(0, 5, 'Syringes'),
        item(3, 10, 'Saline'),
    ]

    alerts = inventory_alerts(items)

    assert [a['item'] for a in alerts] == ['Syringes', 'Saline', 'Bandages']
    assert [a['type'] for a in alerts] == ['critical', 'critical', 'warning']
    assert alerts[-1]['message'] == 'WARNING: Bandages is running low (8 remaining)'


def test_week_starts_on_sunday():
    assert week_bounds(WEDNESDAY) == (date(2026, 10, 18), date(2026, 10, 24))
    sunday = date(2026, 10, 18)
    assert week_bounds(sunday) == (sunday, date(2026, 10, 24))


def test_weekly_count_includes_sunday_boundary_and_excludes_day_after_end():
    appointments = [
        appointment('2026-10-17'),  # Saturday before
        appointment('2026-10-18'),  # Sunday boundary
        appointment('2026-10-24'),  # Saturday end
        appointment('2026-10-25'),  # day after the window
    ]
    assert appointment_stats(appointments, WEDNESDAY)['thisWeek'] == 2


def test_appointment_counts_for_today():
    appointments = [
        appointment('2026-10-21'),
        appointment('2026-10-21T15:00:00', status='cancelled'),
        appointment('2026-10-20', status='cancelled'),
        appointment('not a date'),
        appointment(None),
    ]

    stats = appointment_stats(appointments, WEDNESDAY)

    assert stats == {'today': 2, 'thisWeek': 3, 'cancelledToday': 1}


def test_lab_stats():
    tests = [
        {'status': 'pending', 'price': 15.0},
        {'status': 'pending', 'price': 25.0},
        {'status': 'completed', 'price': 35.0, 'dateCompleted': '2026-10-21T09:30:00'},
        {'status': 'completed', 'price': 25.0, 'dateCompleted': '2026-10-01T09:30:00'},
        {'status': 'cancelled', 'price': 99.0},
    ]

    assert lab_stats(tests, WEDNESDAY) == {'pending': 2, 'completedToday': 1, 'revenue': 60.0}


def test_dashboard_delegates_to_collection_stats():
    stats = dashboard_stats(
        patients=[{'id': 1}, {'id': 2}],
        appointments=[appointment('2026-10-21'), appointment('2026-10-22')],
        lab_tests=[{'status': 'pending'}],
        inventory=[item(1, 5), item(9, 5)],
        today=WEDNESDAY,
    )
    assert stats == {'totalPatients': 2, 'todayAppointments': 1, 'pendingTests': 1, 'lowStockItems': 1}


def test_calculate_age_counts_birthdays():
    assert calculate_age('1990-10-21', WEDNESDAY) == 36
    assert calculate_age('1990-10-22', WEDNESDAY) == 35
    assert calculate_age('', WEDNESDAY) is None


def test_to_date():
    assert to_date('2026-10-21') == WEDNESDAY
    assert to_date('2026-10-21T23:10:00.000') == WEDNESDAY
    assert to_date(WEDNESDAY) == WEDNESDAY
    assert to_date('21/10/2026') is None
