"""
Derived statistics for the dashboard widgets.

- Inventory totals and low / out of stock counts
- Lab test workload and revenue
- Appointment counts for today and the current week
- Inventory alerts

Everything here is recomputed from the collection passed in; nothing is
cached or persisted.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional


def to_date(value) -> Optional[date]:
    """Reduce a stored date or ISO timestamp to a local calendar date."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    else:
        s = str(value).strip()
        if s.endswith('Z'):
            s = s[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.date()


def calculate_age(birth_date, today: Optional[date] = None) -> Optional[int]:
    birth = to_date(birth_date)
    if birth is None:
        return None
    today = today or date.today()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def week_bounds(today: Optional[date] = None):
    """Sunday through Saturday of the week containing *today*."""
    today = today or date.today()
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


# ---------------- INVENTORY ----------------
def is_low_stock(item: Dict) -> bool:
    stock, minimum = item.get('currentStock'), item.get('minStock')
    if stock is None or minimum is None:
        return False
    return stock <= minimum


def is_out_of_stock(item: Dict) -> bool:
    return item.get('currentStock') == 0


def inventory_stats(items: List[Dict]) -> Dict:
    return {
        'totalItems': len(items),
        'lowStock': sum(1 for item in items if is_low_stock(item)),
        'outOfStock': sum(1 for item in items if is_out_of_stock(item)),
    }


class InventoryAlertSystem:
    """Inventory alerts for items at or below their minimum stock"""

    def __init__(self, critical_ratio: float = 0.5):
        self.critical_ratio = critical_ratio

    def _level(self, item: Dict) -> str:
        stock, minimum = item['currentStock'], item['minStock']
        if stock == 0 or stock <= minimum * self.critical_ratio:
            return 'critical'
        return 'warning'

    def check_alerts(self, items: List[Dict]) -> List[Dict]:
        alerts = []
        for item in items:
            if not is_low_stock(item):
                continue
            name = item.get('itemName', 'Unknown')
            stock = item['currentStock']
            level = self._level(item)
            if level == 'critical':
                message = f'CRITICAL: {name} is running very low ({stock} remaining)'
            else:
                message = f'WARNING: {name} is running low ({stock} remaining)'
            alerts.append({
                'type': level,
                'id': item.get('id'),
                'itemCode': item.get('itemCode'),
                'item': name,
                'currentStock': stock,
                'minStock': item['minStock'],
                'message': message,
                'priority': 'high' if level == 'critical' else 'medium',
            })
        # critical first, keep collection order within a level
        alerts.sort(key=lambda a: 0 if a['type'] == 'critical' else 1)
        return alerts


def inventory_alerts(items: List[Dict]) -> List[Dict]:
    return InventoryAlertSystem().check_alerts(items)


# ---------------- LAB ----------------
def _price(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def lab_stats(tests: List[Dict], today: Optional[date] = None) -> Dict:
    today = today or date.today()
    completed = [t for t in tests if t.get('status') == 'completed']
    return {
        'pending': sum(1 for t in tests if t.get('status') == 'pending'),
        'completedToday': sum(1 for t in completed if to_date(t.get('dateCompleted')) == today),
        'revenue': sum(_price(t.get('price')) for t in completed),
    }


# ---------------- APPOINTMENTS ----------------
def appointment_stats(appointments: List[Dict], today: Optional[date] = None) -> Dict:
    today = today or date.today()
    start, end = week_bounds(today)
    dates = [(to_date(a.get('date')), a.get('status')) for a in appointments]
    return {
        'today': sum(1 for d, _ in dates if d == today),
        'thisWeek': sum(1 for d, _ in dates if d is not None and start <= d <= end),
        'cancelledToday': sum(1 for d, status in dates if status == 'cancelled' and d == today),
    }


# ---------------- DASHBOARD ----------------
def dashboard_stats(patients: List[Dict], appointments: List[Dict], lab_tests: List[Dict],
                    inventory: List[Dict], today: Optional[date] = None) -> Dict:
    return {
        'totalPatients': len(patients),
        'todayAppointments': appointment_stats(appointments, today)['today'],
        'pendingTests': lab_stats(lab_tests, today)['pending'],
        'lowStockItems': inventory_stats(inventory)['lowStock'],
    }
