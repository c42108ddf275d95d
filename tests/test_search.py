from search import display_text, filter_by_field, filter_records, format_number, matches

ITEMS = [
    {'itemCode': 'MED001', 'itemName': 'Paracetamol 500mg', 'category': 'Medicine'},
    {'itemCode': 'SUP001', 'itemName': 'Bandages', 'category': 'Supplies'},
    {'itemCode': 'EQP001', 'itemName': 'Surgical Gloves', 'category': 'Equipment'},
]


def text_of(record):
    return display_text(record, ('itemCode', 'itemName', 'category'))


def test_substring_filter_ignores_case():
    assert filter_records(ITEMS, 'PARACET', text_of) == ITEMS[:1]
    assert filter_records(ITEMS, 'sup', text_of) == ITEMS[1:2]
    assert filter_records(ITEMS, 'xray', text_of) == []


def test_empty_term_returns_everything():
    assert filter_records(ITEMS, '', text_of) == ITEMS
    assert filter_records(ITEMS, None, text_of) == ITEMS
    assert matches('anything', '')


def test_category_filter_is_exact():
    assert filter_by_field(ITEMS, 'category', 'Medicine') == ITEMS[:1]
    assert filter_by_field(ITEMS, 'category', 'medicine') == []
    assert filter_by_field(ITEMS, 'category', '') == ITEMS


def test_display_text_skips_missing_fields():
    assert display_text({'a': 'x', 'b': None, 'c': 3}, ('a', 'b', 'c', 'd')) == 'x 3'


def test_store_filters_compose(hospital):
    for code, name, category, stock in [
        ('MED001', 'Paracetamol 500mg', 'Medicine', '25'),
        ('MED002', 'Antiseptic Solution', 'Medicine', '12'),
        ('SUP001', 'Antiseptic Wipes', 'Supplies', '8'),
    ]:
        hospital.inventory.create({'itemCode': code, 'itemName': name, 'category': category,
                                   'currentStock': stock, 'minStock': '10', 'unitPrice': '1'})

    found = hospital.inventory.query('antiseptic', 'Medicine')
    assert [i['itemCode'] for i in found] == ['MED002']
    assert len(hospital.inventory.query('antiseptic')) == 2
    assert len(hospital.inventory.filter_by_category('Supplies')) == 1


def test_patient_search_covers_displayed_columns(hospital, jane):
    hospital.patients.create(jane)
    hospital.patients.create({**jane, 'firstName': 'Mark', 'lastName': 'Stone', 'phone': '555-0199'})

    assert [p['firstName'] for p in hospital.patients.search('pat0001')] == ['Jane']
    assert [p['firstName'] for p in hospital.patients.search('0199')] == ['Mark']
    assert len(hospital.patients.search('')) == 2


def test_inventory_search_matches_price_and_update_date(hospital, gauze):
    item = hospital.inventory.create(gauze)
    updated_on = item['lastUpdated'][:10]

    assert len(hospital.inventory.search('$2.5')) == 1
    assert len(hospital.inventory.search(updated_on)) == 1
    assert hospital.inventory.search('$3') == []


def test_whole_prices_read_without_decimals(hospital):
    assert [s['serviceCode'] for s in hospital.services.search('$50')] == ['CONS001']

    hospital.services.create({'serviceCode': 'ECG001', 'serviceName': 'ECG', 'price': '40', 'duration': '25'})
    assert [s['serviceCode'] for s in hospital.services.search('$40')] == ['ECG001']
    assert hospital.services.search('40.0') == []


def test_format_number():
    assert format_number(50.0) == '50'
    assert format_number(2.5) == '2.5'
    assert format_number(7) == '7'
    assert format_number('PAT0001') == 'PAT0001'
