import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from catalog.product_service import map_database_to_ui, map_ui_to_database


def test_remote_record_to_ui():
    rec = {
        'Id': 7,
        'title_c': 'Tee',
        'price_c': 19.5,
        'image_c': 'https://img/7.png',
        'category_c': 'Shirts',
        'in_stock_c': True,
        'description_c': 'Cotton',
    }
    assert map_database_to_ui(rec) == {
        'id': 7,
        'title': 'Tee',
        'price': 19.5,
        'image': 'https://img/7.png',
        'category': 'Shirts',
        'in_stock': True,
        'description': 'Cotton',
    }


def test_missing_fields_get_defaults():
    ui = map_database_to_ui({'Id': 3})
    assert ui == {
        'id': 3,
        'title': '',
        'price': 0,
        'image': '',
        'category': '',
        'in_stock': False,
        'description': '',
    }


def test_null_record_maps_to_none():
    assert map_database_to_ui(None) is None


def test_empty_record_is_fully_defaulted():
    assert map_database_to_ui({}) == {
        'id': None,
        'title': '',
        'price': 0,
        'image': '',
        'category': '',
        'in_stock': False,
        'description': '',
    }


def test_empty_ui_maps_to_empty():
    assert map_ui_to_database({}) == {}


def test_partial_ui_only_maps_given_keys():
    assert map_ui_to_database({'price': 0, 'in_stock': False}) == {
        'price_c': 0,
        'in_stock_c': False,
    }
    # explicit None still counts as provided
    assert map_ui_to_database({'title': None}) == {'title_c': None}


def test_ui_round_trip_keeps_supplied_fields():
    ui = {'title': 'Mug', 'price': 8, 'category': 'Kitchen', 'in_stock': True}
    back = map_database_to_ui({'Id': 1, **map_ui_to_database(ui)})
    for key, value in ui.items():
        assert back[key] == value
