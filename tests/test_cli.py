import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from catalog import create_app
from catalog import product_service as ps
from fakes import FakeClient, record


def make_runner(monkeypatch, **kw):
    client = FakeClient(**kw)
    monkeypatch.setattr(ps, 'get_client', lambda: client)
    app = create_app('development')
    return app.test_cli_runner(), client


def test_list_command(monkeypatch):
    runner, _ = make_runner(monkeypatch, response={'success': True, 'data': [record(1)]})
    result = runner.invoke(args=['catalog', 'list'])
    assert result.exit_code == 0
    assert json.loads(result.output)[0]['title'] == 'Item 1'


def test_show_missing_exits_nonzero(monkeypatch):
    runner, _ = make_runner(monkeypatch, by_id={'success': True, 'data': None})
    result = runner.invoke(args=['catalog', 'show', '12'])
    assert result.exit_code == 1
    assert 'Product 12 not found' in result.output


def test_filter_command_options(monkeypatch):
    runner, client = make_runner(monkeypatch)
    result = runner.invoke(
        args=['catalog', 'filter', '--category', 'Hats', '--sort', 'newest', '--max-price', '50']
    )
    assert result.exit_code == 0
    params = client.last_params
    assert params['orderBy'] == [{'fieldName': 'Id', 'sorttype': 'DESC'}]
    assert len(params['where']) == 3


def test_remote_failure_echoed(monkeypatch):
    runner, _ = make_runner(monkeypatch, response={'success': False, 'message': 'Quota exceeded'})
    result = runner.invoke(args=['catalog', 'featured', '--limit', '2'])
    assert result.exit_code == 0
    assert 'Quota exceeded' in result.output


def test_filter_unknown_sort_falls_back(monkeypatch):
    runner, client = make_runner(monkeypatch)
    result = runner.invoke(args=['catalog', 'filter', '--sort', 'cheapest-first'])
    assert result.exit_code == 0
    assert client.last_params['orderBy'] == [{'fieldName': 'Id', 'sorttype': 'ASC'}]
