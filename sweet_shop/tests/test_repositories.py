# -*- coding: utf-8 -*-
"""
Tests de los repositorios JSON: persistencia, transacciones y stock concurrente.
"""
import json
import os
import threading

from sweet_shop.models import new_id, utc_now
from sweet_shop.repositories import SweetRepository, UserRepository


def _sweet(quantity=10, name='Toffee'):
    now = utc_now()
    return {
        'id': new_id(), 'name': name, 'category': 'candy', 'price': 1.0,
        'quantity': quantity, 'description': None, 'image_url': None,
        'created_at': now, 'updated_at': now,
    }


def test_repository_creates_missing_file(tmp_path):
    base = tmp_path / 'nested' / 'data'
    repo = SweetRepository(str(base))
    assert os.path.exists(repo.file_path)
    assert repo.count() == 0


def test_corrupt_file_reads_as_empty(tmp_path):
    repo = SweetRepository(str(tmp_path))
    with open(repo.file_path, 'w', encoding='utf-8') as f:
        f.write('{not json')
    assert repo.list_sweets() == []


def test_data_survives_new_instance(tmp_path):
    record = _sweet()
    SweetRepository(str(tmp_path)).create_sweet(record)
    assert SweetRepository(str(tmp_path)).get_sweet(record['id']) == record


def test_list_is_newest_first_and_returns_copies(tmp_path):
    repo = SweetRepository(str(tmp_path))
    first, second = _sweet(name='A'), _sweet(name='B')
    repo.create_sweet(first)
    repo.create_sweet(second)

    listed = repo.list_sweets()
    assert [r['name'] for r in listed] == ['B', 'A']
    listed[0]['quantity'] = 999
    assert repo.get_sweet(second['id'])['quantity'] == 10


def test_apply_quantity_delta(tmp_path):
    repo = SweetRepository(str(tmp_path))
    record = _sweet(quantity=5)
    repo.create_sweet(record)

    updated, applied = repo.apply_quantity_delta(record['id'], -5, 'later')
    assert applied and updated['quantity'] == 0 and updated['updated_at'] == 'later'

    unchanged, applied = repo.apply_quantity_delta(record['id'], -1, 'even-later')
    assert not applied
    assert unchanged['quantity'] == 0
    assert unchanged['updated_at'] == 'later'

    assert repo.apply_quantity_delta('f' * 32, 1, 'x') == (None, False)


def test_concurrent_purchases_never_oversell(tmp_path):
    repo = SweetRepository(str(tmp_path))
    record = _sweet(quantity=20)
    repo.create_sweet(record)

    results = []
    lock = threading.Lock()

    def buy():
        _, applied = repo.apply_quantity_delta(record['id'], -3, utc_now())
        with lock:
            results.append(applied)

    threads = [threading.Thread(target=buy) for _ in range(12)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 6
    assert repo.get_sweet(record['id'])['quantity'] == 2


def test_update_and_delete_missing_record(tmp_path):
    repo = SweetRepository(str(tmp_path))
    assert repo.update_sweet('f' * 32, {'name': 'x'}) is None
    assert repo.delete_sweet('f' * 32) is None


def test_user_email_uniqueness_checked_on_create(tmp_path):
    repo = UserRepository(str(tmp_path))
    record = {'id': new_id(), 'email': 'a@b.com', 'password': 'h', 'name': 'A', 'role': 'user'}
    assert repo.create_user(record) is True
    assert repo.create_user(dict(record, id=new_id())) is False
    assert repo.count() == 1

    with open(repo.file_path, 'r', encoding='utf-8') as f:
        assert list(json.load(f)) == [record['id']]
