"""Unit tests for record id generation."""

import re

from ledger.application.services.id_generator import current_millis, generate_id


def test_ids_are_lowercase_base36():
    assert re.fullmatch(r"[0-9a-z]{15,}", generate_id())


def test_ids_start_with_the_current_time():
    before = current_millis()
    new_id = generate_id()
    prefix = new_id[:-11]
    assert int(prefix, 36) >= before


def test_ids_do_not_collide_in_bulk():
    ids = {generate_id() for _ in range(5000)}
    assert len(ids) == 5000
