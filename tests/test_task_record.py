"""Tests for the one-line task record encoding."""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / 'scripts'))

from task_record import Task, decode_line, encode_task, sanitize_title


def test_encode_full_task():
    task = Task(id=7, title='Renew passport', done=True, priority='H', due='2026-02-01')
    assert encode_task(task) == '7|1|H|2026-02-01|Renew passport'


def test_encode_without_due_uses_dash():
    assert encode_task(Task(id=1, title='Buy milk')) == '1|0|M|-|Buy milk'


def test_encode_sanitizes_title():
    task = Task(id=2, title='a|b\nc\r\nd')
    assert encode_task(task) == '2|0|M|-|a/bcd'


def test_sanitize_title_keeps_other_characters():
    assert sanitize_title('tab\there / ünïcode') == 'tab\there / ünïcode'


def test_decode_full_line():
    task = decode_line('3|1|L|2025-12-31|Call the plumber')
    assert task == Task(id=3, title='Call the plumber', done=True, priority='L', due='2025-12-31')


def test_decode_dash_means_no_due():
    assert decode_line('4|0|H|-|Write report').due is None


def test_decode_done_flag_is_exactly_one():
    assert decode_line('1|1|M|-|x').done is True
    assert decode_line('1|0|M|-|x').done is False
    assert decode_line('1|yes|M|-|x').done is False
    assert decode_line('1|11|M|-|x').done is False


@pytest.mark.parametrize('raw, expected', [
    ('', 'M'),
    ('H', 'H'),
    ('Low', 'L'),
    ('Z', 'M'),
    ('h', 'M'),
])
def test_decode_priority_coercion(raw, expected):
    assert decode_line(f'1|0|{raw}|-|x').priority == expected


def test_decode_due_is_not_revalidated():
    assert decode_line('1|0|M|tomorrow|x').due == 'tomorrow'


def test_decode_skips_blank_lines():
    assert decode_line('') is None
    assert decode_line('   \t ') is None


def test_decode_skips_short_lines():
    assert decode_line('1|0|M|-') is None
    assert decode_line('garbage') is None


def test_decode_skips_non_numeric_id():
    assert decode_line('abc|0|M|-|title') is None


def test_decode_ignores_fields_beyond_title():
    task = decode_line('5|0|M|-|title|extra')
    assert task.title == 'title'


def test_decode_trailing_delimiter_is_a_short_row():
    assert decode_line('5|0|M|-|') is None


def test_decode_empty_title_between_delimiters():
    assert decode_line('5|0|M|-||').title == ''


def test_round_trip_is_lossy_only_on_title():
    original = Task(id=9, title='ship v1 | v2\nnow', done=False, priority='L', due='2026-03-03')
    once = decode_line(encode_task(original))
    assert once == Task(id=9, title='ship v1 / v2now', done=False, priority='L', due='2026-03-03')
    twice = decode_line(encode_task(once))
    assert twice == once
