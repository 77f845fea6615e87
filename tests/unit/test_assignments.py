"""Unit tests for assignment preservation across re-imports."""

import copy

from flightbook.assignments import flight_key, is_complete, count_incomplete, merge_assignments


def _flight(date, start, tail, role, time_of_day, page):
    return {'date': date, 'takeoff_time': start, 'tail_number': tail,
            'role': role, 'time_of_day': time_of_day, 'page': page}


class TestIsComplete:
    """Tests for the completeness predicate."""

    def test_complete(self):
        assert is_complete({'role': 'PIC', 'time_of_day': 'Day', 'page': 1})

    def test_missing_role(self):
        assert not is_complete({'role': '', 'time_of_day': 'Day', 'page': 1})

    def test_missing_time_of_day(self):
        assert not is_complete({'role': 'PIC', 'time_of_day': '', 'page': 1})

    def test_missing_page(self):
        assert not is_complete({'role': 'PIC', 'time_of_day': 'Day', 'page': None})

    def test_page_zero_is_incomplete(self):
        """Page 0 is treated as unassigned."""
        assert not is_complete({'role': 'PIC', 'time_of_day': 'Day', 'page': 0})

    def test_empty_dict(self):
        assert not is_complete({})

    def test_count_incomplete(self, flight):
        flights = [flight(), flight(page=0), flight(role='')]
        assert count_incomplete(flights) == 2


class TestMergeAssignments:
    """Tests for merge_assignments."""

    def test_preserves_matching_assignments(self):
        """Old role, time of day and page win over the import defaults."""
        old = [_flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', 5)]
        new = [_flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 1)]
        merged = merge_assignments(old, new)
        assert merged[0]['role'] == 'PIC'
        assert merged[0]['time_of_day'] == 'Night'
        assert merged[0]['page'] == 5

    def test_no_match_keeps_imported_values(self):
        old = [_flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', 5)]
        new = [_flight('02.01.26', '11:00', 'OE-XXX', 'Dual', 'Day', 1)]
        merged = merge_assignments(old, new)
        assert (merged[0]['role'], merged[0]['time_of_day'], merged[0]['page']) == ('Dual', 'Day', 1)

    def test_none_page_in_old_does_not_overwrite(self):
        old = [_flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', None)]
        new = [_flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 3)]
        merged = merge_assignments(old, new)
        assert merged[0]['role'] == 'PIC'
        assert merged[0]['time_of_day'] == 'Night'
        assert merged[0]['page'] == 3

    def test_page_zero_in_old_does_overwrite(self):
        """Only None leaves the page alone; 0 is carried over."""
        old = [_flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', 0)]
        new = [_flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 3)]
        assert merge_assignments(old, new)[0]['page'] == 0

    def test_empty_role_in_old_overwrites(self):
        """role and time_of_day are copied even when empty."""
        old = [_flight('01.01.26', '10:00', 'OE-AKW', '', None, 2)]
        new = [_flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 1)]
        merged = merge_assignments(old, new)
        assert merged[0]['role'] == ''
        assert merged[0]['time_of_day'] is None

    def test_empty_old_leaves_new_unchanged(self):
        new = [_flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 1)]
        assert merge_assignments([], new) == new

    def test_multiple_flights_partial_match(self):
        old = [
            _flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', 2),
            _flight('02.01.26', '12:00', 'OE-BBB', 'PIC', 'Day', 3),
        ]
        new = [
            _flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 1),
            _flight('03.01.26', '14:00', 'OE-CCC', 'Dual', 'Day', 1),
        ]
        merged = merge_assignments(old, new)
        assert merged[0]['role'] == 'PIC'
        assert merged[1]['role'] == 'Dual'

    def test_duplicate_old_keys_last_wins(self):
        old = [
            _flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Day', 2),
            _flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Night', 4),
        ]
        new = [_flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 1)]
        merged = merge_assignments(old, new)
        assert (merged[0]['role'], merged[0]['time_of_day'], merged[0]['page']) == ('Dual', 'Night', 4)

    def test_key_needs_all_three_fields(self):
        """Same date and time on another aircraft is a different flight."""
        old = [_flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', 5)]
        new = [_flight('01.01.26', '10:00', 'OE-BBB', 'Dual', 'Day', 1)]
        assert merge_assignments(old, new)[0]['role'] == 'Dual'

    def test_inputs_not_modified(self):
        old = [_flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', 5)]
        new = [_flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 1)]
        new_before = copy.deepcopy(new)
        merged = merge_assignments(old, new)
        assert new == new_before
        assert merged[0] is not new[0]

    def test_order_and_length_kept(self, flight):
        new = [flight(id=i, takeoff_time=f'{8 + i:02d}:00') for i in range(5)]
        merged = merge_assignments([flight(takeoff_time='10:00', role='PIC')], new)
        assert [f['id'] for f in merged] == [0, 1, 2, 3, 4]
        assert merged[2]['role'] == 'PIC'

    def test_other_fields_pass_through(self, flight):
        old = [flight(role='PIC', remarks='old remark', block_time_sec=1)]
        new = [flight(remarks='new remark', block_time_sec=4200)]
        merged = merge_assignments(old, new)
        assert merged[0]['remarks'] == 'new remark'
        assert merged[0]['block_time_sec'] == 4200

    def test_idempotent(self):
        old = [
            _flight('01.01.26', '10:00', 'OE-AKW', 'PIC', 'Night', 5),
            _flight('02.01.26', '10:00', 'OE-AKW', 'PIC', 'Day', None),
        ]
        new = [
            _flight('01.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 1),
            _flight('02.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 2),
            _flight('03.01.26', '10:00', 'OE-AKW', 'Dual', 'Day', 2),
        ]
        once = merge_assignments(old, new)
        twice = merge_assignments(old, once)
        assert once == twice

    def test_missing_key_fields_do_not_raise(self):
        merged = merge_assignments([{'role': 'PIC'}], [{'role': 'Dual', 'page': 2}])
        assert merged == [{'role': 'PIC', 'page': 2, 'time_of_day': None}]

    def test_flight_key(self, flight):
        assert flight_key(flight()) == ('01.01.26', '10:00', 'OE-AKW')
