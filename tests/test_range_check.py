from notes.model import Action, NoteEvent, RangeError
from notes.range_check import HIGHEST_PITCH, LOWEST_PITCH, in_range, validate_range


def press(pitch, tick=0):
    return NoteEvent((1, 0), pitch, Action.PRESS, tick)


class TestRangeCheck:
    def test_bounds(self):
        assert (LOWEST_PITCH, HIGHEST_PITCH) == (24, 103)
        assert in_range(24) and in_range(103)
        assert not in_range(23) and not in_range(104)

    def test_edges_pass_through_unchanged(self):
        timeline = (press(24), press(103, 5))
        kept, errors = validate_range(timeline)
        assert kept == timeline
        assert errors == []

    def test_one_semitone_beyond_is_dropped(self):
        timeline = (press(23, 1), press(60, 2), press(104, 3))
        kept, errors = validate_range(timeline)
        assert kept == (press(60, 2),)
        assert errors == [RangeError(23, 1, (1, 0)), RangeError(104, 3, (1, 0))]
