import pytest

from notes.model import Action, NoteEvent, ParseError, SelectionError
from notes.selection import Selection, parse_divisor, parse_selector, select_parts


class TestParseSelector:
    @pytest.mark.parametrize("text, expected", [
        ("1,0", Selection(1, 0, 0)),
        ("2,9+12", Selection(2, 9, 12)),
        ("3,1-5", Selection(3, 1, -5)),
        (" 0,15+0 ", Selection(0, 15, 0)),
    ])
    def test_valid(self, text, expected):
        assert parse_selector(text) == expected

    @pytest.mark.parametrize("text", ["", "1", "1,", ",2", "a,b", "1,2,3", "1,2+", "1,2*3", "1,16", "1,0+200"])
    def test_malformed(self, text):
        with pytest.raises(ParseError, match="malformed track selector"):
            parse_selector(text)


class TestParseDivisor:
    def test_values(self):
        assert parse_divisor("/4") == 4.0
        assert parse_divisor("/2.5") == 2.5

    @pytest.mark.parametrize("text", ["/", "/x", "/0", "/-2", "/nan"])
    def test_rejects(self, text):
        with pytest.raises(ParseError):
            parse_divisor(text)


class TestSelectParts:
    events = [
        NoteEvent((1, 0), 60, Action.PRESS, 0),
        NoteEvent((2, 1), 48, Action.PRESS, 0),
        NoteEvent((1, 0), 60, Action.RELEASE, 96),
        NoteEvent((2, 1), 48, Action.RELEASE, 96),
    ]
    available = {(1, 0): None, (2, 1): None}

    def test_one_stream_per_selection_in_order(self):
        streams = select_parts(self.events, [Selection(2, 1, 12), Selection(1, 0)], self.available)
        assert [[e.pitch for e in s] for s in streams] == [[60, 60], [60, 60]]
        assert [e.source for e in streams[0]] == [(2, 1), (2, 1)]
        assert [e.tick for e in streams[1]] == [0, 96]

    def test_negative_shift(self):
        (stream,) = select_parts(self.events, [Selection(1, 0, -24)], self.available)
        assert [e.pitch for e in stream] == [36, 36]

    def test_missing_part(self):
        with pytest.raises(SelectionError, match="track 3 channel 0"):
            select_parts(self.events, [Selection(1, 0), Selection(3, 0)], self.available)

    def test_empty_selection(self):
        assert select_parts(self.events, [], self.available) == []
