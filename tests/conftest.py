import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import mido
import pytest


def build_midi(tracks, ticks_per_beat=96, tempo=500000):
    """Build a type-1 file; ``tracks`` holds lists of absolute-tick messages.

    Each item is ``(tick, mido message)``; the conductor track with the tempo
    is prepended as track 0.
    """
    mid = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)
    conductor = mido.MidiTrack()
    conductor.append(mido.MetaMessage("track_name", name="Conductor", time=0))
    if tempo is not None:
        conductor.append(mido.MetaMessage("set_tempo", tempo=tempo, time=0))
    mid.tracks.append(conductor)
    for items in tracks:
        track = mido.MidiTrack()
        last = 0
        for tick, msg in items:
            track.append(msg.copy(time=tick - last))
            last = tick
        mid.tracks.append(track)
    return mid


def note(channel, pitch, start, end, velocity=80):
    return [
        (start, mido.Message("note_on", channel=channel, note=pitch, velocity=velocity)),
        (end, mido.Message("note_off", channel=channel, note=pitch, velocity=0)),
    ]


def part_track(name, channel, notes, program=0):
    """One track: name, bank/program set-up and the given (pitch, start, end) notes."""
    items = [
        (0, mido.MetaMessage("track_name", name=name)),
        (0, mido.Message("control_change", channel=channel, control=0, value=0)),
        (0, mido.Message("program_change", channel=channel, program=program)),
    ]
    for pitch, start, end in notes:
        items.extend(note(channel, pitch, start, end))
    items.sort(key=lambda item: item[0])
    return items


@pytest.fixture
def midi_file(tmp_path):
    def _write(tracks, name="song.mid", **kwargs):
        path = tmp_path / name
        build_midi(tracks, **kwargs).save(str(path))
        return str(path)
    return _write


@pytest.fixture
def three_part_song(midi_file):
    """Piano and strings doubling each other (one late entry), plus a bass line."""
    piano = part_track("Piano", 0, [(60, 0, 96), (64, 96, 192), (67, 192, 288)])
    strings = part_track("Strings", 1, [(60, 2, 94), (64, 96, 190), (67, 240, 300)], program=48)
    bass = part_track("Bass", 2, [(36, 0, 384), (110, 0, 96)], program=32)
    return midi_file([piano, strings, bass])
