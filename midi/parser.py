# midi/parser.py
import logging
import mido
from typing import List, Tuple
from notes.model import (Action, NoteEvent, ParseError, PartInfo, SongInfo,
                         TrackInfo)

DEFAULT_TEMPO = 500000  # 120 bpm, the MIDI default

def parse_midi_to_events(path: str) -> Tuple[List[NoteEvent], SongInfo]:
    try:
        mid = mido.MidiFile(path)
    except (OSError, EOFError, ValueError, KeyError) as e:
        raise ParseError(f"failed to read MIDI file {path!r}: {e}") from e
    return events_from_midi(mid)

def events_from_midi(mid: mido.MidiFile) -> Tuple[List[NoteEvent], SongInfo]:
    """Flatten every track into absolute-tick note events, in track order.

    Events of one track keep their file order, so each (track, channel)
    part comes out tick-ordered.
    """
    tpb = mid.ticks_per_beat
    if tpb <= 0 or tpb & 0x8000:
        raise ParseError("unsupported timecode-based MIDI file")

    song = SongInfo(ticks_per_beat=tpb, format=mid.type)
    events: List[NoteEvent] = []

    for track_no, track in enumerate(mid.tracks):
        info = song.tracks.setdefault(track_no, TrackInfo(track_no))
        tick = 0
        for msg in track:
            tick += msg.time
            if msg.is_meta:
                _meta(song, info, msg)
                continue
            if msg.type in ('note_on', 'note_off'):
                part = song.parts.setdefault((track_no, msg.channel), PartInfo(track_no, msg.channel))
                # note_on with velocity 0 stands in for note_off
                if msg.type == 'note_on' and msg.velocity > 0:
                    part.notes += 1
                    action = Action.PRESS
                else:
                    action = Action.RELEASE
                events.append(NoteEvent((track_no, msg.channel), msg.note, action, tick, msg.velocity))
            elif msg.type == 'control_change' and msg.control == 0:
                part = song.parts.setdefault((track_no, msg.channel), PartInfo(track_no, msg.channel))
                if part.bank is None:
                    part.bank = msg.value
                else:
                    logging.warning("track %d set to another bank (%d) mid-song", track_no, msg.value)
            elif msg.type == 'program_change':
                part = song.parts.setdefault((track_no, msg.channel), PartInfo(track_no, msg.channel))
                if part.program is None:
                    part.program = msg.program
                else:
                    logging.warning("track %d set to another program (%d) mid-song", track_no, msg.program)

    if song.tempo is None:
        logging.warning("no tempo in file; assuming %d us per beat", DEFAULT_TEMPO)
        song.tempo = DEFAULT_TEMPO
    logging.debug("parsed %d note events from %d tracks", len(events), len(mid.tracks))
    return events, song

def _meta(song: SongInfo, info: TrackInfo, msg):
    if msg.type == 'track_name':
        if info.name is None:
            info.name = msg.name
        else:
            logging.warning("track %d given multiple names: %r", info.track, msg.name)
    elif msg.type == 'instrument_name':
        if info.instrument is None:
            info.instrument = msg.name
        else:
            logging.warning("track %d given multiple instrument names: %r", info.track, msg.name)
    elif msg.type == 'set_tempo':
        if song.tempo is not None and song.tempo != msg.tempo:
            logging.warning("tempo changes are not supported; using new tempo")
        song.tempo = msg.tempo
    elif msg.type == 'copyright':
        logging.info("Copyright: %r", msg.text)
    elif msg.type in ('marker', 'text'):
        logging.info("%s: %r", msg.type.capitalize(), msg.text)
