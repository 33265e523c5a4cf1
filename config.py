# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Optional, Tuple
from notes.range_check import HIGHEST_PITCH, LOWEST_PITCH

@dataclass
class MergeConfig:
    fudge_divisor: int = 3              # window = a third of a beat
    fudge_ticks: Optional[int] = None   # explicit override, in ticks

    def fudge_window(self, ticks_per_beat: int) -> int:
        if self.fudge_ticks is not None:
            return max(0, int(self.fudge_ticks))
        return ticks_per_beat // max(1, self.fudge_divisor)

@dataclass
class RollConfig:
    divisor: float = 1.0          # compression divisor
    feed_rate: float = 1.0        # inches of paper per second of music
    column_pitch: float = 0.1     # inches between adjacent pitch columns
    length_limit: float = 200.0   # soft page limit, inches
    lowest_pitch: int = LOWEST_PITCH
    highest_pitch: int = HIGHEST_PITCH

    @property
    def rows(self) -> int:
        return self.highest_pitch - self.lowest_pitch + 1

@dataclass
class PageConfig:
    dpi: int = 40
    margin: float = 0.5           # inches around the roll
    background: Tuple[int, int, int] = (245, 242, 232)
    guide: Tuple[int, int, int] = (205, 200, 188)
    hole_white: Tuple[int, int, int] = (24, 24, 28)
    hole_black: Tuple[int, int, int] = (70, 90, 160)

@dataclass
class OutputConfig:
    velocity: int = 90
    channel: int = 0
    program: int = 1

@dataclass
class AppConfig:
    merge: MergeConfig = field(default_factory=MergeConfig)
    roll: RollConfig = field(default_factory=RollConfig)
    page: PageConfig = field(default_factory=PageConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
