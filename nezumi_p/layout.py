"""
Board geometry: how many departure rows fit and where each one is drawn.

All sizes are terminal cells. Every computed width and height is clamped at
zero, so a tiny terminal yields empty regions rather than negative ones.
"""

from dataclasses import dataclass

from .config import (
    FIRST_ROW_HEIGHT, ROW_HEIGHT, ROW_HEIGHT_DIVISOR, RESERVED_ROWS,
    CLOCK_ZONE_WIDTH, COUNTDOWN_ZONE_WIDTH, TITLE_HEIGHT, STATUS_HEIGHT,
)

# Train silhouettes drawn under each card
FOOTER_WITH_FEATURE = "/˳˳_˳˳][˳˳_˳˳][˳˳_˳˳][˳˳_˳˳][˳˳_˳˳][˳˳_˳˳][˳˳_˳˳\\"
FOOTER_PLAIN = "/˳˳_˳˳][˳˳_˳˳][˳˳_˳˳][˳˳_˳˳\\"


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative region size: {self.width}x{self.height}")

    @classmethod
    def clamped(cls, x: int, y: int, width: int, height: int) -> "Region":
        return cls(max(x, 0), max(y, 0), max(width, 0), max(height, 0))

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def inner(self, horizontal: int, vertical: int) -> "Region":
        """Shrink by a margin on every side. Collapses to zero size when too small."""
        return Region.clamped(
            self.x + horizontal,
            self.y + vertical,
            self.width - 2 * horizontal,
            self.height - 2 * vertical,
        )


@dataclass(frozen=True)
class RowLayout:
    """Sub-regions of one departure card."""
    index: int
    height: int
    card: Region
    clock: Region
    gauge: Region
    countdown: Region
    footer: Region


@dataclass(frozen=True)
class BoardLayout:
    rows: tuple[RowLayout, ...]

    @property
    def rows_drawn(self) -> int:
        return len(self.rows)


def footer_glyphs(has_feature_flag: bool) -> str:
    return FOOTER_WITH_FEATURE if has_feature_flag else FOOTER_PLAIN


def row_limit(terminal_height: int) -> int:
    """Rows the terminal has room for beyond the title, status strip and borders."""
    return max(terminal_height // ROW_HEIGHT_DIVISOR - RESERVED_ROWS, 0)


def visible_row_count(departure_count: int, terminal_height: int) -> int:
    """
    Number of departure rows to draw.

    The first departure always gets a row; the rest are dropped once the
    terminal's row limit is reached.
    """
    if departure_count <= 0:
        return 0
    return min(departure_count, max(row_limit(terminal_height), 1))


def row_height(index: int) -> int:
    return FIRST_ROW_HEIGHT if index == 0 else ROW_HEIGHT


def split_columns(region: Region) -> tuple[Region, Region, Region]:
    """Split into clock / gauge / countdown columns; the gauge takes the slack."""
    left_w = min(CLOCK_ZONE_WIDTH, region.width)
    right_w = min(COUNTDOWN_ZONE_WIDTH, region.width - left_w)
    middle_w = max(region.width - left_w - right_w, 0)
    left = Region(region.x, region.y, left_w, region.height)
    middle = Region(region.x + left_w, region.y, middle_w, region.height)
    right = Region(region.x + left_w + middle_w, region.y, right_w, region.height)
    return left, middle, right


def _card_region(index: int, slot: Region) -> Region:
    # The first card sits below the timetable panel's top border
    if index == 0:
        return Region.clamped(slot.x + 1, slot.y + 1, slot.width - 2, slot.height - 1)
    return slot.inner(1, 0)


def layout_row(index: int, slot: Region) -> RowLayout:
    """Lay out one departure card inside its allotted slot."""
    card = _card_region(index, slot)

    body = Region(card.x, card.y, card.width, max(card.height - 1, 0))
    strip = Region(card.x, body.bottom, card.width, card.height - body.height)
    left, middle, right = split_columns(body)

    # Drawn one line up so it lands inside the card border
    footer = Region.clamped(strip.x + 1, strip.y - 1, strip.width - 2, strip.height)

    return RowLayout(
        index=index,
        height=slot.height,
        card=card,
        clock=left.inner(2, 2),
        gauge=middle.inner(1, 1),
        countdown=right.inner(2, 2),
        footer=footer,
    )


def layout_board(departure_count: int, terminal_height: int, region: Region) -> BoardLayout:
    """
    Stack departure rows from the top of ``region``.

    Row 0 is taller than the rest. Rows past the terminal's row limit are
    dropped; a row that runs past the region's bottom edge is clipped.
    """
    rows = []
    y = region.y
    for index in range(visible_row_count(departure_count, terminal_height)):
        height = min(row_height(index), max(region.bottom - y, 0))
        slot = Region(region.x, y, region.width, height)
        rows.append(layout_row(index, slot))
        y += height
    return BoardLayout(rows=tuple(rows))


@dataclass(frozen=True)
class ScreenLayout:
    """Top-level screen split: title bar, station list, timetable, status strip."""
    title: Region
    stations: Region
    timetable: Region
    status: Region


def layout_screen(width: int, height: int) -> ScreenLayout:
    width = max(width, 0)
    height = max(height, 0)
    title_h = min(TITLE_HEIGHT, height)
    status_h = min(STATUS_HEIGHT, height - title_h)
    main_h = height - title_h - status_h
    stations_w = width // 2
    return ScreenLayout(
        title=Region(0, 0, width, title_h),
        stations=Region(0, title_h, stations_w, main_h),
        timetable=Region(stations_w, title_h, width - stations_w, main_h),
        status=Region(0, title_h + main_h, width, status_h),
    )


# Panel border plus one line of padding, top and bottom
STATION_LIST_CHROME = 4


def station_list_rows(region: Region) -> int:
    """How many station names fit inside the stations panel."""
    return max(region.height - STATION_LIST_CHROME, 0)


def scroll_offset(offset: int, cursor: int, visible: int) -> int:
    """
    First list entry to show so that ``cursor`` stays in view.

    The window only moves when the cursor leaves it: moving past the bottom
    scrolls so the cursor sits on the last visible line, moving above the
    top scrolls so it sits on the first.
    """
    if visible <= 0 or cursor < offset:
        return cursor
    if cursor >= offset + visible:
        return cursor - visible + 1
    return offset
