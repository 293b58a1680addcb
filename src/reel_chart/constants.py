"""Global constants for the application."""

# Video settings
DEFAULT_FPS = 30  # Default frames per second for the reel
DEFAULT_DURATION_SECONDS = 15  # Fixed reel length
VIDEO_WIDTH = 1080  # Vertical video canvas width in pixels
VIDEO_HEIGHT = 1920  # Vertical video canvas height in pixels

# Safe-area padding in pixels (keeps content clear of the Reels UI)
PADDING_TOP = 192  # 10% of 1920
PADDING_BOTTOM = 192
PADDING_LEFT = 80
PADDING_RIGHT = 80
HEADER_SPACE = 180  # Space reserved above the chart for the hook text
FOOTER_SPACE = 180  # Space reserved below the chart for the takeaway text

# Phase boundaries as fractions of the total duration (1.5s and 12.5s of 15s)
HOOK_END_FRACTION = 1.5 / 15
STROKE_END_FRACTION = 12.5 / 15

# Durations in frames, measured from the end of the reveal
HIGHLIGHT_FADE_FRAMES = 15  # Highlight ring and delta readout fade-in
TAKEAWAY_DELAY_FRAMES = 10  # Pause between freeze and takeaway fade
TAKEAWAY_FADE_FRAMES = 20  # Takeaway fade-in

# Chart scaling
VALUE_RANGE_PADDING = 0.1  # 10% headroom above max and below min
DEFAULT_VALUE_MIN = 0.0  # Fallback range when a chart has no values at all
DEFAULT_VALUE_MAX = 100.0
MAX_TICK_LABELS = 8  # Upper bound on displayed x-axis labels

# Normalization
MAX_POINTS = 120  # Datasets longer than this are stride-downsampled
DEFAULT_MAX_INTERPOLATE_GAP = 3  # Longest run of gaps filled when interpolation is on
MAX_FILE_SIZE = 1_000_000  # CSV text larger than 1MB is rejected

# Text limits
MAX_HOOK_CHARS = 52
MAX_TAKEAWAY_CHARS = 60

# Render admission
MAX_ACTIVE_RENDERS = 1  # Concurrent renders allowed
MAX_WAITING_RENDERS = 3  # Backpressure: reject once this many are queued

# Colors
DARK_NAVY = (11, 31, 59)
PRIMARY_BLUE = (30, 58, 138)
ACCENT_TEAL = (0, 179, 184)
GOLD_ACCENT = (245, 179, 1)
OFF_WHITE = (243, 244, 246)
GRID_GREY = (229, 231, 235)
