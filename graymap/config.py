"""Central configuration for the graymap raster engine.

All format tokens and tunable policies are defined here with descriptive
names. Library modules import these values instead of hard-coding them.
"""

# =============================================================================
# PIXEL RANGE
# =============================================================================

# Largest sample an 8-bit pixel can hold (and the largest accepted maxval)
PIXMAX = 255

# =============================================================================
# RAW PGM FORMAT
# =============================================================================

# Magic token identifying a raw 8-bit graymap
PGM_MAGIC = b"P5"

# Comments start with this byte and run to the end of the line
PGM_COMMENT_MARKER = b"#"

# Header whitespace, matching C isspace() in the default locale
PGM_WHITESPACE = b" \t\n\v\f\r"

# Header written by save(); a single newline terminates it before raw bytes
PGM_HEADER_TEMPLATE = "P5\n{width} {height}\n{maxval}\n"

# =============================================================================
# SUBIMAGE SEARCH
# =============================================================================

# Whether locate() also tries offsets where the needle is flush with the
# bottom/right edge of the haystack. False reproduces the legacy scan, which
# stops one row and one column short.
LOCATE_INCLUDE_FLUSH_EDGE = True
