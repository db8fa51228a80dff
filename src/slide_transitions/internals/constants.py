"""Application-wide constants and configuration values."""

# Slide parts as named inside a .pptx: ppt/slides/slide1.xml, ppt/slides/slide2.xml, ...
# Layouts, masters, notes slides and the _rels folder all live elsewhere or use another
# name, so they never match.
SLIDE_PATH_PATTERN: str = r"^ppt/slides/slide([0-9]+)\.xml$"

# Qualified name of a slide part's root element. The closing tag marks where
# transition markup gets inserted.
SLIDE_ROOT_TAG: str = "p:sld"

# Element whose presence means a slide already has a transition.
TRANSITION_TAG: str = "p:transition"

# What we re-pack with when nothing else is configured
DEFAULT_COMPRESSION_LEVEL: int = 6

# Suffix added to the input's stem (plus a timestamp) when building an output filename
OUTPUT_FILENAME_SUFFIX: str = "_transitions"

# Fallback for get_debug_mode() in utils
DEBUG_MODE_DEFAULT = False  # Hard-coded default

# Marks an argparse default as "not provided by the user"
SENTINEL = object()
