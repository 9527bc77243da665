"""Default configuration values and starter .keyleak.toml template."""

DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset({
    "node_modules",
    ".git",
    "vendor",
    "__pycache__",
    "dist",
    "build",
    ".venv",
    "venv",
    ".idea",
    ".tox",
    "coverage",
    ".next",
    ".nuxt",
})

DEFAULT_TOML = """\
# keyleak configuration
version = "1.0"

[scan]
# rules = "rules.json"            # default: ./rules.json, else the bundled set
# disable = ["generic-api-key", "pii-emails"]
# max_size = "1m"                 # skip files larger than this (bytes, k or m suffix)
# include_name = "\\\\.(js|ts)$"   # only scan file names matching this regex
# exclude_name = "\\\\.min\\\\."
# ext = [".js", ".ts"]
# exclude_ext = [".map"]
# exclude_dirs = ["fixtures"]     # added to the built-in exclusion set

[output]
format = "text"                   # text | json | csv | table
absolute = false
fail = false                      # exit 1 when any secret is found
"""
