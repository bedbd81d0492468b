"""Starter .svnstate.toml template."""

CONFIG_FILENAME = ".svnstate.toml"

DEFAULT_TOML = """\
# svnstate configuration
version = "1.0"

[parse]
format = "auto"            # auto | text | xml
probe_filesystem = false   # stat status paths to tell files from directories

[tree]
case_insensitive_root = true

[output]
format = "terminal"        # terminal | json
show_summary = true

[logging]
level = "warning"          # debug | info | warning | error
"""
