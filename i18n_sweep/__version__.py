"""Version information for i18n-sweep."""

__version__ = "0.4.0"
__author__ = "i18n-sweep contributors"
__description__ = "Hardcoded text detection and translation key management for web projects"

# Changelog:
# 0.4.0 - Key management commands
#       - New 'rename', 'delete' and 'inline' commands
#       - delete --unused removes keys no source file references
#       - Inlining keeps template and JSX expressions valid
#       - Backups before any source or locale rewrite (--no-backup to skip)
#
# 0.3.0 - Extraction
#       - New 'extract' command with --range and --prefix
#       - Keys derived from text, numeric suffix on collision
#       - Locale file is written before the source file
#
# 0.2.0 - Usage analysis
#       - New 'usage' and 'stats' commands
#       - Health score, console and JSON reports
#       - <i18n> blocks count as references in single-file components
#
# 0.1.0 - Initial release
#       - Hardcoded text scanner for markup, script and component files
#       - UTF-16 column positions
