"""Command-line interface for i18n-sweep."""

import re
import sys
import json
import argparse
from pathlib import Path
from typing import Optional

from .__version__ import __version__
from .utils.colors import Colors
from .utils.config import CONFIG_FILE_NAME, Config, create_default_config, ConfigValidationError
from .utils.backup import create_backup, list_backups, restore_backup
from .utils.logging import configure_logging
from .core.errors import NotFoundError
from .core.positions import Position
from .core.file_manager import LocaleFileManager
from .core.analyzer import UsageAnalyzer
from .features.extractor import HardcodedExtractor
from .features.key_manager import KeyManager
from .features.stats import StatsCalculator
from .reports.json_reporter import JSONReporter
from .reports.console_reporter import ConsoleReporter

# 12:5-14:20 (1-based line:column)
RANGE_PATTERN = re.compile(r'^(\d+):(\d+)-(\d+):(\d+)$')


def load_and_validate_config(validate: bool = True, verbose: bool = False) -> Config:
    """
    Load configuration and optionally validate it.

    Args:
        validate: Whether to validate the config
        verbose: Whether to print warnings

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config = Config.from_file()

    if validate:
        errors, warnings = config.validate()

        if verbose and warnings:
            for warning in warnings:
                print(f"{Colors.warning('⚠️')}  Config warning: {warning}")

        if errors:
            print(f"{Colors.error('❌')} Configuration errors:")
            for error in errors:
                print(f"   • {error}")
            raise ConfigValidationError(errors)

    return config


def _file_manager(config: Config) -> LocaleFileManager:
    return LocaleFileManager(config.locales_path, config.locale_file_regex())


def _not_found(error: NotFoundError) -> int:
    print(f"{Colors.error('❌')} {error}")
    return 1


def parse_range(value: str):
    """
    Parse ``L:C-L:C`` (1-based, as printed by ``scan``) into two Positions.

    Raises:
        ValueError: If the value is not a range
    """
    match = RANGE_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid range '{value}', expected LINE:COL-LINE:COL")
    start_line, start_col, end_line, end_col = (max(int(n) - 1, 0) for n in match.groups())
    return Position(start_line, start_col), Position(end_line, end_col)


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print(f"   Use --force to overwrite")
        return 1

    config = create_default_config(args.locales_dir)
    config.save(config_path)

    print(f"{Colors.success('✅')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Edit {CONFIG_FILE_NAME} to configure your project")
    print(f"2. Run: i18n-sweep usage")

    return 0


def cmd_scan(args):
    """List hardcoded text in files or in the whole project."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    analyzer = UsageAnalyzer(config)
    files = [Path(name) for name in args.files] if args.files else None
    hardcoded = analyzer.scan_hardcoded(files)

    if args.json:
        print(json.dumps(
            {name: [span.to_dict() for span in spans] for name, spans in hardcoded.items()},
            indent=2,
            ensure_ascii=False,
        ))
    else:
        ConsoleReporter.print_hardcoded(hardcoded)

    return 0


def cmd_usage(args):
    """Analyze key usage, hardcoded text and the health score."""
    try:
        config = load_and_validate_config(validate=True, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    file_manager = _file_manager(config)
    try:
        store = file_manager.load()
    except NotFoundError as e:
        return _not_found(e)

    analyzer = UsageAnalyzer(config)
    analysis = analyzer.analyze_project(store, verbose=not args.quiet)
    stats = StatsCalculator().calculate(store)

    if args.json is not None:
        output_path = Path(args.json) if args.json else Path(config.reports.output) / 'i18n_report.json'
        JSONReporter.generate(analysis, stats, output_path=output_path)

    if not args.quiet:
        ConsoleReporter.print_full_report(analysis, stats, show_details=args.details)

    if args.fail_below is not None and analysis.health.score < args.fail_below:
        print(f"\n{Colors.error('❌')} Health score {analysis.health.score:.1f} "
              f"is below {args.fail_below}")
        return 1

    return 0


def cmd_extract(args):
    """Move hardcoded text of a file into the default locale."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    start = end = None
    if args.range:
        try:
            start, end = parse_range(args.range)
        except ValueError as e:
            print(f"{Colors.error('❌')} {e}")
            return 1

    file_path = Path(args.file)
    if not file_path.is_file():
        print(f"{Colors.error('❌')} File not found: {file_path}")
        return 1

    file_manager = _file_manager(config)
    try:
        file_manager.require_locales()
    except NotFoundError as e:
        return _not_found(e)

    if not args.no_backup and not args.dry_run:
        create_backup(config.source_dir, [file_path, file_manager.path_for(file_manager.default_locale)])

    extractor = HardcodedExtractor(
        file_manager=file_manager,
        scanner=UsageAnalyzer(config).scanner,
        dry_run=args.dry_run,
    )
    try:
        result = extractor.extract_file(file_path, start, end, prefix=args.prefix)
    except NotFoundError as e:
        return _not_found(e)

    extractor.print_result(result)

    if args.dry_run or not result.transforms:
        return 0
    return 0 if result.locale_saved and result.source_saved else 1


def _key_manager(config: Config, dry_run: bool) -> KeyManager:
    return KeyManager(
        file_manager=_file_manager(config),
        analyzer=UsageAnalyzer(config),
        dry_run=dry_run,
    )


def _backup_for_keys(config: Config, manager: KeyManager, key: Optional[str] = None) -> None:
    """Back up locale files and, for a key, the files referencing it."""
    files = list(manager.file_manager.files.values())
    if key is not None:
        files.extend(manager.analyzer.find_key_references(key))
    create_backup(config.source_dir, files)


def cmd_set(args):
    """Set one translation value."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    manager = _key_manager(config, dry_run=False)
    try:
        saved = manager.set_value(args.key, args.value, locale=args.locale)
    except NotFoundError as e:
        return _not_found(e)
    except ValueError as e:
        print(f"{Colors.error('❌')} {e}")
        return 1

    if not saved:
        print(f"{Colors.error('❌')} Could not save '{args.key}'")
        return 1

    print(f"{Colors.success('✓')} {args.key} = \"{args.value}\"")
    return 0


def cmd_rename(args):
    """Rename a key in every locale and in the source files."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    manager = _key_manager(config, dry_run=args.dry_run)
    try:
        manager.file_manager.require_locales()
        if not args.no_backup and not args.dry_run:
            _backup_for_keys(config, manager, None if args.no_references else args.old_key)
        change = manager.rename_key(args.old_key, args.new_key,
                                    update_references=not args.no_references)
    except NotFoundError as e:
        return _not_found(e)
    except ValueError as e:
        print(f"{Colors.error('❌')} {e}")
        return 1

    manager.print_change('Renamed', change)
    return 0 if change.ok else 1


def cmd_delete(args):
    """Delete a key, or every unused key, from all locales."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    if not args.unused and not args.key:
        print(f"{Colors.error('❌')} Give a key or --unused")
        return 1

    manager = _key_manager(config, dry_run=args.dry_run)
    try:
        manager.file_manager.require_locales()
        if not args.no_backup and not args.dry_run:
            _backup_for_keys(config, manager)
        if args.unused:
            change = manager.delete_unused()
        else:
            change = manager.delete_key(args.key)
    except NotFoundError as e:
        return _not_found(e)

    manager.print_change('Deleted', change)
    return 0 if change.ok else 1


def cmd_inline(args):
    """Replace references to a key with its text."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    manager = _key_manager(config, dry_run=args.dry_run)
    try:
        manager.file_manager.require_locales()
        if not args.no_backup and not args.dry_run:
            _backup_for_keys(config, manager, args.key)
        change = manager.inline_key(args.key, locale=args.locale, delete=args.delete)
    except NotFoundError as e:
        return _not_found(e)

    manager.print_change('Inlined', change)
    return 0 if change.ok else 1


def cmd_stats(args):
    """Show translation progress per locale."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    try:
        store = _file_manager(config).load()
    except NotFoundError as e:
        return _not_found(e)

    calculator = StatsCalculator()
    stats = calculator.calculate(store)

    if args.json:
        calculator.export_json(stats, Path(args.json))
    elif args.markdown:
        calculator.export_markdown(stats, Path(args.markdown))
    elif not args.ci:
        calculator.print_summary(stats, show_keys=args.untranslated)

    # JSON output for CI/CD
    if args.ci:
        print(stats.to_json())
        return 0 if stats.overall_progress >= args.threshold else 1

    return 0


def cmd_restore(args):
    """List backups or restore one into the project."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    backups = list_backups(config.source_dir)
    if not backups:
        print(f"{Colors.warning('⚠️')}  No backups in {config.source_dir}")
        return 1

    if args.list:
        print(f"\n{Colors.bold('💾 BACKUPS')}")
        for backup_dir in backups:
            print(f"   {backup_dir.name}")
        return 0

    if args.name:
        backup_dir = config.source_dir / args.name
    else:
        backup_dir = backups[0]

    return 0 if restore_backup(backup_dir, config.source_dir) else 1


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='i18n-sweep',
        description='Find hardcoded text and manage translation keys in web projects',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--log-file', metavar='PATH', help='Write debug log to file')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Initialize configuration file')
    init_parser.add_argument('--locales-dir', metavar='DIR', help='Locales directory')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # scan command
    scan_parser = subparsers.add_parser('scan', help='List hardcoded text')
    scan_parser.add_argument('files', nargs='*', help='Files to scan (default: whole project)')
    scan_parser.add_argument('--json', action='store_true', help='Print spans as JSON')

    # usage command
    usage_parser = subparsers.add_parser('usage', help='Analyze key usage and health')
    usage_parser.add_argument('--json', nargs='?', const='', metavar='PATH',
                              help='Output JSON report (default: reports.output directory)')
    usage_parser.add_argument('--details', action='store_true',
                              help='List hardcoded texts and keys')
    usage_parser.add_argument('--verbose', action='store_true', help='Show detailed output')
    usage_parser.add_argument('--quiet', action='store_true', help='Minimal output')
    usage_parser.add_argument('--fail-below', type=int, metavar='SCORE',
                              help='Exit with error if score below threshold')

    # extract command
    extract_parser = subparsers.add_parser('extract', help='Extract hardcoded text into keys')
    extract_parser.add_argument('file', help='Source file')
    extract_parser.add_argument('--range', metavar='L:C-L:C',
                                help='Only extract text within a range (1-based)')
    extract_parser.add_argument('--prefix', help='Dotted prefix for generated keys')
    extract_parser.add_argument('--dry-run', action='store_true', help='Preview changes only')
    extract_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')

    # set command
    set_parser = subparsers.add_parser('set', help='Set a translation value')
    set_parser.add_argument('key', help='Dotted key')
    set_parser.add_argument('value', help='Translation')
    set_parser.add_argument('--locale', help='Locale (default: first locale)')

    # rename command
    rename_parser = subparsers.add_parser('rename', help='Rename a key')
    rename_parser.add_argument('old_key', help='Current key')
    rename_parser.add_argument('new_key', help='New key')
    rename_parser.add_argument('--no-references', action='store_true',
                               help='Leave source references untouched')
    rename_parser.add_argument('--dry-run', action='store_true', help='Preview changes only')
    rename_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')

    # delete command
    delete_parser = subparsers.add_parser('delete', help='Delete a key from every locale')
    delete_parser.add_argument('key', nargs='?', help='Dotted key')
    delete_parser.add_argument('--unused', action='store_true', help='Delete every unused key')
    delete_parser.add_argument('--dry-run', action='store_true', help='Preview changes only')
    delete_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')

    # inline command
    inline_parser = subparsers.add_parser('inline', help='Replace key references with text')
    inline_parser.add_argument('key', help='Dotted key')
    inline_parser.add_argument('--locale', help='Locale providing the text')
    inline_parser.add_argument('--delete', action='store_true',
                               help='Also delete the key from every locale')
    inline_parser.add_argument('--dry-run', action='store_true', help='Preview changes only')
    inline_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')

    # stats command
    stats_parser = subparsers.add_parser('stats', help='Show translation progress')
    stats_parser.add_argument('--json', metavar='PATH', help='Export stats to JSON')
    stats_parser.add_argument('--markdown', metavar='PATH', help='Export stats to Markdown')
    stats_parser.add_argument('--untranslated', action='store_true',
                              help='List untranslated keys')
    stats_parser.add_argument('--ci', action='store_true', help='CI mode (JSON on stdout)')
    stats_parser.add_argument('--threshold', type=float, default=80.0,
                              help='Minimum overall progress for --ci (default: 80)')

    # restore command
    restore_parser = subparsers.add_parser('restore', help='Restore files from a backup')
    restore_parser.add_argument('name', nargs='?', help='Backup directory (default: newest)')
    restore_parser.add_argument('--list', action='store_true', help='List backups')

    args = parser.parse_args(argv)

    configure_logging(
        verbose=getattr(args, 'verbose', False),
        quiet=getattr(args, 'quiet', False),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'scan':
        return cmd_scan(args)
    elif args.command == 'usage':
        return cmd_usage(args)
    elif args.command == 'extract':
        return cmd_extract(args)
    elif args.command == 'set':
        return cmd_set(args)
    elif args.command == 'rename':
        return cmd_rename(args)
    elif args.command == 'delete':
        return cmd_delete(args)
    elif args.command == 'inline':
        return cmd_inline(args)
    elif args.command == 'stats':
        return cmd_stats(args)
    elif args.command == 'restore':
        return cmd_restore(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
