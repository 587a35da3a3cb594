"""Backup utilities for safe modifications."""

import shutil
from pathlib import Path
from datetime import datetime
from typing import Iterable, List, Optional

from .colors import Colors
from .logging import get_logger

logger = get_logger('utils.backup')

BACKUP_PREFIX = 'i18n_backup_'


def create_backup(
    project_dir: Path,
    files: Iterable[Path],
    backup_name: Optional[str] = None,
) -> Path:
    """
    Copy files into a timestamped backup directory under the project root.

    Relative layout is preserved; files outside the project root are stored
    under their file name only.

    Args:
        project_dir: Project root (backup is created inside it)
        files: Files to copy
        backup_name: Custom backup name (default: timestamp)

    Returns:
        Path to backup directory
    """
    project_dir = Path(project_dir)
    if backup_name is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        backup_name = f'{BACKUP_PREFIX}{timestamp}'

    backup_dir = project_dir / backup_name
    backup_dir.mkdir(parents=True, exist_ok=True)

    print(f"\n💾 Creating backup: {Colors.bold(backup_name)}")

    copied = 0
    for file_path in files:
        file_path = Path(file_path)
        if not file_path.is_file():
            continue
        try:
            relative_path = file_path.resolve().relative_to(project_dir.resolve())
        except ValueError:
            relative_path = Path(file_path.name)
        dest_path = backup_dir / relative_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file_path, dest_path)
        copied += 1

    logger.debug("Backed up %d files to %s", copied, backup_dir)
    print(f"   {Colors.success('✓')} Backup created: {backup_dir} ({copied} files)")

    return backup_dir


def restore_backup(backup_dir: Path, target_dir: Path) -> bool:
    """
    Restore from backup.

    Args:
        backup_dir: Backup directory
        target_dir: Target directory to restore to

    Returns:
        Success status
    """
    if not backup_dir.exists():
        print(f"{Colors.error('❌')} Backup not found: {backup_dir}")
        return False

    try:
        shutil.copytree(backup_dir, target_dir, dirs_exist_ok=True)
    except OSError as e:
        logger.error("Restore from %s failed: %s", backup_dir, e)
        print(f"   {Colors.error('❌')} Restore failed: {e}")
        return False

    print(f"   {Colors.success('✓')} Restored from {backup_dir.name}")
    return True


def list_backups(project_dir: Path) -> List[Path]:
    """List backups, newest first."""
    return sorted(
        Path(project_dir).glob(f'{BACKUP_PREFIX}*'),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )
