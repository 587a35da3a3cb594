"""ANSI styling for terminal output."""


class Colors:
    """Escape codes shared by the CLI, the reporters and the log formatter."""

    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    @classmethod
    def _wrap(cls, code: str, text: str) -> str:
        return f"{code}{text}{cls.ENDC}"

    @classmethod
    def success(cls, text: str) -> str:
        return cls._wrap(cls.OKGREEN, text)

    @classmethod
    def error(cls, text: str) -> str:
        return cls._wrap(cls.FAIL, text)

    @classmethod
    def warning(cls, text: str) -> str:
        return cls._wrap(cls.WARNING, text)

    @classmethod
    def info(cls, text: str) -> str:
        """Cyan; file names and dry-run markers."""
        return cls._wrap(cls.OKCYAN, text)

    @classmethod
    def bold(cls, text: str) -> str:
        """Section headers."""
        return cls._wrap(cls.BOLD, text)

    @classmethod
    def dim(cls, text: str) -> str:
        """Span labels and secondary details."""
        return cls._wrap(cls.DIM, text)
