"""Build a puzzle provider from configuration."""

from ..config import GameConfig
from ..errors import ProviderConfigError
from .file import FilePuzzleProvider
from .provider import PuzzleProvider
from .sheets import SheetsPuzzleProvider


def create_provider(config: GameConfig) -> PuzzleProvider:
    """
    Create the provider named by `config.provider.kind`.

    Raises:
        ProviderConfigError: If a file provider has no path
    """
    settings = config.provider

    if settings.kind == "file":
        if not settings.path:
            raise ProviderConfigError("File provider needs a path")
        return FilePuzzleProvider(settings.path, timezone=config.timezone)

    return SheetsPuzzleProvider(
        sheet_id=settings.sheet_id,
        tab=settings.tab,
        timezone=config.timezone,
    )
