"""Configuration management for the gene database."""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from .error_handler import InvalidInput


@dataclass
class DataConfig:
    """Record source settings."""
    source: Optional[str] = None  # path or URL; bundled catalog when None
    timeout_seconds: int = 30
    retry_attempts: int = 0


@dataclass
class SearchConfig:
    """Search and paging settings."""
    page_size: int = 10


@dataclass
class ToolkitConfig:
    """Sequence toolkit settings."""
    primer_length: int = 20
    chunk_size: int = 10


@dataclass
class ExportConfig:
    """Export settings."""
    directory: str = "."
    format: str = "csv"
    excel_compatible: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "WARNING"
    log_dir: Optional[str] = None
    colors: bool = True


@dataclass
class Config:
    """Main configuration container."""
    data: DataConfig
    search: SearchConfig
    toolkit: ToolkitConfig
    export: ExportConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            data=DataConfig(),
            search=SearchConfig(),
            toolkit=ToolkitConfig(),
            export=ExportConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from JSON file."""
        if not path.exists():
            return cls.default()

        with open(path, 'r') as f:
            data = json.load(f)

        return cls(
            data=DataConfig(**data.get('data', {})),
            search=SearchConfig(**data.get('search', {})),
            toolkit=ToolkitConfig(**data.get('toolkit', {})),
            export=ExportConfig(**data.get('export', {})),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    def to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'data': asdict(self.data),
            'search': asdict(self.search),
            'toolkit': asdict(self.toolkit),
            'export': asdict(self.export),
            'logging': asdict(self.logging)
        }

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    def merge_env_vars(self) -> None:
        """Merge environment variables into configuration."""
        if os.getenv('TE_GENE_DB_DATA'):
            self.data.source = os.getenv('TE_GENE_DB_DATA')
        if os.getenv('TE_GENE_DB_PAGE_SIZE'):
            page_size = os.getenv('TE_GENE_DB_PAGE_SIZE')
            try:
                self.search.page_size = int(page_size)
            except ValueError:
                raise InvalidInput(f"TE_GENE_DB_PAGE_SIZE must be an integer, got {page_size!r}") from None
        if os.getenv('TE_GENE_DB_EXPORT_DIR'):
            self.export.directory = os.getenv('TE_GENE_DB_EXPORT_DIR')
        if os.getenv('TE_GENE_DB_LOG_LEVEL'):
            self.logging.level = os.getenv('TE_GENE_DB_LOG_LEVEL')

    def merge_cli_args(self, **kwargs) -> None:
        """Merge CLI arguments into configuration."""
        if kwargs.get('data'):
            self.data.source = kwargs['data']
        if kwargs.get('page_size'):
            self.search.page_size = kwargs['page_size']
        if kwargs.get('primer_length'):
            self.toolkit.primer_length = kwargs['primer_length']
        if kwargs.get('chunk_size'):
            self.toolkit.chunk_size = kwargs['chunk_size']
        if kwargs.get('output_dir'):
            self.export.directory = kwargs['output_dir']
        if kwargs.get('export_format'):
            self.export.format = kwargs['export_format']
        if kwargs.get('excel_compatible'):
            self.export.excel_compatible = True
        if kwargs.get('log_dir'):
            self.logging.log_dir = kwargs['log_dir']
        if kwargs.get('verbose'):
            self.logging.level = 'DEBUG'


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    locations = [
        Path.home() / '.te_gene_db' / 'config.json',
        Path.home() / '.config' / 'te_gene_db' / 'config.json',
        Path('.te_gene_db.json')
    ]

    for path in locations:
        if path.exists():
            return path

    return Path.home() / '.te_gene_db' / 'config.json'


def create_example_config(path: Optional[Path] = None) -> Path:
    """Create an example configuration file."""
    if path is None:
        path = Path('te_gene_db.config.example.json')

    config = Config.default()
    config.export.directory = "exports"
    config.logging.level = "INFO"

    config.to_file(path)
    return path
