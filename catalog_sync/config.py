import os
import configparser
import urllib.parse
from pathlib import Path

from catalog_sync.exceptions import ConfigError

DEFAULT_SETTINGS = {
    'DATABASE': {
        'engine': 'postgresql',
        'host': 'localhost',
        'port': '5432',
        'database': 'catalog',
        'username': 'postgres',
        'password': 'postgres',
        'echo': 'False',
        'pool_size': '10',
        'max_overflow': '20',
        'pool_timeout': '30',
        'pool_recycle': '1800'
    },
    'LOGGING': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'directory': 'logs',
        'max_size_mb': '10',
        'backup_count': '5',
        'console_output': 'True'
    },
    'CATALOG_UPDATE': {
        'store_id': '0',  # admin store scope for attribute values
        'isolate_parent_failures': 'False'
    }
}

class Config:
    """Settings for the catalog update system.

    Values come from ``config/settings.ini`` (or the file named by the
    ``CATALOG_SYNC_CONFIG`` environment variable) layered over
    ``DEFAULT_SETTINGS``. A missing file is created with the defaults.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config_path = Path(os.environ.get('CATALOG_SYNC_CONFIG', 'config/settings.ini'))
        self._config = configparser.ConfigParser(interpolation=None)
        self._config.read_dict(DEFAULT_SETTINGS)

        if self._config_path.exists():
            self._config.read(self._config_path)
        else:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, 'w') as settings_file:
                self._config.write(settings_file)

        self._initialized = True

    def get(self, section, key, default=None):
        """Get a setting as a string."""
        return self._config.get(section, key, fallback=default)

    def get_int(self, section, key, default=None):
        """Get a setting as an integer.

        Raises:
            ConfigError: If the setting is present but not an integer
        """
        try:
            return self._config.getint(section, key, fallback=default)
        except ValueError:
            raise ConfigError(f"Setting {section}.{key} must be an integer")

    def get_boolean(self, section, key, default=None):
        """Get a setting as a boolean.

        Raises:
            ConfigError: If the setting is present but not a boolean
        """
        try:
            return self._config.getboolean(section, key, fallback=default)
        except ValueError:
            raise ConfigError(f"Setting {section}.{key} must be true or false")

    def get_db_url(self):
        """Build the SQLAlchemy database URL.

        An explicit ``url`` in the DATABASE section wins over the
        individual connection settings.
        """
        url = self.get('DATABASE', 'url')
        if url:
            return url

        database = self._config['DATABASE']
        password = urllib.parse.quote_plus(database['password'])

        return (
            f"{database['engine']}://{database['username']}:{password}"
            f"@{database['host']}:{database['port']}/{database['database']}"
        )

    @property
    def log_config(self):
        """Logging settings."""
        return {
            'level': self.get('LOGGING', 'level'),
            'format': self.get('LOGGING', 'format'),
            'directory': self.get('LOGGING', 'directory'),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb'),
            'backup_count': self.get_int('LOGGING', 'backup_count'),
            'console_output': self.get_boolean('LOGGING', 'console_output')
        }

    @property
    def update_config(self):
        """Catalog update settings.

        Raises:
            ConfigError: If the store id is negative
        """
        store_id = self.get_int('CATALOG_UPDATE', 'store_id')
        if store_id < 0:
            raise ConfigError(f"CATALOG_UPDATE.store_id must not be negative, got {store_id}")

        return {
            'store_id': store_id,
            'isolate_parent_failures': self.get_boolean('CATALOG_UPDATE', 'isolate_parent_failures')
        }

# Global config instance
config = Config()
