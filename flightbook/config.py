"""
Configuration loading for the flight logbook tool.

Uses Python's built-in configparser (no extra dependencies).
Supports config.ini file with CLI argument overrides.
"""

import configparser
import os


DEFAULT_CONFIG = {
    'pilot': {
        'name': '',
    },
    'import': {
        'input_file': '',
        'format': 'auto',
        'column_mapping': '',
    },
    'files': {
        'store': './flights.json',
        'summary_output': './Page_Summary.xlsx',
    },
}

# Steps that work on the stored flight list rather than a spreadsheet
STORE_STEPS = ('assign', 'summary', 'export', 'status')


class Config:
    """Logbook configuration."""

    def __init__(self):
        self.pilot_name = ''
        self.input_file = ''
        self.input_format = 'auto'
        self.column_mapping = ''
        self.store = ''
        self.summary_output = ''

    @classmethod
    def from_file(cls, config_path):
        """Load configuration from an INI file.

        A missing file is not an error: defaults apply.

        Args:
            config_path: Path to the config.ini file.

        Returns:
            Config instance.
        """
        config = cls()
        parser = configparser.ConfigParser()

        for section, values in DEFAULT_CONFIG.items():
            parser[section] = values

        if os.path.exists(config_path):
            parser.read(config_path, encoding='utf-8')

        # Resolve paths relative to config file directory
        config_dir = os.path.dirname(os.path.abspath(config_path))

        config.pilot_name = parser.get('pilot', 'name', fallback='')
        config.input_format = parser.get('import', 'format', fallback='auto')

        for attr, section, key in [
            ('input_file', 'import', 'input_file'),
            ('column_mapping', 'import', 'column_mapping'),
            ('store', 'files', 'store'),
            ('summary_output', 'files', 'summary_output'),
        ]:
            val = parser.get(section, key, fallback='')
            if val and not os.path.isabs(val):
                val = os.path.join(config_dir, val)
            setattr(config, attr, val)

        return config

    def override(self, **kwargs):
        """Override config values from CLI arguments.

        Only overrides non-None values.
        """
        for key, value in kwargs.items():
            if value is not None and hasattr(self, key):
                setattr(self, key, value)

    def validate(self, step=None):
        """Validate that required files exist for the given step.

        Args:
            step: Step name, or None for import.

        Raises:
            FileNotFoundError: If a required file is missing.
        """
        if step in (None, 'import'):
            if not self.input_file:
                raise FileNotFoundError(
                    "No input file configured.\n"
                    "Set input_file in the [import] section or pass --input."
                )
            if not os.path.exists(self.input_file):
                raise FileNotFoundError(
                    f"Input file not found: {self.input_file}\n"
                    f"Check the file path in your config.ini."
                )
            if self.column_mapping and not os.path.exists(self.column_mapping):
                raise FileNotFoundError(
                    f"Column mapping file not found: {self.column_mapping}"
                )

        if step in STORE_STEPS:
            if not os.path.exists(self.store):
                raise FileNotFoundError(
                    f"Flight store not found: {self.store}\n"
                    f"Run the 'import' step first to create it."
                )

    def __repr__(self):
        return (
            f"Config(\n"
            f"  pilot_name='{self.pilot_name}',\n"
            f"  input_file='{self.input_file}',\n"
            f"  input_format='{self.input_format}',\n"
            f"  column_mapping='{self.column_mapping}',\n"
            f"  store='{self.store}',\n"
            f"  summary_output='{self.summary_output}',\n"
            f")"
        )
