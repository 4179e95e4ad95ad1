from pathlib import Path

import yaml

from .settings import PATH_TO_CONFIG

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

DEFAULTS = {
    'log_level': 'INFO',
    'log_file': None,         # file name under LOGS_DIR, no file logging if empty
    'encoding': 'utf-8',      # encoding of the SGF files read
    'board_size': 19,         # used when a game has no SZ property
    'suffix': '_normalized',  # appended to the file name by --normalize
}


def load_config(path_to_config=PATH_TO_CONFIG):
    """
    Read the 'config' mapping of a YAML file and merge it over [DEFAULTS].
    A missing file gives the defaults. Raises ValueError on unknown keys
    and on a log_level outside [LOG_LEVELS].
    """
    config = dict(DEFAULTS)
    path_to_config = Path(path_to_config)
    if not path_to_config.exists():
        return config

    with open(path_to_config, encoding='utf-8') as yaml_stream:
        yaml_data = yaml.safe_load(yaml_stream) or {}

    if not isinstance(yaml_data, dict):
        raise ValueError(f"{path_to_config}: expected a mapping at the top level.")
    overrides = yaml_data.get('config') or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"{path_to_config}: 'config' must be a mapping.")

    unknown = sorted(set(overrides) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"{path_to_config}: unknown settings {', '.join(unknown)}.")
    config.update(overrides)

    log_level = str(config['log_level']).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"{path_to_config}: log_level must be one of {', '.join(LOG_LEVELS)}.")
    config['log_level'] = log_level
    return config
