import copy
import os
import yaml

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(__file__), '..', '..', 'config.yaml')

DEFAULTS = {
    'channel': {'name': 'wifiInfo'},
    'provider': {'backend': 'auto', 'interface': 'wlan0', 'timeout_seconds': 5},
    'signal': {'num_levels': 100},
    'service': {'host': '127.0.0.1', 'port': 8080},
    'logging': {'level': 'INFO', 'file': None},
}


def load_config(path: str | None = None) -> dict:
    cfg_path = path or os.environ.get(
        'WIFIINFO_CONFIG') or DEFAULT_CONFIG_PATH
    cfg_path = os.path.abspath(os.path.expanduser(cfg_path))
    if not os.path.exists(cfg_path):
        return {}
    with open(cfg_path, 'r', encoding='utf-8') as fh:
        return yaml.safe_load(fh) or {}


def get_settings(cfg: dict | None = None) -> dict:
    """Overlay a loaded config on top of DEFAULTS, section by section."""
    settings = copy.deepcopy(DEFAULTS)
    for section, values in (cfg or {}).items():
        if isinstance(values, dict) and isinstance(settings.get(section), dict):
            settings[section].update(values)
        else:
            settings[section] = values
    return settings
