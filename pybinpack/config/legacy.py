from collections import defaultdict

from traitlets.config import LoggingConfigurable
from traitlets.config.loader import Config


LEGACY_KEYWORDS = {
    # Application
    "LOGLEVEL": "PyBinPack.log_level",
    # Packing
    "ITEM_COUNT": "Packing.item_count",
    "BIN_CAPACITY": "Packing.bin_capacity",
    "BIN_SIZE": "Packing.bin_capacity",
    "ITEMS": "Packing.items",
    "BIN_LIMIT_MARGIN": "Packing.bin_limit_margin",
    # Generator
    "VALUE_MIN": "Generator.value_min",
    "VALUE_MAX": "Generator.value_max",
    "SEED": "Generator.seed",
    # Report
    "SHOW_NUMBERS": "Report.show_numbers",
    "JSON": "Report.json",
    "WIDTH": "Report.width",
}


def nested_dict_update(d: dict, key: str, value) -> None:
    root, *path, key = key.split(".")
    sub_dict = d[root]
    for part in path:
        if part not in sub_dict:
            sub_dict[part] = defaultdict(dict)
        sub_dict = sub_dict[part]
    sub_dict[key] = value


def convert_config(legacy_config: dict, logger: LoggingConfigurable) -> Config:
    d = defaultdict(dict)
    for key, value in legacy_config.items():
        key = key.upper()
        item = LEGACY_KEYWORDS.get(key)
        if item is None:
            logger.warning(f"Unknown keyword {key!r} in config file")
            continue
        if key == "LOGLEVEL" and isinstance(value, str):
            value = value.upper()
        nested_dict_update(d=d, key=item, value=value)
    return Config(d)
